"""プロジェクトツリーの走査とパスベースのファイル分類。"""

import os
from collections.abc import Iterator
from pathlib import Path, PurePosixPath

from loguru import logger

from convention_checker.models.errors import RootPathError
from convention_checker.models.record import FileRecord
from convention_checker.models.rule import FileRole

# 走査対象のルート（この順序で走査する）
RECOGNIZED_ROOTS: tuple[str, ...] = (
    "app/Filament",
    "app/Http/Controllers",
    "database/migrations",
    "resources/views",
    "routes",
)

# app/Filament 直下でパネル名として扱わないディレクトリ
_NON_PANEL_DIRS = frozenset({"Resources", "Clusters", "Widgets", "Pages"})

_BLADE_SUFFIX = ".blade.php"


def walk(root: Path) -> Iterator[FileRecord]:
    """プロジェクトルート配下の認識対象ファイルを分類しながら遅延列挙する。

    呼び出しごとに新しいジェネレータを返すため、同じツリーを何度でも走査できる。
    一覧取得に失敗したディレクトリは role=Unreadable のレコードとして返し、走査は継続する。

    Raises:
        RootPathError: rootがディレクトリとして読み取れない場合。
    """
    if not root.is_dir() or not os.access(root, os.R_OK | os.X_OK):
        raise RootPathError(str(root))
    return _walk(root)


def _walk(root: Path) -> Iterator[FileRecord]:
    for sub_root in RECOGNIZED_ROOTS:
        start = root / sub_root
        if not start.is_dir():
            continue
        yield from _walk_dir(root, start)


def _walk_dir(root: Path, directory: Path) -> Iterator[FileRecord]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.warning("Cannot list directory {}: {}", directory, e)
        yield FileRecord(
            path=directory,
            relative_path=_relative(root, directory),
            role=FileRole.UNREADABLE,
            symbol=directory.name,
        )
        return

    for entry in entries:
        path = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            yield from _walk_dir(root, path)
        elif entry.is_file():
            relative_path = _relative(root, path)
            role, panel = classify(relative_path)
            yield FileRecord(
                path=path,
                relative_path=relative_path,
                role=role,
                symbol=extract_symbol(relative_path),
                panel=panel,
            )


def _relative(root: Path, path: Path) -> str:
    return path.relative_to(root).as_posix()


def extract_symbol(relative_path: str) -> str:
    """パスからシンボル名（クラス名・ビュー名）を取り出す。"""
    name = PurePosixPath(relative_path).name
    if name.endswith(_BLADE_SUFFIX):
        return name[: -len(_BLADE_SUFFIX)]
    return PurePosixPath(name).stem


def classify(relative_path: str) -> tuple[FileRole, str | None]:
    """プロジェクトルートからの相対パスのみでファイルの役割とパネルを判定する。

    Returns:
        (役割, Filamentパネル名) のタプル。Filament配下以外はパネル名がNone。
    """
    parts = PurePosixPath(relative_path).parts
    is_php = relative_path.endswith(".php")

    if _under(parts, "routes"):
        return (FileRole.ROUTE_FILE if is_php else FileRole.OTHER), None
    if _under(parts, "app", "Http", "Controllers"):
        return (FileRole.CONTROLLER if is_php else FileRole.OTHER), None
    if _under(parts, "database", "migrations"):
        return (FileRole.MIGRATION if is_php else FileRole.OTHER), None
    if _under(parts, "resources", "views"):
        return (FileRole.VIEW if relative_path.endswith(_BLADE_SUFFIX) else FileRole.OTHER), None
    if _under(parts, "app", "Filament"):
        return _classify_filament(parts[2:], is_php)
    return FileRole.OTHER, None


def _classify_filament(parts: tuple[str, ...], is_php: bool) -> tuple[FileRole, str | None]:
    # parts は app/Filament/ 以降のパス要素
    panel = parts[0] if len(parts) > 1 and parts[0] not in _NON_PANEL_DIRS else None
    if not is_php:
        return FileRole.OTHER, panel

    dirs = parts[:-1]
    if dirs and dirs[-1] == "Resources":
        in_cluster = len(dirs) >= 3 and dirs[-3] == "Clusters"
        return (FileRole.RESOURCE if in_cluster else FileRole.FLAT_RESOURCE), panel
    if "Widgets" in dirs:
        return FileRole.WIDGET, panel
    return FileRole.OTHER, panel


def _under(parts: tuple[str, ...], *prefix: str) -> bool:
    return len(parts) > len(prefix) and parts[: len(prefix)] == prefix
