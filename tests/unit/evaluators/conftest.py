"""評価器テスト用フィクスチャ。"""

from collections.abc import Callable
from pathlib import Path

import pytest

from convention_checker.evaluators.base import SourceText
from convention_checker.models.record import FileRecord
from convention_checker.walker.files import classify, extract_symbol

RecordFactory = Callable[[str, str], tuple[FileRecord, SourceText]]


@pytest.fixture
def make_record(tmp_path: Path) -> RecordFactory:
    """相対パスと内容からFileRecordとSourceTextを作成する。"""

    def _make(relative_path: str, content: str) -> tuple[FileRecord, SourceText]:
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        role, panel = classify(relative_path)
        record = FileRecord(
            path=path,
            relative_path=relative_path,
            role=role,
            symbol=extract_symbol(relative_path),
            panel=panel,
        )
        return record, SourceText(path, relative_path)

    return _make
