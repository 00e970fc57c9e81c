"""走査対象ファイルのデータモデル。"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from convention_checker.models.rule import FileRole


class FileRecord(BaseModel):
    """走査中に1ファイルごとに生成される分類済みレコード。"""

    model_config = ConfigDict(frozen=True)

    path: Path
    relative_path: str
    role: FileRole
    symbol: str
    panel: str | None = None
