"""Convention Checkerの設定管理。"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

_PACKAGE_ROOT = Path(__file__).parent
_REPO_ROOT = _PACKAGE_ROOT.parent.parent


class CheckerConfig(BaseSettings):
    """チェッカー設定。環境変数から読み込み可能。"""

    model_config = {"env_prefix": "CONVENTION_CHECKER_"}

    config_dir: Path = _REPO_ROOT / "config"
    # 未指定時は config_dir / "rules.yaml"
    rules_path: Path | None = None
    max_workers: int = Field(default=8, ge=1)
    log_level: str = "WARNING"

    # MCPサーバー
    host: str = "127.0.0.1"
    port: int = 8000
    url_token: str = ""

    @property
    def resolved_rules_path(self) -> Path:
        return self.rules_path if self.rules_path is not None else self.config_dir / "rules.yaml"
