"""Convention Checkerのカスタム例外クラス。"""


class CheckerError(Exception):
    """Convention Checkerの基底例外クラス。"""


class ConfigError(CheckerError):
    """設定（ルール定義を含む）が不正な場合の例外。走査開始前に致命的エラーとして扱う。"""


class RuleParseError(ConfigError):
    """ルール定義ソースを解釈できない場合の例外。"""

    def __init__(self, origin: str, detail: str) -> None:
        super().__init__(f"Invalid rule source {origin}: {detail}")
        self.origin = origin
        self.detail = detail


class RootPathError(CheckerError):
    """検査対象のプロジェクトルートが存在しない、または読み取れない場合の例外。"""

    def __init__(self, root_path: str) -> None:
        super().__init__(f"Project root is not a readable directory: {root_path}")
        self.root_path = root_path


class UnanalyzableFileError(CheckerError):
    """ファイルを読み取れない・解析できない場合の例外。

    チェッカー内部で警告レベルの違反に変換され、呼び出し元には伝播しない。
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot analyze {path}: {reason}")
        self.path = path
        self.reason = reason
