"""FastMCPベースのMCPサーバーエントリポイント。"""

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from convention_checker.config import CheckerConfig
from convention_checker.registry.rules import load_rules
from convention_checker.resources.rules import register_rule_resources
from convention_checker.services.checker import ConventionChecker
from convention_checker.tools.check import register_check_tools


def create_server(config: CheckerConfig | None = None) -> FastMCP:
    """Convention Checker MCPサーバーを作成し、ツール・リソースを登録する。

    ルール定義はサーバー作成時に1回だけ読み込み、以降は読み取り専用で共有する。

    Args:
        config: チェッカー設定。Noneの場合はデフォルト設定を使用。

    Returns:
        設定済みのFastMCPインスタンス。

    Raises:
        ConfigError: ルール定義が不正な場合。
    """
    if config is None:
        config = CheckerConfig()

    mcp = FastMCP("convention-checker")

    rules = load_rules(config.resolved_rules_path)
    checker = ConventionChecker(rules, max_workers=config.max_workers)

    register_check_tools(mcp, checker)
    register_rule_resources(mcp, rules)

    # ヘルスチェックエンドポイント
    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "rules": len(rules.rules)})

    return mcp
