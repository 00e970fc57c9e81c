"""規約チェックのMCPツール定義。"""

from pathlib import Path
from typing import Any

from fastmcp import FastMCP

from convention_checker.models.errors import CheckerError
from convention_checker.services.checker import ConventionChecker


def register_check_tools(mcp: FastMCP, checker: ConventionChecker) -> None:
    """規約チェック関連のMCPツールを登録する。"""

    @mcp.tool()
    async def check_conventions(
        root_path: str,
        fail_fast: bool = False,
        disabled_rules: list[str] | None = None,
    ) -> dict[str, Any]:
        """Laravel/Filamentプロジェクトを規約に基づいて検査する。

        Clusters配下にないResource、ルート定義のクロージャ、テナントスコープ漏れ、
        命名規約違反などを検出し、違反リストと合否を返します。

        Args:
            root_path: プロジェクトルートの絶対パス。
            fail_fast: Trueの場合、最初のblock違反以降のファイルは検査しない。
            disabled_rules: 検査から除外するルールIDのリスト（任意）。
        """
        try:
            rules = checker.rules.without(set(disabled_rules or []))
            report = await checker.check(Path(root_path), fail_fast=fail_fast, rules=rules)
            return {
                **report.to_json(),
                "block_count": report.block_count,
                "warn_count": report.warn_count,
                "files_checked": report.files_checked,
                "stopped_early": report.stopped_early,
            }
        except CheckerError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def list_rules() -> dict[str, Any]:
        """読み込み済みの規約ルール一覧を取得する。"""
        return {
            "rules": [
                {
                    "id": rule.id,
                    "category": rule.category.value,
                    "severity": rule.severity.value,
                    "description": rule.description,
                    "target_roles": [role.value for role in rule.target_roles],
                    "recommendation": rule.recommendation,
                }
                for rule in checker.rules.rules
            ]
        }
