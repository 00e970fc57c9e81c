"""規約ルールのMCPリソース定義。"""

import yaml
from fastmcp import FastMCP

from convention_checker.models.rule import RuleSet


def register_rule_resources(mcp: FastMCP, rules: RuleSet) -> None:
    """規約ルール関連のMCPリソースを登録する。"""

    @mcp.resource("convention-checker://rules")
    async def convention_rules() -> str:
        """規約ルール定義を取得する。

        チェックに使用される読み込み済みルールを、ルール定義ファイルと同じYAML形式で返します。
        """
        data = {"rules": [rule.model_dump(mode="json", exclude_none=True) for rule in rules.rules]}
        return yaml.dump(data, allow_unicode=True, default_flow_style=False, sort_keys=False)
