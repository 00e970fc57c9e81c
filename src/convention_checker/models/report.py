"""違反とレポートのデータモデル。"""

from typing import Any

from pydantic import BaseModel, ConfigDict

from convention_checker.models.rule import RuleCategory, Severity

UNANALYZABLE_RULE_ID = "unanalyzable-file"


class Violation(BaseModel):
    """評価器が検出した1件の規約違反。生成後は変更しない。"""

    model_config = ConfigDict(frozen=True)

    rule_id: str
    category: RuleCategory
    severity: Severity
    path: str
    line: int | None = None
    message: str

    def to_json(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "line": self.line,
            "severity": self.severity.value,
            "ruleId": self.rule_id,
            "message": self.message,
        }


class Report(BaseModel):
    """1回の実行の最終結果。"""

    model_config = ConfigDict(frozen=True)

    violations: tuple[Violation, ...] = ()
    passed: bool = True
    files_checked: int = 0
    stopped_early: bool = False

    @property
    def block_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == Severity.BLOCK)

    @property
    def warn_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == Severity.WARN)

    def to_json(self) -> dict[str, Any]:
        return {
            "pass": self.passed,
            "violations": [v.to_json() for v in self.violations],
        }
