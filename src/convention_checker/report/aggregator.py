"""違反の集約とレポート生成。"""

from collections.abc import Iterable

from convention_checker.models.report import Report, Violation
from convention_checker.models.rule import RuleCategory, Severity

_CATEGORY_ORDER: dict[RuleCategory, int] = {c: i for i, c in enumerate(RuleCategory)}


def aggregate(
    violations: Iterable[Violation],
    files_checked: int = 0,
    stopped_early: bool = False,
) -> Report:
    """違反を決定的な順序に並べ、合否を判定したレポートを返す。

    並び順はファイルパス、ルールカテゴリ、検出順。sortedは安定ソートのため、
    同じパス・カテゴリ内では入力順（検出順）が保たれる。
    """
    ordered = sorted(violations, key=lambda v: (v.path, _CATEGORY_ORDER[v.category]))
    passed = not any(v.severity == Severity.BLOCK for v in ordered)
    return Report(
        violations=tuple(ordered),
        passed=passed,
        files_checked=files_checked,
        stopped_early=stopped_early,
    )
