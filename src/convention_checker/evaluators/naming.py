"""命名規約の評価器。"""

import re
from collections.abc import Callable

from convention_checker.evaluators.base import Evaluator, SourceText
from convention_checker.evaluators.php import find_matching, string_argument
from convention_checker.models.record import FileRecord
from convention_checker.models.report import Violation
from convention_checker.models.rule import Rule, RuleCategory

# マイグレーション内でテーブル名を受け取る呼び出し
_TABLE_CALL_RE = re.compile(
    r"(?:Schema::(?:create|table|drop|dropIfExists|rename)|->(?:on|constrained))\s*\(\s*(['\"])"
)
_ROUTE_NAME_RE = re.compile(r"(?:->|Route::)name\s*(\()\s*(['\"])")
_GROUP_CALL_RE = re.compile(r"\s*->\s*group\s*\(")


class NamingEvaluator(Evaluator):
    """クラス名・テーブル名・ルート名の命名規約を検査する。"""

    category = RuleCategory.NAMING

    def check_rule(self, rule: Rule, record: FileRecord, source: SourceText) -> list[Violation]:
        if rule.check == "class-name":
            return self._check_class_name(rule, record)
        if rule.check == "table-name":
            return self._check_string_arguments(rule, record, source, _TABLE_CALL_RE, "table")
        if rule.check == "route-name":
            return self._check_string_arguments(
                rule, record, source, _ROUTE_NAME_RE, "route", skip=_is_group_name_prefix
            )
        return []

    def _check_class_name(self, rule: Rule, record: FileRecord) -> list[Violation]:
        if rule.regex.fullmatch(record.symbol):
            return []
        return [self.violation(rule, record, f"{rule.description}: '{record.symbol}'")]

    def _check_string_arguments(
        self,
        rule: Rule,
        record: FileRecord,
        source: SourceText,
        call_re: re.Pattern[str],
        kind: str,
        skip: Callable[[str, re.Match[str]], bool] | None = None,
    ) -> list[Violation]:
        violations: list[Violation] = []
        masked = source.masked
        for match in call_re.finditer(masked):
            if skip is not None and skip(masked, match):
                continue
            quote_index = match.end() - 1
            name = string_argument(source.text, masked, quote_index)
            # 変数展開を含む名前は静的に判定できないため対象外
            if name is None or "$" in name:
                continue
            if not rule.regex.fullmatch(name):
                violations.append(
                    self.violation(
                        rule,
                        record,
                        f"{rule.description}: {kind} name '{name}'",
                        line=source.lines.line_of(match.start()),
                    )
                )
        return violations


def _is_group_name_prefix(masked: str, match: re.Match[str]) -> bool:
    """``->name('admin.')->group(...)`` のようなグループのルート名プレフィックスか。"""
    close_index = find_matching(masked, match.start(1))
    return close_index != -1 and _GROUP_CALL_RE.match(masked, close_index + 1) is not None
