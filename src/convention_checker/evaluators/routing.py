"""ルート定義ファイルの評価器。"""

import re
from collections import Counter
from collections.abc import Iterator

from convention_checker.evaluators.base import Evaluator, SourceText
from convention_checker.evaluators.php import find_matching, find_opening
from convention_checker.models.record import FileRecord
from convention_checker.models.report import Violation
from convention_checker.models.rule import Rule, RuleCategory

# 無名関数・アロー関数リテラル
_CLOSURE_RE = re.compile(r"(?<![\w$>:])(?:static\s+)?(?:function|fn)\s*&?\s*\(")

_ROUTE_FACADES = frozenset({"Route", "Illuminate\\Support\\Facades\\Route"})


class RoutingEvaluator(Evaluator):
    """ルートハンドラのクロージャと、1行に複数のルート定義があるケースを検出する。

    ルール定義のパターンが ``->get(`` のようなメソッド呼び出しにも一致する場合、
    ``Route::middleware(...)->get(...)`` のように Route ファサードから始まる
    呼び出しチェーン上のものだけをルート定義として扱う。
    """

    category = RuleCategory.ROUTING

    def check_rule(self, rule: Rule, record: FileRecord, source: SourceText) -> list[Violation]:
        if rule.check == "closure-handler":
            return self._check_closures(rule, record, source)
        if rule.check == "single-route-per-line":
            return self._check_one_per_line(rule, record, source)
        return []

    def _check_closures(self, rule: Rule, record: FileRecord, source: SourceText) -> list[Violation]:
        masked = source.masked
        violations: list[Violation] = []
        for match in _route_tokens(rule, masked):
            open_index = match.end() - 1
            close_index = find_matching(masked, open_index)
            # 閉じ括弧がない場合はファイル末尾までを引数とみなす
            arguments = masked[open_index + 1 : close_index if close_index != -1 else len(masked)]
            if _CLOSURE_RE.search(arguments):
                line = source.lines.line_of(match.start())
                violations.append(self.violation(rule, record, line=line))
        return violations

    def _check_one_per_line(self, rule: Rule, record: FileRecord, source: SourceText) -> list[Violation]:
        counts = Counter(source.lines.line_of(m.start()) for m in _route_tokens(rule, source.masked))
        return [
            self.violation(rule, record, f"{rule.description} ({count} on this line)", line=line)
            for line, count in sorted(counts.items())
            if count > 1
        ]


def _route_tokens(rule: Rule, masked: str) -> Iterator[re.Match[str]]:
    for match in rule.regex.finditer(masked):
        if match.group(0).startswith("->") and not in_route_chain(masked, match.start()):
            continue
        yield match


def in_route_chain(masked: str, arrow_index: int) -> bool:
    """arrow_index位置の ``->`` が ``Route::xxx(...)->...`` の呼び出しチェーンに属するか判定する。"""
    i = arrow_index
    while True:
        i = _skip_space_back(masked, i)
        if i == 0 or masked[i - 1] != ")":
            return False
        open_index = find_opening(masked, i - 1)
        if open_index == -1:
            return False
        name_end = _skip_space_back(masked, open_index)
        name_start = _skip_name_back(masked, name_end)
        if name_start == name_end:
            return False
        i = _skip_space_back(masked, name_start)
        operator = masked[i - 2 : i] if i >= 2 else ""
        if operator == "->":
            i -= 2
            continue
        if operator == "::":
            class_end = i - 2
            class_start = _skip_name_back(masked, class_end)
            return masked[class_start:class_end].lstrip("\\") in _ROUTE_FACADES
        return False


def _skip_space_back(masked: str, index: int) -> int:
    while index > 0 and masked[index - 1].isspace():
        index -= 1
    return index


def _skip_name_back(masked: str, index: int) -> int:
    while index > 0 and (masked[index - 1].isalnum() or masked[index - 1] in "_\\"):
        index -= 1
    return index
