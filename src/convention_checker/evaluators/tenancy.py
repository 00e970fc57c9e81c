"""テナントスコープ規約の評価器。"""

import re

from convention_checker.evaluators.base import Evaluator, SourceText
from convention_checker.evaluators.php import method_bodies
from convention_checker.models.record import FileRecord
from convention_checker.models.report import Violation
from convention_checker.models.rule import Rule, RuleCategory, Severity

_MODELS_NAMESPACE = "App\\Models\\"
_USE_RE = re.compile(r"^\s*use\s+\\?([\w\\]+)(?:\s+as\s+(\w+))?\s*;", re.MULTILINE)


class TenancyEvaluator(Evaluator):
    """テナントパネル内でスコープなしのクエリを呼んでいるメソッドを検出する。

    パターンに一致した呼び出しについて、同じメソッド本体にテナントスコープ呼び出し
    （exempt_pattern）があれば問題なしとする。シンボルが App\\Models のモデルと
    静的に解決できればルールの重大度で、解決できなければ warn で報告する。
    """

    category = RuleCategory.TENANCY

    def check_rule(self, rule: Rule, record: FileRecord, source: SourceText) -> list[Violation]:
        if rule.check != "unscoped-query":
            return []

        masked = source.masked
        models = _imported_models(masked)
        exempt = rule.exempt_regex
        violations: list[Violation] = []
        # 無名クラスのメソッドは外側のメソッド本体にも含まれるため、同じ呼び出しは1回だけ報告する
        reported: set[int] = set()

        for body in method_bodies(masked):
            body_text = source.text[body.start : body.end]
            if exempt is not None and exempt.search(body_text):
                continue
            for match in rule.regex.finditer(masked, body.start, body.end):
                if match.start() in reported:
                    continue
                reported.add(match.start())
                symbol = _symbol(match)
                method = match.groupdict().get("method") or "query"
                line = source.lines.line_of(match.start())
                if _is_model(symbol, models):
                    violations.append(
                        self.violation(
                            rule,
                            record,
                            f"{rule.description}: {symbol}::{method}() in {body.name}() without tenant scope",
                            line=line,
                        )
                    )
                else:
                    violations.append(
                        self.violation(
                            rule,
                            record,
                            f"Possible tenant leak: cannot resolve '{symbol}' statically "
                            f"({symbol}::{method}() in {body.name}())",
                            line=line,
                            severity=Severity.WARN,
                        )
                    )
        return violations


def _symbol(match: re.Match[str]) -> str:
    groups = match.groupdict()
    if groups.get("model"):
        return groups["model"]
    return match.group(0).split("::", 1)[0].strip()


def _imported_models(masked: str) -> dict[str, str]:
    """`use App\\Models\\...;` で取り込まれたモデルの短縮名 → 完全修飾名。"""
    models: dict[str, str] = {}
    for match in _USE_RE.finditer(masked):
        fqcn, alias = match.group(1), match.group(2)
        if fqcn.startswith(_MODELS_NAMESPACE):
            models[alias or fqcn.rsplit("\\", 1)[-1]] = fqcn
    return models


def _is_model(symbol: str, models: dict[str, str]) -> bool:
    if symbol.lstrip("\\").startswith(_MODELS_NAMESPACE):
        return True
    return symbol in models
