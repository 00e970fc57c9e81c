"""ディレクトリ階層規約の評価器。"""

from convention_checker.evaluators.base import Evaluator, SourceText
from convention_checker.models.record import FileRecord
from convention_checker.models.report import Violation
from convention_checker.models.rule import Rule, RuleCategory


class NestingEvaluator(Evaluator):
    """ResourceがClusters/<Domain>/Resources/配下に置かれているかをパスだけで検査する。"""

    category = RuleCategory.NESTING

    def check_rule(self, rule: Rule, record: FileRecord, source: SourceText) -> list[Violation]:
        if rule.check != "cluster-segment":
            return []
        if rule.regex.search(record.relative_path):
            return []
        return [self.violation(rule, record)]
