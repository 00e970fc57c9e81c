"""ルール評価器の共通基盤。"""

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import ClassVar

from convention_checker.evaluators.php import LineIndex, mask_source
from convention_checker.models.errors import UnanalyzableFileError
from convention_checker.models.record import FileRecord
from convention_checker.models.report import Violation
from convention_checker.models.rule import Rule, RuleCategory, RuleSet, Severity


class SourceText:
    """1ファイル分のソースを遅延読み込みする。

    同じレコードを複数の評価器が参照しても読み込みは1回だけ行う。
    """

    def __init__(self, path: Path, display_path: str) -> None:
        self._path = path
        self._display_path = display_path

    @cached_property
    def text(self) -> str:
        try:
            data = self._path.read_bytes()
        except OSError as e:
            raise UnanalyzableFileError(self._display_path, e.strerror or str(e)) from e
        if b"\x00" in data:
            raise UnanalyzableFileError(self._display_path, "binary content")
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise UnanalyzableFileError(self._display_path, "not valid UTF-8") from e

    @cached_property
    def masked(self) -> str:
        return mask_source(self.text)

    @cached_property
    def lines(self) -> LineIndex:
        return LineIndex(self.text)


class Evaluator(ABC):
    """1カテゴリ分のルールを評価する。

    サブクラスは ``category`` を宣言し、``check_rule`` で1ルール分の評価を実装する。
    """

    category: ClassVar[RuleCategory]

    def __init__(self, rules: RuleSet) -> None:
        self._rules = rules.by_category(self.category)

    @property
    def rules(self) -> list[Rule]:
        return self._rules

    def applicable_rules(self, record: FileRecord) -> list[Rule]:
        return [r for r in self._rules if r.applies_to(record.role, record.panel)]

    def evaluate(self, record: FileRecord, source: SourceText) -> list[Violation]:
        """レコードに適用されるルールをすべて評価し、違反を検出順に返す。

        Raises:
            UnanalyzableFileError: ソースの読み込みが必要なルールでファイルを読めない場合。
        """
        violations: list[Violation] = []
        for rule in self.applicable_rules(record):
            violations.extend(self.check_rule(rule, record, source))
        return violations

    @abstractmethod
    def check_rule(self, rule: Rule, record: FileRecord, source: SourceText) -> list[Violation]:
        """1ルールをレコードに適用する。"""

    def violation(
        self,
        rule: Rule,
        record: FileRecord,
        message: str | None = None,
        line: int | None = None,
        severity: Severity | None = None,
    ) -> Violation:
        return Violation(
            rule_id=rule.id,
            category=self.category,
            severity=severity or rule.severity,
            path=record.relative_path,
            line=line,
            message=message or rule.description,
        )
