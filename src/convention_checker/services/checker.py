"""規約チェックの実行を統括するサービス。"""

import asyncio
from pathlib import Path

from loguru import logger

from convention_checker.evaluators.base import Evaluator, SourceText
from convention_checker.evaluators.naming import NamingEvaluator
from convention_checker.evaluators.nesting import NestingEvaluator
from convention_checker.evaluators.routing import RoutingEvaluator
from convention_checker.evaluators.tenancy import TenancyEvaluator
from convention_checker.models.errors import UnanalyzableFileError
from convention_checker.models.record import FileRecord
from convention_checker.models.report import UNANALYZABLE_RULE_ID, Report, Violation
from convention_checker.models.rule import FileRole, RuleCategory, RuleSet, Severity
from convention_checker.report.aggregator import aggregate
from convention_checker.walker.files import walk

_EVALUATOR_TYPES: tuple[type[Evaluator], ...] = (
    NamingEvaluator,
    NestingEvaluator,
    RoutingEvaluator,
    TenancyEvaluator,
)


class ConventionChecker:
    """プロジェクトツリーを走査し、全ルールを評価してレポートを作成する。

    ファイルごとの評価はスレッドで並行実行し、同時実行数はmax_workersで制限する。
    結果の集約はイベントループ上でのみ行う。
    """

    def __init__(self, rules: RuleSet, max_workers: int = 8) -> None:
        self._rules = rules
        self._max_workers = max(1, max_workers)

    @property
    def rules(self) -> RuleSet:
        return self._rules

    @staticmethod
    def build_evaluators(rules: RuleSet) -> list[Evaluator]:
        return [evaluator_type(rules) for evaluator_type in _EVALUATOR_TYPES]

    @staticmethod
    def check_file(record: FileRecord, evaluators: list[Evaluator]) -> list[Violation]:
        """1ファイル分の評価を行う。例外は送出せず、解析不能なファイルは警告違反として返す。"""
        if record.role == FileRole.UNREADABLE:
            return [_unanalyzable(record, RuleCategory.NESTING, "directory cannot be listed")]

        source = SourceText(record.path, record.relative_path)
        violations: list[Violation] = []
        for evaluator in evaluators:
            try:
                violations.extend(evaluator.evaluate(record, source))
            except UnanalyzableFileError as e:
                logger.warning("Skipping {}: {}", record.relative_path, e.reason)
                violations.append(_unanalyzable(record, evaluator.category, e.reason))
                break
        return violations

    async def check(
        self,
        root: Path,
        fail_fast: bool = False,
        rules: RuleSet | None = None,
    ) -> Report:
        """rootを検査し、レポートを返す。

        Args:
            root: Laravelプロジェクトのルートディレクトリ。
            fail_fast: Trueの場合、最初のblock違反以降は新しいファイルを投入しない。
                実行中の評価は完了させ、その結果もレポートに含める。
            rules: このチェックに限り使用するルール集合。Noneの場合は初期化時のルール。

        Raises:
            RootPathError: rootがディレクトリとして読み取れない場合。
        """
        evaluators = self.build_evaluators(rules if rules is not None else self._rules)
        records = await asyncio.to_thread(walk, root)

        collected: list[Violation] = []
        pending: set[asyncio.Task[list[Violation]]] = set()
        files_checked = 0
        exhausted = False
        stopped = False

        while True:
            while not stopped and not exhausted and len(pending) < self._max_workers:
                record = await asyncio.to_thread(next, records, None)
                if record is None:
                    exhausted = True
                    break
                logger.debug("Dispatching {} ({})", record.relative_path, record.role)
                pending.add(asyncio.create_task(asyncio.to_thread(self.check_file, record, evaluators)))

            if not pending:
                break

            done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
            for task in done:
                violations = task.result()
                files_checked += 1
                collected.extend(violations)
                if fail_fast and not stopped and any(v.severity == Severity.BLOCK for v in violations):
                    logger.debug("Fail-fast: block violation found, no further files will be dispatched")
                    stopped = True

        if stopped and not exhausted:
            # 未投入のレコードが残っているかを確認する
            exhausted = await asyncio.to_thread(next, records, None) is None

        return aggregate(collected, files_checked=files_checked, stopped_early=stopped and not exhausted)


def _unanalyzable(record: FileRecord, category: RuleCategory, reason: str) -> Violation:
    return Violation(
        rule_id=UNANALYZABLE_RULE_ID,
        category=category,
        severity=Severity.WARN,
        path=record.relative_path,
        message=f"Unanalyzable File: {reason}",
    )
