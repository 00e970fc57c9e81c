"""レポートの出力フォーマット。"""

import json

from convention_checker.models.report import Report, Violation

OUTPUT_FORMATS: tuple[str, ...] = ("text", "json")


def format_violation(violation: Violation) -> str:
    """`<path>:<line>: [<severity>] <rule-id>: <message>` 形式の1行を返す。"""
    location = f"{violation.path}:{violation.line}:" if violation.line is not None else f"{violation.path}:"
    return f"{location} [{violation.severity.value}] {violation.rule_id}: {violation.message}"


def format_text(report: Report) -> str:
    return "\n".join(format_violation(v) for v in report.violations)


def format_json(report: Report) -> str:
    # キー順を固定し、同じツリーに対する出力をバイト単位で一致させる
    return json.dumps(report.to_json(), indent=2, ensure_ascii=False)


def format_report(report: Report, output_format: str) -> str:
    if output_format == "json":
        return format_json(report)
    if output_format == "text":
        return format_text(report)
    raise ValueError(f"Unknown output format: {output_format}")
