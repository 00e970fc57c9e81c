"""規約ルール定義の読み込み。"""

from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from convention_checker.models.errors import RuleParseError
from convention_checker.models.rule import Rule, RuleSet


def load_rules(source: Path) -> RuleSet:
    """ルール定義をYAMLファイル、またはYAMLファイルを含むディレクトリから読み込む。

    ディレクトリの場合は ``*.yaml`` をファイル名順に読み込み、1つのRuleSetに結合する。

    Args:
        source: ルール定義ファイルまたはディレクトリのパス。

    Returns:
        読み込んだルールの集合。

    Raises:
        RuleParseError: ソースが読み取れない、または定義が不正な場合。
    """
    if source.is_dir():
        files = sorted(source.glob("*.yaml"))
    elif source.is_file():
        files = [source]
    else:
        raise RuleParseError(str(source), "no such file or directory")

    rules: list[Rule] = []
    for rule_file in files:
        try:
            text = rule_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise RuleParseError(str(rule_file), str(e)) from e
        rules.extend(_parse_rule_list(text, str(rule_file)))

    rule_set = _build_rule_set(rules, str(source))
    logger.debug("Loaded {} rules from {}", len(rule_set.rules), source)
    return rule_set


def parse_rules(text: str, origin: str = "<string>") -> RuleSet:
    """YAMLテキストからルール定義を読み込む。"""
    return _build_rule_set(_parse_rule_list(text, origin), origin)


def _parse_rule_list(text: str, origin: str) -> list[Rule]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise RuleParseError(origin, f"YAML syntax error: {e}") from e

    if data is None:
        return []
    if not isinstance(data, dict) or not isinstance(data.get("rules"), list):
        raise RuleParseError(origin, "expected a mapping with a 'rules' list")

    rules: list[Rule] = []
    for index, rule_data in enumerate(data["rules"]):
        if not isinstance(rule_data, dict):
            raise RuleParseError(origin, f"rules[{index}] is not a mapping")
        try:
            rules.append(Rule.model_validate(rule_data))
        except ValidationError as e:
            rule_id = rule_data.get("id", index)
            raise RuleParseError(origin, f"rule {rule_id}: {_summarize(e)}") from e
    return rules


def _build_rule_set(rules: list[Rule], origin: str) -> RuleSet:
    seen: set[str] = set()
    for rule in rules:
        if rule.id in seen:
            raise RuleParseError(origin, f"duplicate rule id: {rule.id}")
        seen.add(rule.id)
    return RuleSet(rules=tuple(rules))


def _summarize(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item["loc"]) or "rule"
        parts.append(f"{loc}: {item['msg']}")
    return "; ".join(parts)
