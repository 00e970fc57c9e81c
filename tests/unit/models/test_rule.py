"""Rule / RuleSet モデルのユニットテスト。"""

from typing import Any

import pytest
from pydantic import ValidationError

from convention_checker.models.rule import FileRole, Rule, RuleCategory, RuleSet, Severity


def _rule_data(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": "resource-naming",
        "category": "naming",
        "check": "class-name",
        "description": "Resource naming",
        "severity": "block",
        "target_roles": ["Resource"],
        "pattern": "[A-Z]\\w*Resource",
    }
    data.update(overrides)
    return data


class TestRule:
    def test_valid_rule(self) -> None:
        rule = Rule.model_validate(_rule_data())
        assert rule.category == RuleCategory.NAMING
        assert rule.severity == Severity.BLOCK
        assert rule.target_roles == (FileRole.RESOURCE,)
        assert rule.regex.fullmatch("OrderResource")

    def test_single_target_role_string(self) -> None:
        rule = Rule.model_validate(_rule_data(target_roles="Controller"))
        assert rule.target_roles == (FileRole.CONTROLLER,)

    def test_check_must_belong_to_category(self) -> None:
        with pytest.raises(ValidationError, match="not valid for category"):
            Rule.model_validate(_rule_data(check="closure-handler"))

    def test_invalid_regex(self) -> None:
        with pytest.raises(ValidationError, match="invalid regular expression"):
            Rule.model_validate(_rule_data(pattern="[unclosed"))

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Rule.model_validate(_rule_data(scope="everything"))

    def test_invalid_severity(self) -> None:
        with pytest.raises(ValidationError):
            Rule.model_validate(_rule_data(severity="error"))

    def test_rule_is_immutable(self) -> None:
        rule = Rule.model_validate(_rule_data())
        with pytest.raises(ValidationError):
            rule.severity = Severity.WARN  # type: ignore[misc]

    def test_applies_to_panels(self) -> None:
        rule = Rule.model_validate(
            _rule_data(
                id="tenant-leak",
                category="tenancy",
                check="unscoped-query",
                target_roles=["Resource", "Other"],
                panels=["App"],
                pattern="::all\\(",
            )
        )
        assert rule.applies_to(FileRole.RESOURCE, "App")
        assert not rule.applies_to(FileRole.RESOURCE, "Admin")
        assert not rule.applies_to(FileRole.RESOURCE, None)
        assert not rule.applies_to(FileRole.CONTROLLER, "App")


class TestRuleSet:
    def test_by_category_and_without(self) -> None:
        naming = Rule.model_validate(_rule_data())
        nesting = Rule.model_validate(
            _rule_data(id="flat-resource", category="nesting", check="cluster-segment", pattern="Clusters/")
        )
        rule_set = RuleSet(rules=(naming, nesting))

        assert rule_set.ids == ["resource-naming", "flat-resource"]
        assert rule_set.by_category(RuleCategory.NESTING) == [nesting]
        assert rule_set.by_category(RuleCategory.TENANCY) == []
        assert rule_set.without({"resource-naming"}).ids == ["flat-resource"]
        # 元のRuleSetは変更されない
        assert len(rule_set.rules) == 2
