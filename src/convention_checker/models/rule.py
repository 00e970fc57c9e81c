"""ルール定義関連のデータモデル。"""

import re
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Severity(StrEnum):
    """違反の重大度。blockはチェック全体を失敗させ、warnは情報提供のみ。"""

    BLOCK = "block"
    WARN = "warn"


class RuleCategory(StrEnum):
    """ルールカテゴリ。定義順がレポートの並び順になる。"""

    NAMING = "naming"
    NESTING = "nesting"
    ROUTING = "routing"
    TENANCY = "tenancy"


class FileRole(StrEnum):
    """パスから推定したファイルの役割。"""

    RESOURCE = "Resource"
    FLAT_RESOURCE = "FlatResource"
    CONTROLLER = "Controller"
    WIDGET = "Widget"
    ROUTE_FILE = "RouteFile"
    VIEW = "View"
    MIGRATION = "Migration"
    OTHER = "Other"
    UNREADABLE = "Unreadable"


# カテゴリごとに許可される構造チェック
CATEGORY_CHECKS: dict[RuleCategory, frozenset[str]] = {
    RuleCategory.NAMING: frozenset({"class-name", "table-name", "route-name"}),
    RuleCategory.NESTING: frozenset({"cluster-segment"}),
    RuleCategory.ROUTING: frozenset({"closure-handler", "single-route-per-line"}),
    RuleCategory.TENANCY: frozenset({"unscoped-query"}),
}


class Rule(BaseModel):
    """規約ルール定義（YAMLから読み込み）。"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    category: RuleCategory
    check: str
    description: str
    severity: Severity
    target_roles: tuple[FileRole, ...] = Field(min_length=1)
    pattern: str
    exempt_pattern: str | None = None
    panels: tuple[str, ...] | None = None
    recommendation: str = ""

    @field_validator("target_roles", mode="before")
    @classmethod
    def _single_role(cls, value: Any) -> Any:
        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("pattern", "exempt_pattern")
    @classmethod
    def _compilable(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"invalid regular expression {value!r}: {e}") from e
        return value

    @model_validator(mode="after")
    def _check_belongs_to_category(self) -> "Rule":
        allowed = CATEGORY_CHECKS[self.category]
        if self.check not in allowed:
            raise ValueError(
                f"check '{self.check}' is not valid for category '{self.category}' "
                f"(expected one of: {', '.join(sorted(allowed))})"
            )
        return self

    @property
    def regex(self) -> re.Pattern[str]:
        return re.compile(self.pattern)

    @property
    def exempt_regex(self) -> re.Pattern[str] | None:
        if self.exempt_pattern is None:
            return None
        return re.compile(self.exempt_pattern)

    def applies_to(self, role: FileRole, panel: str | None) -> bool:
        """ファイルの役割とパネルがこのルールの対象か判定する。"""
        if role not in self.target_roles:
            return False
        if self.panels is not None and panel not in self.panels:
            return False
        return True


class RuleSet(BaseModel):
    """読み込み済みのルール集合。読み込み後は変更しない。"""

    model_config = ConfigDict(frozen=True)

    rules: tuple[Rule, ...] = ()

    @property
    def ids(self) -> list[str]:
        return [r.id for r in self.rules]

    def by_category(self, category: RuleCategory) -> list[Rule]:
        return [r for r in self.rules if r.category == category]

    def without(self, rule_ids: set[str]) -> "RuleSet":
        """指定IDのルールを除いた新しいRuleSetを返す。"""
        return RuleSet(rules=tuple(r for r in self.rules if r.id not in rule_ids))
