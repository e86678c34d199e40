from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Union


@dataclass(slots=True)
class ValidationResult:
    """
    Outcome of validating a whole value set.

    - ok: False as soon as any field fails; the form must not submit.
    - field_errors: first failing message per field (English only).
    """
    ok: bool = True
    field_errors: Dict[str, str] = field(default_factory=dict)

    def add_field_error(self, field_name: str, message: str) -> None:
        if field_name and message:
            self.field_errors[field_name] = message
            self.ok = False

    def error_for(self, field_name: str) -> Optional[str]:
        return self.field_errors.get(field_name)


# ---------------------------------------------------------------------
# Rule kinds
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class Required:
    message: str
    strip: bool = False


@dataclass(frozen=True)
class MinLength:
    length: int
    message: str


@dataclass(frozen=True)
class MaxLength:
    length: int
    message: str


@dataclass(frozen=True)
class NotBlank:
    message: str


@dataclass(frozen=True)
class Pattern:
    pattern: "re.Pattern[str]"
    message: str


@dataclass(frozen=True)
class Predicate:
    """Named test over the value and the full value set."""
    name: str
    check: Callable[[str, Mapping[str, str]], bool]
    message: str


Rule = Union[Required, MinLength, MaxLength, NotBlank, Pattern, Predicate]


@dataclass(frozen=True)
class FieldRules:
    """
    Ordered rule list for one field.

    transform is applied to the raw value before any rule runs
    (e.g. str.strip for email input).
    """
    rules: Sequence[Rule] = ()
    transform: Optional[Callable[[str], str]] = None


Schema = Mapping[str, FieldRules]


def rule_passes(rule: Rule, value: str, all_values: Mapping[str, str]) -> bool:
    if isinstance(rule, Required):
        return (value.strip() if rule.strip else value) != ""
    if isinstance(rule, MinLength):
        return len(value) >= rule.length
    if isinstance(rule, MaxLength):
        return len(value) <= rule.length
    if isinstance(rule, NotBlank):
        return value.strip() != ""
    if isinstance(rule, Pattern):
        return rule.pattern.search(value) is not None
    if isinstance(rule, Predicate):
        return bool(rule.check(value, all_values))
    raise TypeError(f"Unsupported rule: {rule!r}")


def _ordered(rules: Sequence[Rule]) -> List[Rule]:
    # Required always runs first; the rest keep declaration order.
    required = [r for r in rules if isinstance(r, Required)]
    others = [r for r in rules if not isinstance(r, Required)]
    return required + others


def validate(
    schema: Schema,
    field_name: str,
    value: Optional[str],
    all_values: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    """
    Return the first failing rule's message for field_name, or None.

    Fields missing from the schema have no rules and always pass.
    """
    field_rules = schema.get(field_name)
    if field_rules is None:
        return None

    v = "" if value is None else str(value)
    if field_rules.transform is not None:
        v = field_rules.transform(v)

    values = all_values if all_values is not None else {field_name: v}
    for rule in _ordered(field_rules.rules):
        if not rule_passes(rule, v, values):
            return rule.message
    return None


def validate_values(schema: Schema, values: Mapping[str, str]) -> ValidationResult:
    r = ValidationResult()
    for field_name in schema:
        message = validate(schema, field_name, values.get(field_name, ""), values)
        if message:
            r.add_field_error(field_name, message)
    return r


from .task_rules import TASK_SCHEMA
from .credential_rules import CREDENTIALS_SCHEMA
