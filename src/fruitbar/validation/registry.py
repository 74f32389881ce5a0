"""
fruitbar.validation.registry

Field-rule registry shared by full and partial validation.

Responsibilities:
- Map each wire field name of a resource to the attribute it reads and the rule that
  checks it.
- Validate a whole candidate ("every registered field") or a partial update
  ("exactly the selected fields") with the same rules.
- Parse the `fields=` query parameter into an ordered list of names.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from fruitbar.errors import ValidationError

Check = Callable[[Any], None]


@dataclass(frozen=True, slots=True)
class FieldRule:
    # `name` is the JSON/wire name used in `fields=`; `attr` is the Python attribute.
    name: str
    attr: str
    check: Check


class FieldRegistry:
    def __init__(self, resource: str, rules: Iterable[FieldRule]) -> None:
        self.resource = resource
        self._rules: dict[str, FieldRule] = {}
        for rule in rules:
            if rule.name in self._rules:
                raise ValueError(f"duplicate {resource} field rule: {rule.name}")
            self._rules[rule.name] = rule

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self._rules)

    def rule(self, name: str) -> FieldRule:
        try:
            return self._rules[name]
        except KeyError:
            raise ValidationError(f"field name is invalid: {name}", field=name) from None

    def attrs(self, fields: Iterable[str]) -> list[str]:
        """Python attribute names for the selected wire names (unknown names raise)."""

        return [self.rule(name).attr for name in fields]

    def validate_field(self, candidate: Any, name: str) -> None:
        rule = self.rule(name)
        rule.check(getattr(candidate, rule.attr, None))

    def validate_partial(self, candidate: Any, fields: Iterable[str]) -> None:
        # An empty selection checks nothing and succeeds.
        for name in fields:
            self.validate_field(candidate, name)

    def validate(self, candidate: Any) -> None:
        self.validate_partial(candidate, self.field_names)


def parse_fields_param(raw: str | None) -> list[str]:
    if raw is None:
        return []
    names = (part.strip() for part in raw.split(","))
    # de-dupe while keeping order
    return list(dict.fromkeys(name for name in names if name))


# --- Module Notes -----------------------------------------------------------
# Per-resource registries live in `validation.rules`.
