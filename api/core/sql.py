"""
SQL fragment builders for partial updates and query-string filters.

Both builders return a clause plus the ordered list of values it references,
ready to be passed to `core.db` as positional args:

    set_clause, values = build_update({"numEmployees": 10}, COMPANY_FIELDS)
    # "num_employees = $1", [10]

    where, values = build_filter({"name": "net", "minEmps": "5"}, COMPANY_FILTERS)
    # "name ILIKE $1 AND num_employees >= $2", ["%net%", 5]

Caller-supplied values only ever travel as bind parameters. Column names
come from the per-resource FieldMap / FilterSpec and are checked to be plain
identifiers before they reach the SQL text.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .errors import BadRequestError

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

CONTAINS = "contains"
MIN = "min"
MAX = "max"
FLAG = "flag"
FILTER_OPS = frozenset({CONTAINS, MIN, MAX, FLAG})

# Postgres `integer` range.
INT4_MIN = -2_147_483_648
INT4_MAX = 2_147_483_647


def _column(name: str) -> str:
    if not _IDENTIFIER_RE.match(name or ""):
        raise BadRequestError(f"Invalid field name: {name!r}")
    return name


@dataclass(frozen=True)
class FieldMap:
    """
    External (JSON) field name -> storage column name.

    Names without an entry map to themselves.
    """

    columns: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", MappingProxyType(dict(self.columns)))

    def translate(self, name: str) -> str:
        return self.columns.get(name, name)


def next_placeholder(values: list[Any]) -> str:
    """Placeholder for the first arg appended after `values` (e.g. the WHERE id)."""
    return f"${len(values) + 1}"


def build_update(fields: Mapping[str, Any], field_map: FieldMap) -> tuple[str, list[Any]]:
    """
    Build the SET clause of a partial update.

    `fields` is {externalName: newValue, ...}; only the given keys are
    assigned, in iteration order. None is bound as NULL (explicit clear).
    The caller appends its identity arg at `next_placeholder(values)`.

    Raises BadRequestError when `fields` is empty.
    """
    if not fields:
        raise BadRequestError("No data")

    assignments: list[str] = []
    values: list[Any] = []
    for name, value in fields.items():
        values.append(value)
        assignments.append(f"{_column(field_map.translate(name))} = ${len(values)}")

    return ", ".join(assignments), values


@dataclass(frozen=True)
class FilterRule:
    key: str
    column: str
    op: str

    def __post_init__(self) -> None:
        if self.op not in FILTER_OPS:
            raise ValueError(f"Unknown filter op {self.op!r} for {self.key!r}.")
        if not _IDENTIFIER_RE.match(self.column or ""):
            raise ValueError(f"Invalid column {self.column!r} for {self.key!r}.")


@dataclass(frozen=True)
class FilterSpec:
    """
    The filters one resource accepts on its list endpoint.

    `rules` order is also the order acceptable keys are reported in errors.
    """

    resource: str
    rules: tuple[FilterRule, ...]

    def keys(self) -> tuple[str, ...]:
        return tuple(rule.key for rule in self.rules)

    def rule(self, key: str) -> FilterRule | None:
        for rule in self.rules:
            if rule.key == key:
                return rule
        return None


def validate_filter_keys(params: Mapping[str, Any], spec: FilterSpec) -> None:
    """
    Reject any key `spec` does not list.

    Raises BadRequestError naming the acceptable keys.
    """
    unknown = [key for key in params if spec.rule(key) is None]
    if unknown:
        raise BadRequestError(
            f"Invalid {spec.resource} filter(s): {', '.join(unknown)}. "
            f"Acceptable filters: {', '.join(spec.keys())}."
        )


def _escape_like(value: str) -> str:
    # Backslash is Postgres' default LIKE escape character.
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _to_int(key: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise BadRequestError(f"'{key}' must be an integer.")
    if isinstance(raw, int):
        value = raw
    else:
        try:
            value = int(str(raw).strip())
        except ValueError as exc:
            raise BadRequestError(f"'{key}' must be an integer.") from exc
    if not INT4_MIN <= value <= INT4_MAX:
        raise BadRequestError(f"'{key}' is out of range.")
    return value


def _coerce(rule: FilterRule, raw: Any) -> Any:
    if rule.op == CONTAINS:
        text = str(raw if raw is not None else "").strip()
        if not text:
            raise BadRequestError(f"'{rule.key}' must not be empty.")
        return text
    if rule.op in (MIN, MAX):
        return _to_int(rule.key, raw)
    # FLAG: only the key's presence matters.
    return None


def _check_ranges(spec: FilterSpec, coerced: Mapping[str, Any]) -> None:
    for low in spec.rules:
        if low.op != MIN or low.key not in coerced:
            continue
        for high in spec.rules:
            if high.op != MAX or high.column != low.column or high.key not in coerced:
                continue
            if coerced[low.key] > coerced[high.key]:
                raise BadRequestError(f"{low.key} cannot be greater than {high.key}.")


def build_filter(params: Mapping[str, Any], spec: FilterSpec) -> tuple[str, list[Any]]:
    """
    Build a WHERE predicate (without the keyword) from query-string params.

    Clauses follow `params` iteration order and are AND-ed together.
    Returns ("", []) when `params` is empty.

    Raises BadRequestError for unknown keys, empty search text, non-integer
    bounds, or a minimum greater than its maximum.
    """
    validate_filter_keys(params, spec)
    if not params:
        return "", []

    # Every key has a rule once validate_filter_keys() passed.
    rules = {key: spec.rule(key) for key in params}
    coerced = {key: _coerce(rules[key], raw) for key, raw in params.items()}

    _check_ranges(spec, coerced)

    clauses: list[str] = []
    values: list[Any] = []

    def bind(value: Any) -> str:
        values.append(value)
        return f"${len(values)}"

    for key, value in coerced.items():
        rule = rules[key]
        if rule.op == CONTAINS:
            clauses.append(f"{rule.column} ILIKE {bind(f'%{_escape_like(value)}%')}")
        elif rule.op == MIN:
            clauses.append(f"{rule.column} >= {bind(value)}")
        elif rule.op == MAX:
            clauses.append(f"{rule.column} <= {bind(value)}")
        else:
            clauses.append(f"{rule.column} > 0")

    return " AND ".join(clauses), values
