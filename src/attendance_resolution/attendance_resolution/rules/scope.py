"""Scope expressions of special rules.

Grammar: ``all`` | ``dept:<v>[,<v>...]`` | ``sector:<v>[,<v>...]`` |
``emp:<code>[,<code>...]``. Expressions are parsed once into a ``ScopeSpec``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from ..common.codes import normalize_emp_code
from ..core.enums import ScopeKind
from ..employees.model import Employee

_PREFIXES = (
    ("emp:", ScopeKind.EMP),
    ("dept:", ScopeKind.DEPT),
    ("sector:", ScopeKind.SECTOR),
)


@dataclass(frozen=True)
class ScopeSpec:
    kind: ScopeKind
    values: Tuple[str, ...] = ()

    def contains(self, employee: Employee) -> bool:
        if self.kind == ScopeKind.ALL:
            return True
        if self.kind == ScopeKind.EMP:
            return employee.normalized_code in self.values
        if self.kind == ScopeKind.DEPT:
            return (employee.department or "") in self.values
        if self.kind == ScopeKind.SECTOR:
            return (employee.sector or "") in self.values
        return False


ALL_SCOPE = ScopeSpec(kind=ScopeKind.ALL)


def _split_values(raw: str) -> List[str]:
    return [v.strip() for v in raw.split(",") if v.strip()]


def _dedupe(values: Iterable[str]) -> Tuple[str, ...]:
    seen: List[str] = []
    for v in values:
        if v and v not in seen:
            seen.append(v)
    return tuple(seen)


def _recognized_prefix(scope: str) -> Optional[Tuple[str, ScopeKind]]:
    for prefix, kind in _PREFIXES:
        if scope.startswith(prefix):
            return prefix, kind
    return None


def parse_rule_scope(scope: Optional[str]) -> ScopeSpec:
    """Parse a scope expression; empty, ``all`` and unknown forms give ``ALL``."""

    text = (scope or "").strip()
    if not text or text == ScopeKind.ALL.value:
        return ALL_SCOPE

    recognized = _recognized_prefix(text)
    if recognized is None:
        return ALL_SCOPE

    prefix, kind = recognized
    values = _split_values(text[len(prefix):])
    if kind == ScopeKind.EMP:
        values = [normalize_emp_code(v) for v in values]
    return ScopeSpec(kind=kind, values=_dedupe(values))


def build_emp_scope(codes: Iterable[str]) -> str:
    normalized = _dedupe(normalize_emp_code(c) for c in codes)
    return f"emp:{','.join(normalized)}"


class ScopeResolver:
    """Matches rule scopes against employees, caching parsed specs per rule."""

    def __init__(self) -> None:
        self._cache: Dict[Tuple[object, str], ScopeSpec] = {}

    def spec_for(self, scope: Optional[str], *, rule_id: object = None) -> ScopeSpec:
        key = (rule_id, scope or "")
        spec = self._cache.get(key)
        if spec is None:
            spec = parse_rule_scope(scope)
            self._cache[key] = spec
        return spec

    def matches(self, scope: Optional[str], employee: Employee, *, rule_id: object = None) -> bool:
        text = (scope or "").strip()
        if not text or text == ScopeKind.ALL.value:
            return True
        # A non-empty expression without a known prefix selects nobody.
        if _recognized_prefix(text) is None:
            return False
        return self.spec_for(text, rule_id=rule_id).contains(employee)
