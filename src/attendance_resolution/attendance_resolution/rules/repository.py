from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SpecialRule


class RuleRepository(Protocol):
    def list_all(self) -> Sequence[SpecialRule]:
        raise NotImplementedError

    def get(self, rule_id: int) -> Optional[SpecialRule]:
        raise NotImplementedError

    def create_many(self, rules: Sequence[SpecialRule]) -> Sequence[SpecialRule]:
        raise NotImplementedError

    def update(self, rule: SpecialRule) -> bool:
        raise NotImplementedError

    def delete(self, rule_id: int) -> bool:
        raise NotImplementedError
