"""Aggregation of spell tokens per class name, in first-seen order."""

from __future__ import annotations

from typing import Callable, Iterable

from gcsst.model import ClassEntry, StyleRule


class Aggregator:
    """Ordered class -> spells accumulator.

    Both the class order and the token order inside each class follow first
    occurrence; adding a token a class already holds is a no-op.
    """

    def __init__(self) -> None:
        # dicts double as insertion-ordered sets
        self._spells: dict[str, dict[str, None]] = {}
        self._rules: dict[str, list[StyleRule]] = {}

    def touch(self, name: str) -> None:
        """Register *name* even if it never receives a spell."""
        self._spells.setdefault(name, {})

    def add(self, name: str, token: str) -> None:
        self.touch(name)
        self._spells[name].setdefault(token, None)

    def add_rule(self, name: str, rule: StyleRule) -> None:
        """Record *rule* as a contributor to *name* (once per rule object)."""
        self.touch(name)
        rules = self._rules.setdefault(name, [])
        if not any(existing is rule for existing in rules):
            rules.append(rule)

    def spells(self, name: str) -> list[str]:
        return list(self._spells.get(name, {}))

    def rules(self, name: str) -> list[StyleRule]:
        return list(self._rules.get(name, []))

    def entries(
        self, oneliner: Callable[[str, list[StyleRule]], str] | None = None
    ) -> list[ClassEntry]:
        """Build ClassEntries; *oneliner* is called per class when given."""
        return [
            ClassEntry(
                name=name,
                spells=tuple(tokens),
                oneliner=oneliner(name, self.rules(name)) if oneliner else None,
            )
            for name, tokens in self._spells.items()
        ]


def aggregate(pairs: Iterable[tuple[str, str]]) -> list[ClassEntry]:
    """Group ``(class_name, token)`` pairs into ordered, de-duplicated ClassEntries."""
    aggregator = Aggregator()
    for name, token in pairs:
        aggregator.add(name, token)
    return aggregator.entries()
