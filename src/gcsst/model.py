"""Transmutation model: context frames, style rules, and class entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from gcsst.selectors.model import ComplexSelector


@dataclass(frozen=True)
class MediaQuery:
    """A ``@media`` block enclosing a rule, e.g. ``(max-width: 600px)``."""

    condition: str

    def render(self) -> str:
        return "{@media " + self.condition + "}"


@dataclass(frozen=True)
class PseudoState:
    """A pseudo-class, pseudo-element or attribute suffix, e.g. ``:focus``."""

    suffix: str

    def render(self) -> str:
        return "{" + self.suffix + "}"


ContextFrame = Union[MediaQuery, PseudoState]


@dataclass(frozen=True)
class Declaration:
    """A single ``property: value`` pair from a declaration block."""

    property: str
    value: str

    def __str__(self) -> str:
        return f"{self.property}: {self.value};"


@dataclass(frozen=True)
class StyleRule:
    """A parsed CSS rule with the context frames it is nested under.

    Attributes:
        selector: Normalized selector list text, e.g. ``.btn:focus, .link``.
        declarations: Declarations in source order.
        contexts: Enclosing frames, outermost first.
        line: Source line of the rule, when known.
        selector_depth: How many leading contexts enclose the selector itself.
            Frames after them come from blocks nested inside the rule.
            None means all of them.
        selectors: The parsed form of *selector*, when the parser has it.
    """

    selector: str
    declarations: tuple[Declaration, ...] = ()
    contexts: tuple[ContextFrame, ...] = ()
    line: int | None = None
    selector_depth: int | None = field(default=None, compare=False)
    selectors: tuple[ComplexSelector, ...] = field(default=(), compare=False, repr=False)


@dataclass(frozen=True)
class ClassEntry:
    """All spells collected for one class name."""

    name: str
    spells: tuple[str, ...] = ()
    oneliner: str | None = None

    def to_dict(self, with_oneliner: bool = False) -> dict[str, object]:
        data: dict[str, object] = {"name": self.name, "spells": list(self.spells)}
        if with_oneliner:
            data["oneliner"] = self.oneliner or ""
        return data


@dataclass(frozen=True)
class TransmuteResult:
    """Outcome of one transmutation: ordered class entries and elapsed seconds."""

    classes: list[ClassEntry] = field(default_factory=list)
    duration: float = 0.0

    def get(self, name: str) -> ClassEntry | None:
        for entry in self.classes:
            if entry.name == name:
                return entry
        return None

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self.classes]
