"""Selector model: simple, compound and complex selectors."""

from __future__ import annotations

from dataclasses import dataclass

# Components that describe a state of the element rather than the element itself.
STATE_KINDS = frozenset({"pseudo-class", "pseudo-element", "attribute"})


@dataclass(frozen=True)
class SimpleSelector:
    """One component of a compound selector.

    Kinds:
        type, universal, nesting (``&``), class, id,
        attribute, pseudo-class, pseudo-element
    """

    kind: str
    text: str  # as written, e.g. ".btn", ":hover", "[disabled]"
    value: str = ""  # unescaped class name for class selectors


@dataclass(frozen=True)
class CompoundSelector:
    """A run of simple selectors with no combinator between them, e.g. ``a.btn:hover``."""

    parts: tuple[SimpleSelector, ...]

    @property
    def classes(self) -> tuple[str, ...]:
        """Unique class names in source order."""
        seen: dict[str, None] = {}
        for part in self.parts:
            if part.kind == "class":
                seen.setdefault(part.value, None)
        return tuple(seen)

    @property
    def state_suffix(self) -> str:
        """Pseudo and attribute components joined in source order."""
        return "".join(p.text for p in self.parts if p.kind in STATE_KINDS)

    @property
    def is_state_only(self) -> bool:
        """True when the compound only refines its parent (``&:hover``, ``::before``)."""
        return all(p.kind in STATE_KINDS or p.kind == "nesting" for p in self.parts)

    def to_css(self, drop_nesting: bool = False) -> str:
        return "".join(
            p.text for p in self.parts if not (drop_nesting and p.kind == "nesting")
        )


@dataclass(frozen=True)
class ComplexSelector:
    """Compound selectors joined by combinators, e.g. ``.card > .title``.

    ``combinators[i]`` joins ``compounds[i]`` and ``compounds[i + 1]``; a
    descendant combinator is a single space.  ``leading`` holds the combinator
    of a relative selector (``> .child`` inside a nested block).
    """

    compounds: tuple[CompoundSelector, ...]
    combinators: tuple[str, ...] = ()
    leading: str = ""

    @property
    def is_state_only(self) -> bool:
        return not self.leading and len(self.compounds) == 1 and self.compounds[0].is_state_only

    def to_css(self, drop_nesting: bool = False) -> str:
        pieces: list[str] = [self.leading] if self.leading else []
        for i, compound in enumerate(self.compounds):
            if i:
                pieces.append(self.combinators[i - 1])
            text = compound.to_css(drop_nesting)
            if text:
                pieces.append(text)
        return "".join(pieces).strip()
