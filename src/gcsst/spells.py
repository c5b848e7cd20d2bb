"""Spell generation: turn CSS declarations into spell tokens."""

from __future__ import annotations

import re
from typing import Protocol, Sequence

from gcsst.model import ContextFrame

# Quoted strings are matched first so whitespace inside them survives.
_WHITESPACE_RE = re.compile(r"""("(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')|\s+""", re.DOTALL)


def clean_value(value: str) -> str:
    """Strip a declaration value and collapse runs of whitespace to one space."""
    return _WHITESPACE_RE.sub(
        lambda m: " " if m.group(1) is None else m.group(1), value
    ).strip()


def render_prefix(contexts: Sequence[ContextFrame]) -> str:
    """Render context frames outermost first, e.g. ``{@media (hover)}{:focus}``."""
    return "".join(frame.render() for frame in contexts)


class SpellSyntax(Protocol):
    """A strategy that renders one declaration as a spell token."""

    def render(self, prop: str, value: str, contexts: Sequence[ContextFrame]) -> str: ...


class LongSyntax:
    """Long spell syntax: ``{context}property=value``."""

    def render(self, prop: str, value: str, contexts: Sequence[ContextFrame]) -> str:
        return f"{render_prefix(contexts)}{prop.strip()}={clean_value(value)}"


def generate(
    prop: str,
    value: str,
    contexts: Sequence[ContextFrame] = (),
    syntax: SpellSyntax | None = None,
) -> str:
    """Generate the spell token for one declaration under *contexts*."""
    return (syntax or LongSyntax()).render(prop, value, contexts)
