"""Lark-based parser that turns a selector prelude into selector objects."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError, UnexpectedInput

from gcsst.errors import ParseError
from gcsst.selectors.model import ComplexSelector, CompoundSelector, SimpleSelector

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

SelectorList = tuple[ComplexSelector, ...]

# Literal tokens that never need whitespace around them.
_SEPARATORS = frozenset({",", ">", "+", "~"})

_ESCAPE_RE = re.compile(r"\\(?:([0-9a-fA-F]{1,6}) ?|(.))", re.DOTALL)


def unescape(ident: str) -> str:
    """Resolve CSS escapes in an identifier (``md\\:flex`` -> ``md:flex``)."""

    def _replace(match: re.Match[str]) -> str:
        if match.group(1) is None:
            return match.group(2)
        code = int(match.group(1), 16)
        if code == 0 or code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
            return "\ufffd"
        return chr(code)

    return _ESCAPE_RE.sub(_replace, ident)


def normalize_prelude(prelude: Iterable[object]) -> str:
    """Serialize tinycss2 prelude tokens into the canonical form the grammar expects.

    Comments are dropped, whitespace next to separators is removed, and any
    other whitespace run becomes a single space.
    """
    pieces: list[str] = []
    pending_space = False
    for token in prelude:
        kind = getattr(token, "type", "")
        if kind == "comment":
            continue
        if kind == "whitespace":
            pending_space = True
            continue
        if kind == "error":
            raise ParseError(
                getattr(token, "message", "Invalid selector token"),
                line=getattr(token, "source_line", None),
                column=getattr(token, "source_column", None),
            )
        text = token.serialize()  # type: ignore[attr-defined]
        is_separator = kind == "literal" and text in _SEPARATORS
        if pending_space and pieces and not is_separator and pieces[-1] not in _SEPARATORS:
            pieces.append(" ")
        pending_space = False
        pieces.append(text)
    return "".join(pieces)


class SelectorTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a selector parse tree into selector dataclasses."""

    # ---- simple selectors ----

    def ns_prefix(self, items: list[Token]) -> str:
        return "".join(str(item) for item in items)

    def type_selector(self, items: list[str]) -> SimpleSelector:
        return SimpleSelector(kind="type", text="".join(str(item) for item in items))

    def universal(self, items: list[str]) -> SimpleSelector:
        return SimpleSelector(kind="universal", text="".join(str(item) for item in items))

    def nesting(self, items: list[Token]) -> SimpleSelector:
        return SimpleSelector(kind="nesting", text="&")

    def class_selector(self, items: list[Token]) -> SimpleSelector:
        raw = str(items[0])
        return SimpleSelector(kind="class", text="." + raw, value=unescape(raw))

    def id_selector(self, items: list[Token]) -> SimpleSelector:
        return SimpleSelector(kind="id", text=str(items[0]))

    def attribute_selector(self, items: list[Token]) -> SimpleSelector:
        return SimpleSelector(kind="attribute", text=str(items[0]))

    def function(self, items: list[Token]) -> str:
        return "".join(str(item) for item in items)

    def pseudo_class(self, items: list[Token]) -> SimpleSelector:
        return SimpleSelector(kind="pseudo-class", text=":" + str(items[0]))

    def pseudo_element(self, items: list[Token]) -> SimpleSelector:
        return SimpleSelector(kind="pseudo-element", text="::" + str(items[0]))

    # ---- structural ----

    def combinator(self, items: list[Token]) -> str:
        return str(items[0])

    def compound_selector(self, items: list[SimpleSelector]) -> CompoundSelector:
        return CompoundSelector(parts=tuple(items))

    def complex_selector(self, items: list[object]) -> ComplexSelector:
        compounds: list[CompoundSelector] = []
        combinators: list[str] = []
        leading = ""
        for item in items:
            if isinstance(item, CompoundSelector):
                compounds.append(item)
            elif compounds:
                combinators.append(str(item))
            else:
                leading = str(item)
        return ComplexSelector(
            compounds=tuple(compounds), combinators=tuple(combinators), leading=leading
        )

    def selector_list(self, items: list[ComplexSelector]) -> SelectorList:
        return tuple(items)

    def start(self, items: list[SelectorList]) -> SelectorList:
        return items[0]


class SelectorParser:
    """Compiled selector grammar.  Create one per parse run."""

    def __init__(self) -> None:
        self._lark = Lark(GRAMMAR_PATH.read_text(encoding="utf-8"), parser="lalr", start="start")
        self._transformer = SelectorTransformer()

    def parse(
        self, text: str, line: int | None = None, column: int | None = None
    ) -> SelectorList:
        """Parse normalized selector text.

        *line* and *column* locate the owning rule in the stylesheet and are
        reported on failure.
        """
        try:
            tree = self._lark.parse(text)
        except UnexpectedInput as e:
            raise ParseError(f"Invalid selector {text!r}", line=line, column=column) from e
        except LarkError as e:
            raise ParseError(f"Invalid selector {text!r}: {e}", line=line, column=column) from e
        return self._transformer.transform(tree)


def parse_selector_list(text: str) -> SelectorList:
    """Parse a normalized selector list with a fresh SelectorParser."""
    return SelectorParser().parse(text)
