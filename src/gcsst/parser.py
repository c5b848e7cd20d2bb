"""CSS parser adapter: walks a tinycss2 stylesheet and yields StyleRules.

Nested contexts are threaded through the recursion as an immutable tuple of
frames, outermost first:

    @media (hover) { .btn { &:focus { color: red; } } }

yields ``StyleRule(".btn", (color: red,), (MediaQuery("(hover)"), PseudoState(":focus")))``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Iterable, Protocol

import tinycss2
from tinycss2.ast import (
    AtRule,
    CurlyBracketsBlock,
    Declaration as CssDeclaration,
    FunctionBlock,
    Node,
    ParenthesesBlock,
    ParseError as CssParseError,
    QualifiedRule,
    SquareBracketsBlock,
    StringToken,
    URLToken,
)

from gcsst.errors import ParseError
from gcsst.model import ContextFrame, Declaration, MediaQuery, PseudoState, StyleRule
from gcsst.selectors import SelectorParser, normalize_prelude
from gcsst.spells import clean_value

__all__ = [
    "AtRuleHandler",
    "AtRuleRegistry",
    "MediaRuleHandler",
    "SourceText",
    "StylesheetParser",
    "parse",
]

logger = logging.getLogger(__name__)

_OPENERS = {"}": "{", ")": "(", "]": "["}


# ---------------------------------------------------------------------------
# At-rule handlers
# ---------------------------------------------------------------------------


class AtRuleHandler(Protocol):
    """Turns a block at-rule into the context frame its children are nested under."""

    def frame(self, rule: AtRule) -> ContextFrame | None: ...


class MediaRuleHandler:
    """``@media <condition> { ... }`` -> ``MediaQuery(condition)``."""

    def frame(self, rule: AtRule) -> ContextFrame | None:
        condition = clean_value(
            tinycss2.serialize(t for t in rule.prelude if t.type != "comment")
        )
        if not condition:
            return None
        return MediaQuery(condition)


class AtRuleRegistry:
    """Maps lower-cased at-keywords to handlers.  Unregistered at-rules are skipped."""

    def __init__(self) -> None:
        self._handlers: dict[str, AtRuleHandler] = {}

    def register(self, keyword: str, handler: AtRuleHandler) -> None:
        """Register a handler for ``@keyword`` blocks."""
        self._handlers[keyword.lower()] = handler

    def resolve(self, keyword: str) -> AtRuleHandler | None:
        return self._handlers.get(keyword.lower())

    @classmethod
    def default(cls) -> "AtRuleRegistry":
        registry = cls()
        registry.register("media", MediaRuleHandler())
        return registry


# ---------------------------------------------------------------------------
# Structural checks
# ---------------------------------------------------------------------------


def _location(source: str, index: int) -> tuple[int, int]:
    line = source.count("\n", 0, index) + 1
    column = index - source.rfind("\n", 0, index)
    return line, column


def check_balanced(source: str) -> None:
    """Fail on unbalanced brackets, unterminated strings and unterminated comments.

    tinycss2 silently closes whatever is still open at end of input, so this
    has to happen before tokenizing.
    """
    stack: list[tuple[str, int]] = []
    i = 0
    n = len(source)
    while i < n:
        c = source[i]
        if c == "/" and source.startswith("/*", i):
            end = source.find("*/", i + 2)
            if end == -1:
                raise ParseError("Unterminated comment", *_location(source, i))
            i = end + 2
            continue
        if c in "\"'":
            j = i + 1
            while j < n and source[j] != c:
                if source[j] == "\\":
                    j += 2
                    continue
                if source[j] == "\n":
                    break
                j += 1
            if j >= n or source[j] != c:
                raise ParseError("Unterminated string", *_location(source, i))
            i = j + 1
            continue
        if c == "\\":
            i += 2
            continue
        if c in "{([":
            stack.append((c, i))
        elif c in "})]":
            if not stack or stack[-1][0] != _OPENERS[c]:
                raise ParseError(f"Unmatched {c!r}", *_location(source, i))
            stack.pop()
        i += 1
    if stack:
        opener, index = stack[-1]
        raise ParseError(f"Unclosed {opener!r} block", *_location(source, index))


# ---------------------------------------------------------------------------
# Source text
# ---------------------------------------------------------------------------

_BLOCK_DELIMITERS = (
    (ParenthesesBlock, "(", ")"),
    (SquareBracketsBlock, "[", "]"),
    (CurlyBracketsBlock, "{", "}"),
)


class SourceText:
    """CSS source addressable by tinycss2 token positions.

    tinycss2 serializes strings and URLs in its own canonical form (double
    quotes, re-escaped), so declaration values are rebuilt from the text as
    written instead.  The source gets the same newline preprocessing as
    tinycss2 applies, which keeps ``source_line``/``source_column`` valid.
    """

    def __init__(self, source: str) -> None:
        self.text = (
            source.replace("\0", "\ufffd")
            .replace("\r\n", "\n")
            .replace("\r", "\n")
            .replace("\f", "\n")
        )
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", self.text)]

    def offset(self, node: Node) -> int:
        return self._line_starts[node.source_line - 1] + node.source_column - 1

    def _scan(self, start: int, stops: str) -> int:
        """Index just past the first unescaped character in *stops*."""
        text = self.text
        i = start
        while i < len(text):
            c = text[i]
            if c == "\\":
                i += 2
                continue
            if c in stops:
                return i + 1
            i += 1
        return len(text)

    def _quoted(self, start: int) -> str:
        end = self._scan(start + 1, self.text[start] + "\n")
        if self.text[end - 1] == "\n":
            end -= 1
        return self.text[start:end]

    def _error(self, token: CssParseError) -> str:
        start = self.offset(token)
        if token.kind == "bad-url":
            return self.text[start : self._scan(start, ")")]
        if token.kind == "bad-string":
            return self._quoted(start)
        if token.kind in ("}", "]", ")"):
            return token.kind
        # eof-in-string / eof-in-url trail a token that already covers the text
        return ""

    def render(self, tokens: Iterable[Node]) -> str:
        """Rebuild component values as they appear in the source."""
        parts: list[str] = []
        for token in tokens:
            if token.type == "comment":
                parts.append(" ")
            elif isinstance(token, StringToken):
                parts.append(self._quoted(self.offset(token)))
            elif isinstance(token, URLToken):
                start = self.offset(token)
                parts.append(self.text[start : self._scan(start, ")")])
            elif isinstance(token, CssParseError):
                parts.append(self._error(token))
            elif isinstance(token, FunctionBlock):
                start = self.offset(token)
                parts.append(self.text[start : self._scan(start, "(")])
                parts.append(self.render(token.arguments))
                parts.append(")")
            else:
                for block_type, opener, closer in _BLOCK_DELIMITERS:
                    if isinstance(token, block_type):
                        parts.append(opener + self.render(token.content) + closer)
                        break
                else:
                    parts.append(token.serialize())
        return "".join(parts)


def _error_from(node: Node) -> ParseError:
    return ParseError(
        getattr(node, "message", "Invalid CSS"),
        line=node.source_line,
        column=node.source_column,
    )


# ---------------------------------------------------------------------------
# Stylesheet walker
# ---------------------------------------------------------------------------


class StylesheetParser:
    """Walks CSS source into a flat, source-ordered list of StyleRules."""

    def __init__(
        self,
        at_rules: AtRuleRegistry | None = None,
        selectors: SelectorParser | None = None,
    ) -> None:
        self.at_rules = at_rules or AtRuleRegistry.default()
        self.selectors = selectors or SelectorParser()
        self._source = SourceText("")

    def parse(self, source: str) -> list[StyleRule]:
        """Parse one stylesheet.  Calls on the same instance must not overlap."""
        self._source = SourceText(source)
        check_balanced(self._source.text)
        nodes = tinycss2.parse_stylesheet(
            self._source.text, skip_comments=True, skip_whitespace=True
        )
        for node in nodes:
            if node.type == "error":
                raise _error_from(node)
        rules: list[StyleRule] = []
        self._walk(nodes, (), None, rules)
        logger.debug("Parsed %d style rules", len(rules))
        return rules

    def _walk(
        self,
        nodes: Iterable[Node],
        contexts: tuple[ContextFrame, ...],
        parent: StyleRule | None,
        out: list[StyleRule],
        emit_empty: bool = False,
    ) -> None:
        """Emit the block's own declarations for *parent*, then descend into nested rules."""
        declarations: list[Declaration] = []
        nested: list[Node] = []
        for node in nodes:
            if node.type == "declaration":
                declarations.append(self._declaration(node))
            elif node.type in ("qualified-rule", "at-rule"):
                nested.append(node)
            elif node.type == "error":
                logger.warning(
                    "Skipping invalid declaration at line %s: %s",
                    node.source_line,
                    node.message,
                )

        if parent is None:
            if declarations:
                logger.debug("Ignoring %d declarations outside a style rule", len(declarations))
        elif declarations or emit_empty:
            out.append(replace(parent, declarations=tuple(declarations), contexts=contexts))

        for node in nested:
            if isinstance(node, AtRule):
                self._at_rule(node, contexts, parent, out)
            elif isinstance(node, QualifiedRule):
                self._qualified_rule(node, contexts, parent, out)

    def _declaration(self, node: CssDeclaration) -> Declaration:
        if any(token.type == "error" for token in node.value):
            logger.warning(
                "Passing through malformed value for %r at line %s", node.name, node.source_line
            )
        name = node.name if node.name.startswith("--") else node.lower_name
        value = clean_value(self._source.render(node.value))
        if node.important:
            value = f"{value} !important"
        return Declaration(property=name, value=value)

    def _children(self, content: list[Node] | None) -> list[Node]:
        if not content:
            return []
        return tinycss2.parse_blocks_contents(content, skip_comments=True, skip_whitespace=True)

    def _at_rule(
        self,
        node: AtRule,
        contexts: tuple[ContextFrame, ...],
        parent: StyleRule | None,
        out: list[StyleRule],
    ) -> None:
        handler = self.at_rules.resolve(node.lower_at_keyword)
        if handler is None:
            logger.debug("Skipping unsupported @%s at line %s", node.at_keyword, node.source_line)
            return
        if node.content is None:
            logger.debug("Skipping @%s without a block at line %s", node.at_keyword, node.source_line)
            return
        frame = handler.frame(node)
        inner = contexts + (frame,) if frame is not None else contexts
        self._walk(self._children(node.content), inner, parent, out)

    def _qualified_rule(
        self,
        node: QualifiedRule,
        contexts: tuple[ContextFrame, ...],
        parent: StyleRule | None,
        out: list[StyleRule],
    ) -> None:
        text = normalize_prelude(node.prelude)
        selectors = self.selectors.parse(text, line=node.source_line, column=node.source_column)
        children = self._children(node.content)

        # ``&:hover { ... }`` refines the enclosing selector instead of naming a new one.
        if all(selector.is_state_only for selector in selectors):
            for selector in selectors:
                suffix = selector.compounds[0].state_suffix
                inner = contexts + (PseudoState(suffix),) if suffix else contexts
                self._walk(children, inner, parent, out)
            return

        own = ", ".join(
            css for css in (s.to_css(drop_nesting=True) for s in selectors) if css
        )
        template = StyleRule(
            selector=own,
            contexts=contexts,
            line=node.source_line,
            selector_depth=len(contexts),
            selectors=selectors,
        )
        self._walk(children, contexts, template, out, emit_empty=True)


def parse(source: str, at_rules: AtRuleRegistry | None = None) -> list[StyleRule]:
    """Parse CSS *source* into StyleRules.  Raises ParseError on malformed input."""
    return StylesheetParser(at_rules=at_rules).parse(source)
