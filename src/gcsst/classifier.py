"""Selector classification: which classes a rule targets, and in which context."""

from __future__ import annotations

from gcsst.model import ContextFrame, PseudoState, StyleRule
from gcsst.selectors import SelectorParser


def _with_state(
    contexts: tuple[ContextFrame, ...], depth: int | None, suffix: str
) -> tuple[ContextFrame, ...]:
    # Enclosing media frames stay outside the selector's own state; state
    # frames from nested blocks (``&:focus``) refine it and come after.
    index = len(contexts) if depth is None else depth
    while index < len(contexts) and not isinstance(contexts[index], PseudoState):
        index += 1
    return contexts[:index] + (PseudoState(suffix),) + contexts[index:]


def classify(
    rule: StyleRule, parser: SelectorParser | None = None
) -> list[tuple[str, tuple[ContextFrame, ...]]]:
    """Return ``(class_name, context_chain)`` for every class *rule* targets.

    Each compound selector is considered on its own.  All of its class
    components receive the rule, and its pseudo/attribute components become
    a ``PseudoState`` frame placed before any state frames from blocks nested
    inside the rule.  Compounds without classes are dropped.

    Selectors already parsed by the stylesheet parser are reused; otherwise
    ``rule.selector`` is parsed with *parser*.
    """
    selectors = rule.selectors
    if not selectors:
        selectors = (parser or SelectorParser()).parse(rule.selector, line=rule.line)

    targets: list[tuple[str, tuple[ContextFrame, ...]]] = []
    for complex_selector in selectors:
        for compound in complex_selector.compounds:
            classes = compound.classes
            if not classes:
                continue
            contexts = rule.contexts
            suffix = compound.state_suffix
            if suffix:
                contexts = _with_state(contexts, rule.selector_depth, suffix)
            for name in classes:
                target = (name, contexts)
                if target not in targets:
                    targets.append(target)
    return targets
