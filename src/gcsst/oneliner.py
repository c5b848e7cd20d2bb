"""Oneliner reconstruction: a flattened CSS rule per class for copy-paste."""

from __future__ import annotations

from typing import Iterable

from tinycss2.serializer import serialize_identifier

from gcsst.model import StyleRule


def build_oneliner(class_name: str, rules: Iterable[StyleRule]) -> str:
    """Rebuild ``.name { prop: value; ... }`` from every rule that fed *class_name*.

    Media and pseudo-state contexts are ignored, so the result is a visual
    aid only; declarations appear in aggregation order.
    """
    selector = "." + serialize_identifier(class_name)
    body = " ".join(str(decl) for rule in rules for decl in rule.declarations)
    if not body:
        return f"{selector} {{ }}"
    return f"{selector} {{ {body} }}"
