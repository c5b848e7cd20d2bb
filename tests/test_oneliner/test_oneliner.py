"""Tests for oneliner reconstruction."""

from gcsst.model import Declaration, MediaQuery, PseudoState, StyleRule
from gcsst.oneliner import build_oneliner


def _rule(selector: str, *pairs: tuple[str, str], contexts=()) -> StyleRule:
    return StyleRule(
        selector=selector,
        declarations=tuple(Declaration(p, v) for p, v in pairs),
        contexts=contexts,
    )


class TestBuildOneliner:
    def test_single_rule(self):
        rule = _rule(".button", ("color", "red"))
        assert build_oneliner("button", [rule]) == ".button { color: red; }"

    def test_multiple_declarations(self):
        rule = _rule(".a", ("color", "red"), ("margin", "1px 2px"))
        assert build_oneliner("a", [rule]) == ".a { color: red; margin: 1px 2px; }"

    def test_rules_merged_in_order(self):
        rules = [_rule(".a", ("color", "red")), _rule(".a.b", ("padding", "0"))]
        assert build_oneliner("a", rules) == ".a { color: red; padding: 0; }"

    def test_context_is_flattened(self):
        rules = [
            _rule(".a", ("color", "red")),
            _rule(".a:hover", ("color", "blue"), contexts=(PseudoState(":hover"),)),
            _rule(".a", ("display", "none"), contexts=(MediaQuery("print"),)),
        ]
        assert build_oneliner("a", rules) == ".a { color: red; color: blue; display: none; }"

    def test_no_declarations(self):
        assert build_oneliner("empty", [_rule(".empty")]) == ".empty { }"

    def test_no_rules(self):
        assert build_oneliner("empty", []) == ".empty { }"

    def test_class_name_escaped(self):
        rule = _rule(r".md\:flex", ("display", "flex"))
        assert build_oneliner("md:flex", [rule]) == r".md\:flex { display: flex; }"
