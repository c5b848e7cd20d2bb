"""Tests for class/spell aggregation."""

from gcsst.aggregate import Aggregator, aggregate
from gcsst.model import ClassEntry, Declaration, StyleRule


class TestAggregate:
    def test_groups_by_class_in_first_seen_order(self):
        entries = aggregate([("b", "color=red"), ("a", "margin=0"), ("b", "padding=0")])
        assert entries == [
            ClassEntry(name="b", spells=("color=red", "padding=0")),
            ClassEntry(name="a", spells=("margin=0",)),
        ]

    def test_duplicate_tokens_collapse(self):
        entries = aggregate([("a", "color=red"), ("a", "color=red")])
        assert entries == [ClassEntry(name="a", spells=("color=red",))]

    def test_first_occurrence_order_kept(self):
        entries = aggregate([("a", "x=1"), ("a", "y=2"), ("a", "x=1"), ("a", "z=3")])
        assert entries[0].spells == ("x=1", "y=2", "z=3")

    def test_same_token_in_two_classes(self):
        entries = aggregate([("a", "color=red"), ("b", "color=red")])
        assert [e.spells for e in entries] == [("color=red",), ("color=red",)]

    def test_empty(self):
        assert aggregate([]) == []


class TestAggregator:
    def test_touch_creates_empty_entry(self):
        aggregator = Aggregator()
        aggregator.touch("empty")
        assert aggregator.entries() == [ClassEntry(name="empty")]
        assert aggregator.spells("empty") == []

    def test_touch_does_not_reorder(self):
        aggregator = Aggregator()
        aggregator.add("a", "x=1")
        aggregator.add("b", "y=1")
        aggregator.touch("a")
        assert [e.name for e in aggregator.entries()] == ["a", "b"]

    def test_rules_recorded_once_per_object(self):
        rule = StyleRule(selector=".a,.a:hover", declarations=(Declaration("color", "red"),))
        aggregator = Aggregator()
        aggregator.add_rule("a", rule)
        aggregator.add_rule("a", rule)
        assert aggregator.rules("a") == [rule]

    def test_equal_rules_from_different_sources_both_kept(self):
        first = StyleRule(selector=".a", declarations=(Declaration("color", "red"),))
        second = StyleRule(selector=".a", declarations=(Declaration("color", "red"),))
        aggregator = Aggregator()
        aggregator.add_rule("a", first)
        aggregator.add_rule("a", second)
        assert len(aggregator.rules("a")) == 2

    def test_entries_with_oneliner_callback(self):
        rule = StyleRule(selector=".a", declarations=(Declaration("color", "red"),))
        aggregator = Aggregator()
        aggregator.add_rule("a", rule)
        aggregator.add("a", "color=red")
        entries = aggregator.entries(lambda name, rules: f"{name}:{len(rules)}")
        assert entries == [ClassEntry(name="a", spells=("color=red",), oneliner="a:1")]

    def test_spells_accessor(self):
        aggregator = Aggregator()
        aggregator.add("a", "x=1")
        assert aggregator.spells("a") == ["x=1"]
        assert aggregator.spells("missing") == []
