"""Tests for rule descriptors and rule resolution."""

import pytest

from html2md import (
    AppendingRule,
    Node,
    Rule,
    RuleResolutionError,
    RuleSet,
    StyleOptions,
    ValidationError,
    build_rule_set,
)
from html2md.rules import BLANK_RULE, DEFAULT_RULE, IGNORE_RULE


def _identity(content, node):
    return content


@pytest.mark.unit
class TestRule:
    def test_string_filter(self, parse):
        rule = Rule(name="para", filter="P", replacement=_identity)
        assert rule.filter == frozenset({"p"})
        assert rule.matches(parse("<p>x</p>").find("p"))

    def test_iterable_filter(self, parse):
        rule = Rule(name="emphasis", filter=["em", "I"], replacement=_identity)
        root = parse("<p><i>a</i><b>b</b></p>")
        assert rule.matches(root.find("i"))
        assert not rule.matches(root.find("b"))

    def test_predicate_filter(self, parse):
        rule = Rule(name="external", filter=lambda node: node.get_attribute("rel") == "external", replacement=_identity)
        root = parse('<p><a rel="external" href="x">a</a><a href="y">b</a></p>')
        links = root.find("p").element_children()
        assert rule.matches(links[0])
        assert not rule.matches(links[1])

    def test_text_nodes_never_match_tag_filters(self, parse):
        rule = Rule(name="para", filter="p", replacement=_identity)
        assert not rule.matches(parse("<p>x</p>").find("p").first_child)

    def test_replacement_must_be_callable(self):
        with pytest.raises(ValidationError) as exc_info:
            Rule(name="broken", filter="p", replacement="not callable")
        assert exc_info.value.parameter_name == "replacement"

    def test_appending_rule_requires_append(self):
        with pytest.raises(ValidationError):
            AppendingRule(name="broken", filter="p", replacement=_identity, append=None)

    def test_rules_compare_by_identity(self):
        first = Rule(name="same", filter="p", replacement=_identity)
        second = Rule(name="same", filter="p", replacement=_identity)
        assert first != second
        assert len({first, second, first}) == 2

    def test_rules_are_frozen(self):
        rule = Rule(name="para", filter="p", replacement=_identity)
        with pytest.raises(AttributeError):
            rule.name = "other"


@pytest.mark.unit
class TestRuleSet:
    def test_default_rule_catches_everything(self, parse):
        rule_set = RuleSet()
        assert rule_set.find_rule(parse("<p><span>x</span></p>").find("span")) is DEFAULT_RULE

    def test_missing_default_rule_is_a_contract_violation(self, parse):
        rule_set = RuleSet(default_rule=None)
        with pytest.raises(RuleResolutionError) as exc_info:
            rule_set.find_rule(parse("<span>x</span>").find("span"))
        assert exc_info.value.node_name == "span"
        assert exc_info.value.rendering_stage == "rule_resolution"

    def test_builtin_rules_in_registration_order(self, parse):
        first = Rule(name="first", filter="p", replacement=_identity)
        second = Rule(name="second", filter="p", replacement=_identity)
        rule_set = RuleSet([first, second])
        assert rule_set.find_rule(parse("<p>x</p>").find("p")) is first

    def test_ignored_tags_win(self, parse):
        custom = Rule(name="custom", filter="aside", replacement=_identity)
        rule_set = RuleSet()
        rule_set.add_rules([custom])
        rule_set.add_ignore(["ASIDE"])
        assert rule_set.find_rule(parse("<aside>x</aside>").find("aside")) is IGNORE_RULE
        assert rule_set.ignored == frozenset({"aside"})

    def test_custom_rules_precede_builtins(self, parse):
        builtin = Rule(name="builtin", filter="p", replacement=_identity)
        custom = Rule(name="custom", filter="p", replacement=_identity)
        rule_set = RuleSet([builtin])
        rule_set.add_rules([custom])
        assert rule_set.find_rule(parse("<p>x</p>").find("p")) is custom
        assert rule_set.custom_rules == (custom,)

    def test_custom_rules_precede_blank_rule(self, parse):
        custom = Rule(name="anchor", filter="span", replacement=lambda content, node: "<anchor>")
        rule_set = RuleSet()
        rule_set.add_rules([custom])
        assert rule_set.find_rule(parse("<p><span></span></p>").find("span")) is custom

    def test_blank_rule_precedes_builtins(self, parse):
        builtin = Rule(name="para", filter="p", replacement=_identity)
        rule_set = RuleSet([builtin])
        assert rule_set.find_rule(parse("<div><p></p></div>").find("p")) is BLANK_RULE

    def test_add_rules_rejects_non_rules(self):
        with pytest.raises(ValidationError):
            RuleSet().add_rules(["p"])

    def test_every_element_resolves_to_one_rule(self, parse):
        rule_set = build_rule_set(StyleOptions())
        root = parse("<div><p>a <b>b</b> <custom-tag>c</custom-tag></p><table><tr><td>1</td></tr></table></div>")
        for element in root.element.find_all(True):
            assert isinstance(rule_set.find_rule(Node(element)), Rule)


@pytest.mark.unit
class TestBuiltinRuleValues:
    def test_blank_rule_output(self, parse):
        root = parse("<div><p></p><span></span></div>")
        assert BLANK_RULE.replacement("", root.find("p")) == "\n\n"
        assert BLANK_RULE.replacement("", root.find("span")) == ""

    def test_default_rule_output(self, parse):
        root = parse("<section>x</section><span>y</span>")
        assert DEFAULT_RULE.replacement("x", root.find("section")) == "\n\nx\n\n"
        assert DEFAULT_RULE.replacement("y", root.find("span")) == "y"

    def test_ignore_rule_output(self, parse):
        assert IGNORE_RULE.replacement("anything", parse("<p>x</p>").find("p")) == ""


@pytest.mark.unit
class TestBuildRuleSet:
    def test_script_style_and_template_removed_by_default(self):
        rule_set = build_rule_set(StyleOptions())
        assert {"script", "style", "template"} <= rule_set.ignored

    def test_caller_ignores_are_merged(self):
        rule_set = build_rule_set(StyleOptions(), ignore=["nav"])
        assert "nav" in rule_set.ignored
        assert "script" in rule_set.ignored

    def test_each_call_builds_a_fresh_table(self):
        custom = Rule(name="custom", filter="p", replacement=_identity)
        first = build_rule_set(StyleOptions(), ignore=["nav"], rules=[custom])
        second = build_rule_set(StyleOptions())
        assert "nav" not in second.ignored
        assert second.custom_rules == ()
        assert first.custom_rules == (custom,)
