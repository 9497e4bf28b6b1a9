"""
Unit tests for the identifier parser: selector text to structured form.
"""

import pytest

from selectorkit.exceptions import MalformedSelector
from selectorkit.parser import (
    ParsedIdentifier,
    parse_identifier,
    parse_member_signature,
    parse_parameter_types,
)


class TestParseIdentifier:
    """Test the Container#Member(ParamList) grammar."""

    def test_bare_container(self):
        parsed = parse_identifier("pkg.mod.Case")
        assert parsed == ParsedIdentifier("pkg.mod.Case")
        assert not parsed.has_member
        assert not parsed.has_signature

    def test_container_and_member(self):
        parsed = parse_identifier("pkg.mod.Case#test1")
        assert parsed.container == "pkg.mod.Case"
        assert parsed.member == "test1"
        assert parsed.parameter_types is None

    def test_empty_parameter_list_is_zero_arity(self):
        """An empty list is a signature, distinct from no signature."""
        parsed = parse_identifier("pkg.mod.Case#test4()")
        assert parsed.parameter_types == ()
        assert parsed.has_signature

    def test_parameter_types_are_split_and_stripped(self):
        parsed = parse_identifier("pkg.mod.Case#with_params(int,  str )")
        assert parsed.member == "with_params"
        assert parsed.parameter_types == ("int", "str")

    def test_nested_commas_do_not_split(self):
        parsed = parse_identifier("pkg.Case#m(dict[str, int], tuple[int, ...])")
        assert parsed.parameter_types == ("dict[str, int]", "tuple[int, ...]")

    def test_member_name_with_hashes_and_spaces_is_verbatim(self):
        """Externally defined specs use names outside the identifier model."""
        parsed = parse_identifier("org.example.CalculatorSpec##a plus #b equals #c")
        assert parsed.container == "org.example.CalculatorSpec"
        assert parsed.member == "#a plus #b equals #c"

    def test_member_name_whitespace_is_stripped_in_both_forms(self):
        assert parse_identifier("pkg.Case#  m  ").member == "m"
        assert parse_identifier("pkg.Case#  m  (int)").member == "m"
        assert parse_identifier("pkg.Case# #a plus #b ").member == "#a plus #b"

    def test_non_identifier_container_is_accepted(self):
        parsed = parse_identifier("not a valid-name#m")
        assert parsed.container == "not a valid-name"

    def test_member_only_form(self):
        parsed = parse_identifier("test4(str)")
        assert parsed.container is None
        assert parsed.member == "test4"
        assert parsed.parameter_types == ("str",)

    @pytest.mark.parametrize("raw", [None, "", "   ", "\t"])
    def test_blank_input_is_malformed(self, raw):
        with pytest.raises(MalformedSelector):
            parse_identifier(raw)

    @pytest.mark.parametrize("raw", [
        "pkg.Case#m(",
        "pkg.Case#m)",
        "pkg.Case#m(str",
        "pkg.Case#m(a(b))",
        "pkg.Case#m(str)x",
        "pkg.Case#(str)",
        "#m",
        "pkg.Case#",
        "pkg(x).Case#m",
        "pkg.Case#m(str,)",
        "pkg.Case#m(dict[str, int)",
    ])
    def test_structurally_malformed_input(self, raw):
        with pytest.raises(MalformedSelector) as excinfo:
            parse_identifier(raw)
        assert excinfo.value.text == raw


class TestRendering:
    """Test that structural fields survive a parse/render cycle."""

    @pytest.mark.parametrize("raw", [
        "pkg.mod.Case",
        "pkg.mod.Case#test1",
        "pkg.mod.Case#test4()",
        "pkg.mod.Case#with_params(int,str)",
        "org.example.CalculatorSpec##a plus #b equals #c",
    ])
    def test_round_trip(self, raw):
        parsed = parse_identifier(raw)
        reparsed = parse_identifier(parsed.render())
        assert reparsed == parsed

    def test_member_text(self):
        parsed = parse_identifier("pkg.Case#m(int,str)")
        assert parsed.member_text == "m(int, str)"
        assert parsed.render() == "pkg.Case#m(int, str)"


class TestMemberSignature:
    """Test the standalone Member(ParamList) form."""

    def test_name_only(self):
        parsed = parse_member_signature("test1")
        assert parsed.container is None
        assert parsed.member == "test1"
        assert parsed.parameter_types is None

    def test_with_parameters(self):
        assert parse_member_signature("test4()").parameter_types == ()
        assert parse_member_signature("test4(str)").parameter_types == ("str",)

    def test_hash_in_member_is_kept(self):
        assert parse_member_signature("#a plus #b").member == "#a plus #b"

    def test_blank_is_malformed(self):
        with pytest.raises(MalformedSelector):
            parse_member_signature("  ")


class TestParameterTypes:

    def test_empty(self):
        assert parse_parameter_types("") == ()
        assert parse_parameter_types("   ") == ()

    def test_unbalanced_closer(self):
        with pytest.raises(MalformedSelector):
            parse_parameter_types("list[int]]")
