"""
Unit tests for the runtime symbol space and SymbolLocator.

Covers container loading (found / absent / broken), hierarchy-aware member
lookup, overload disambiguation and parameter type rendering.
"""

import typing

import pytest

import sample_cases
from sample_cases import (
    BaseCase,
    CaseWithDefaultMethod,
    DefaultMethodProvider,
    DerivedCase,
    LocalTestCase,
    Outer,
)
from selectorkit.exceptions import AmbiguousSymbol, ContainerLoadError, UnresolvableSymbol
from selectorkit.resolution import LoadStatus, MemberSymbol, RuntimeSymbolSpace, SymbolLocator


MODULE = sample_cases.__name__


@pytest.fixture
def locator():
    return SymbolLocator()


class TestLoadContainer:
    """Test loading classes by qualified name."""

    def test_found_by_dotted_name(self, locator):
        assert locator.locate_container(f"{MODULE}.LocalTestCase") is LocalTestCase

    def test_found_by_colon_name(self, locator):
        assert locator.locate_container(f"{MODULE}:Outer.Inner") is Outer.Inner

    def test_nested_class(self, locator):
        assert locator.locate_container(f"{MODULE}.Outer.Inner") is Outer.Inner

    def test_stdlib_class(self, locator):
        import collections
        assert locator.locate_container("collections.OrderedDict") is collections.OrderedDict

    def test_absent_module(self, locator):
        with pytest.raises(UnresolvableSymbol) as excinfo:
            locator.locate_container("org.example.CalculatorSpec")
        assert not isinstance(excinfo.value, ContainerLoadError)
        assert "org.example.CalculatorSpec" in str(excinfo.value)

    def test_absent_attribute(self, locator):
        with pytest.raises(UnresolvableSymbol):
            locator.locate_container(f"{MODULE}.NoSuchCase")

    def test_function_is_not_a_container(self, locator):
        outcome = locator.probe_container(f"{MODULE}.module_level_function")
        assert outcome.status is LoadStatus.ABSENT

    def test_module_is_not_a_container(self, locator):
        outcome = locator.probe_container("collections")
        assert outcome.status is LoadStatus.ABSENT

    def test_malformed_name_is_a_load_failure(self, locator):
        with pytest.raises(ContainerLoadError):
            locator.locate_container("pkg..Case")
        assert locator.probe_container("has spaces.Case").status is LoadStatus.BROKEN

    def test_module_failing_to_import_is_a_load_failure(self, locator, tmp_path, monkeypatch):
        (tmp_path / "selectorkit_broken_fixture.py").write_text("raise RuntimeError('boom')\n")
        monkeypatch.syspath_prepend(str(tmp_path))

        outcome = locator.probe_container("selectorkit_broken_fixture.Case")
        assert outcome.status is LoadStatus.BROKEN
        assert isinstance(outcome.error, RuntimeError)

        with pytest.raises(ContainerLoadError) as excinfo:
            locator.locate_container("selectorkit_broken_fixture.Case")
        assert isinstance(excinfo.value.cause, RuntimeError)

    def test_missing_dependency_is_a_load_failure(self, locator, tmp_path, monkeypatch):
        (tmp_path / "selectorkit_missing_dep_fixture.py").write_text(
            "import selectorkit_no_such_dependency\n"
        )
        monkeypatch.syspath_prepend(str(tmp_path))

        outcome = locator.probe_container("selectorkit_missing_dep_fixture.Case")
        assert outcome.status is LoadStatus.BROKEN


class TestLocateMember:
    """Test hierarchy-aware member lookup."""

    def test_unique_name(self, locator):
        symbol = locator.locate_member(LocalTestCase, "test1")
        assert symbol.function is LocalTestCase.test1
        assert symbol.declaring_class is LocalTestCase
        assert symbol.parameter_types == ()

    def test_absent_member(self, locator):
        with pytest.raises(UnresolvableSymbol) as excinfo:
            locator.locate_member(LocalTestCase, "no_such_test")
        assert "no_such_test" in str(excinfo.value)

    def test_non_callable_attribute_is_not_a_member(self, locator):
        with pytest.raises(UnresolvableSymbol):
            locator.locate_member(LocalTestCase, "not_a_method")

    def test_overloads_without_signature_are_ambiguous(self, locator):
        with pytest.raises(AmbiguousSymbol) as excinfo:
            locator.locate_member(LocalTestCase, "test4")
        assert len(excinfo.value.candidates) == 2
        assert {c.parameter_types for c in excinfo.value.candidates} == {(), ("str",)}

    def test_zero_arity_overload(self, locator):
        zero, one = typing.get_overloads(LocalTestCase.test4)
        symbol = locator.locate_member(LocalTestCase, "test4", ())
        assert symbol.function is zero

    def test_one_arity_overload(self, locator):
        zero, one = typing.get_overloads(LocalTestCase.test4)
        assert locator.locate_member(LocalTestCase, "test4", ["str"]).function is one
        assert locator.locate_member(LocalTestCase, "test4", ["builtins.str"]).function is one

    def test_wrong_signature_is_not_found(self, locator):
        with pytest.raises(UnresolvableSymbol):
            locator.locate_member(LocalTestCase, "test4", ["int"])
        with pytest.raises(UnresolvableSymbol):
            locator.locate_member(LocalTestCase, "test1", ["str"])

    def test_method_provided_by_base_class(self, locator):
        """A concrete method inherited from an ABC is found on the implementor."""
        symbol = locator.locate_member(CaseWithDefaultMethod, "my_test", ())
        assert symbol.function is DefaultMethodProvider.my_test
        assert symbol.declaring_class is DefaultMethodProvider

    def test_name_only_uses_most_derived_declaration(self, locator):
        symbol = locator.locate_member(DerivedCase, "shared")
        assert symbol.declaring_class is DerivedCase

    def test_override_hides_base_declaration(self, locator):
        """Name-only and signature lookups reach the same declaration."""
        assert locator.locate_member(DerivedCase, "shared", ()).declaring_class is DerivedCase
        with pytest.raises(UnresolvableSymbol):
            locator.locate_member(DerivedCase, "shared", ["int"])

    def test_base_declaration_found_on_base(self, locator):
        symbol = locator.locate_member(BaseCase, "shared", ["int"])
        assert symbol.declaring_class is BaseCase
        assert symbol.parameter_types == ("int",)

    def test_repeated_lookups_denote_same_declaration(self, locator):
        first = locator.locate_member(CaseWithDefaultMethod, "my_test")
        second = locator.locate_member(DefaultMethodProvider, "my_test")
        assert first == second
        assert hash(first) == hash(second)

    def test_static_and_class_methods(self, locator):
        static = locator.locate_member(LocalTestCase, "static_case", ["float"])
        assert static.parameter_types == ("float",)
        klass = locator.locate_member(LocalTestCase, "class_case", ["bool"])
        assert klass.parameter_types == ("bool",)


class TestParameterTypeNames:
    """Test how declared parameter types are rendered and matched."""

    def test_builtin_and_multiple(self, locator):
        symbol = locator.locate_member(LocalTestCase, "with_params")
        assert symbol.parameter_types == ("int", "str")

    def test_unannotated_parameter(self, locator):
        assert locator.locate_member(LocalTestCase, "untyped").parameter_types == ("object",)

    def test_unannotated_type_name_is_configurable(self):
        space = RuntimeSymbolSpace({"unannotated_type_name": "Any"})
        configured = SymbolLocator(space)
        assert configured.locate_member(LocalTestCase, "untyped").parameter_types == ("Any",)
        assert configured.locate_member(LocalTestCase, "untyped", ["Any"]).name == "untyped"
        with pytest.raises(UnresolvableSymbol):
            configured.locate_member(LocalTestCase, "untyped", ["object"])

    def test_forward_reference_matches_full_and_short_name(self, locator):
        symbol = locator.locate_member(LocalTestCase, "forward")
        assert symbol.parameter_types == (f"{MODULE}.LocalTestCase",)
        assert locator.locate_member(LocalTestCase, "forward", ["LocalTestCase"]) == symbol

    def test_unresolvable_annotation_is_kept_verbatim(self, locator):
        symbol = locator.locate_member(LocalTestCase, "dangling", ["NoSuchType"])
        assert symbol.parameter_types == ("NoSuchType",)

    def test_variadic_parameters(self, locator):
        symbol = locator.locate_member(LocalTestCase, "variadic", ["*str", "**int"])
        assert symbol.parameter_types == ("*str", "**int")

    def test_overloads_can_be_ignored(self):
        space = RuntimeSymbolSpace({"consult_overloads": False})
        symbol = SymbolLocator(space).locate_member(LocalTestCase, "test4")
        assert symbol.function is vars(LocalTestCase)["test4"]


class TestMemberForFunction:
    """Test building symbols from direct function references."""

    def test_plain_method(self, locator):
        symbol = locator.member_for_function(LocalTestCase, LocalTestCase.test3)
        assert isinstance(symbol, MemberSymbol)
        assert symbol.name == "test3"

    def test_overload_variant(self, locator):
        _, one = typing.get_overloads(LocalTestCase.test4)
        symbol = locator.member_for_function(LocalTestCase, one)
        assert symbol.parameter_types == ("str",)

    def test_overload_implementation(self, locator):
        symbol = locator.member_for_function(LocalTestCase, LocalTestCase.test4)
        assert symbol.function is vars(LocalTestCase)["test4"]

    def test_inherited_method(self, locator):
        symbol = locator.member_for_function(CaseWithDefaultMethod, CaseWithDefaultMethod.my_test)
        assert symbol.declaring_class is DefaultMethodProvider

    def test_overridden_base_function(self, locator):
        assert locator.member_for_function(DerivedCase, BaseCase.shared) is None

    def test_foreign_function(self, locator):
        assert locator.member_for_function(LocalTestCase, sample_cases.module_level_function) is None
