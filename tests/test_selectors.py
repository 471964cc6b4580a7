import pytest

from cqlcatalog.core.selectors import (
    AnyNameSelector,
    ExactNameSelector,
    SchemaPatternSelector,
    object_name_selector,
    parameter_name_selector,
    resolve_qualified_pattern,
    split_qualified_name,
    udt_name_selector,
)


def test_any_name_selector_matches_everything():
    assert AnyNameSelector().matches("shop") is True
    assert AnyNameSelector().matches("") is True


def test_exact_name_selector_respects_case_flag():
    assert ExactNameSelector("Shop", case_sensitive=True).matches("shop") is False
    assert ExactNameSelector("Shop", case_sensitive=False).matches("shop") is True


@pytest.mark.parametrize("pattern", [None, "%"])
def test_schema_selector_absent_or_wildcard_matches_all(pattern):
    selector = SchemaPatternSelector(pattern)

    assert selector.matches("shop") is True
    assert selector.matches("billing") is True


def test_schema_selector_is_case_sensitive():
    assert SchemaPatternSelector("shop").matches("shop") is True
    assert SchemaPatternSelector("Shop").matches("shop") is False


def test_schema_selector_empty_pattern_matches_no_keyspace():
    assert SchemaPatternSelector("").matches("shop") is False


def test_wildcard_has_no_partial_meaning():
    assert SchemaPatternSelector("sh%").matches("shop") is False
    assert object_name_selector("f%").matches("f1") is False


def test_object_name_selector_is_case_insensitive():
    assert object_name_selector("ADDRESS").matches("address") is True
    assert isinstance(object_name_selector("%"), AnyNameSelector)
    assert isinstance(object_name_selector(None), AnyNameSelector)


def test_udt_name_selector_treats_wildcard_literally():
    selector = udt_name_selector("%")

    assert selector.matches("address") is False
    assert selector.matches("%") is True
    assert isinstance(udt_name_selector(None), AnyNameSelector)


def test_parameter_name_selector_is_case_sensitive():
    assert parameter_name_selector("a").matches("a") is True
    assert parameter_name_selector("A").matches("a") is False
    assert parameter_name_selector("%").matches("anything") is True


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("address", (None, "address")),
        ("shop.address", ("shop", "address")),
        # only the first two pieces are kept
        ("shop.address.extra", ("shop", "address")),
        (".address", (None, "address")),
        ("shop.", ("shop", "")),
        ("", (None, "")),
    ],
)
def test_split_qualified_name(pattern, expected):
    assert split_qualified_name(pattern) == expected


def test_qualified_schema_overrides_supplied_schema():
    assert resolve_qualified_pattern("billing", "shop.address") == ("shop", "address")


def test_unqualified_name_keeps_supplied_schema():
    assert resolve_qualified_pattern("billing", "address") == ("billing", "address")
    assert resolve_qualified_pattern("billing", None) == ("billing", None)
