import logging

import pytest

from seller_finance.core.exceptions import ValidationError, VendorNotFound
from seller_finance.services.vendor_resolver import (
    VendorResolver,
    looks_like_handle,
    looks_like_vendor_id,
)


@pytest.fixture
def resolver(reader):
    return VendorResolver(reader)


def test_single_match_returns_its_id(resolver):
    assert resolver.resolve("scenario-store") == "2001"


def test_no_match_raises_not_found(resolver):
    with pytest.raises(VendorNotFound) as excinfo:
        resolver.resolve("missing-store")
    assert excinfo.value.handle == "missing-store"
    assert excinfo.value.status_code == 404


def test_handle_lookup_is_case_sensitive(resolver):
    with pytest.raises(VendorNotFound):
        resolver.resolve("Scenario-Store")


def test_duplicate_handle_resolves_to_lowest_id(resolver, caplog):
    with caplog.at_level(logging.WARNING):
        first = resolver.resolve("dup-handle")
        second = resolver.resolve("dup-handle")

    assert first == second == "2002"
    assert "matches more than one vendor" in caplog.text


def test_deleted_vendor_is_ignored(resolver):
    with pytest.raises(VendorNotFound):
        resolver.resolve("gone-store")


@pytest.mark.parametrize("value", ["", "   "])
def test_blank_values_are_rejected(resolver, value):
    with pytest.raises(ValidationError):
        resolver.resolve(value)
    with pytest.raises(ValidationError):
        resolver.resolve_seller(value)


def test_numeric_seller_id_passes_through(resolver):
    assert resolver.resolve_seller(" 2006 ") == "2006"


def test_seller_handle_is_resolved(resolver):
    assert resolver.resolve_seller("statement-store") == "2006"


@pytest.mark.parametrize(
    "value, expected",
    [("1001", False), ("vibe-vintage", True), ("shop42", True), ("42", False)],
)
def test_looks_like_handle(value, expected):
    assert looks_like_handle(value) is expected


@pytest.mark.parametrize("value", ["12-3", "-1", "4.5", "²"])
def test_letterless_non_numeric_values_are_rejected(resolver, value):
    with pytest.raises(ValidationError):
        resolver.resolve_seller(value)


@pytest.mark.parametrize(
    "value, expected",
    [("2006", True), ("12-3", False), ("²", False), ("vibe", False)],
)
def test_looks_like_vendor_id(value, expected):
    assert looks_like_vendor_id(value) is expected
