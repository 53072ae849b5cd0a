"""Tests for zip code lookup and service-area membership."""

import pytest

from protech.core.types import ZipRecord
from protech.locations.zipcodes import (
    ZIP_PREFIX_TO_LOCATION,
    ZIP_TO_LOCATION,
    is_in_service_area_zip,
    is_near_service_area,
    is_valid_zip,
    lookup_zip,
    zip_coverage,
)


class TestLookupZip:
    def test_exact_match(self):
        assert lookup_zip("44304") == ZipRecord(county="Summit", city="Akron")

    def test_exact_match_beats_prefix(self):
        # 44221 is Cuyahoga Falls; prefix 442 would say Summit County
        assert lookup_zip("44221").city == "Cuyahoga Falls"

    def test_prefix_fallback(self):
        assert lookup_zip("44399") == ZipRecord(county="Wayne", city="Wayne County")

    def test_unknown_prefix_returns_none(self):
        assert lookup_zip("90210") is None

    def test_strips_whitespace(self):
        assert lookup_zip("  44720 ").city == "North Canton"

    @pytest.mark.parametrize("bad", ["", "4430", "443044", "44a04", "abcde", "44304-1234", "４４３０４"])
    def test_malformed_returns_none(self, bad):
        assert lookup_zip(bad) is None

    @pytest.mark.parametrize("bad", [None, 44304, 4.4, ["44304"]])
    def test_non_string_returns_none(self, bad):
        assert lookup_zip(bad) is None

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            ZIP_TO_LOCATION["00000"] = ZipRecord("X", "Y")
        with pytest.raises(TypeError):
            ZIP_PREFIX_TO_LOCATION["000"] = ZipRecord("X", "Y")


class TestServiceAreaZip:
    def test_valid_zip(self):
        assert is_valid_zip("44304")
        assert not is_valid_zip("4430")

    def test_served_zip(self):
        assert is_in_service_area_zip("44256")

    def test_unserved_zip(self):
        assert not is_in_service_area_zip("10001")

    def test_invalid_zip_is_not_served(self):
        assert not is_in_service_area_zip("abc")

    def test_near_service_area(self):
        assert is_near_service_area("44999")
        assert is_near_service_area("44001")

    def test_not_near_service_area(self):
        assert not is_near_service_area("45202")
        assert not is_near_service_area("not-a-zip")


class TestZipCoverage:
    @pytest.mark.parametrize(
        "hint, expected",
        [("44301", (True, True)), (" 44999 ", (False, True)), ("45202", (False, False))],
    )
    def test_zip_hints(self, hint, expected):
        assert zip_coverage(hint) == expected

    @pytest.mark.parametrize("hint", ["Akron, OH", "4430", None, 44301])
    def test_non_zip_hints(self, hint):
        assert zip_coverage(hint) is None
