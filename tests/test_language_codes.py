"""Tests for language code normalization."""

import pytest

from deeplx_bridge import language_codes as lc


class TestNormalize:

    @pytest.mark.parametrize("code, expected", [("DE", "de"), (" Auto ", "auto"), (None, "auto"), ("", "auto")])
    def test_source(self, code, expected):
        assert lc.normalize_source_language(code) == expected

    @pytest.mark.parametrize("code, expected", [("fr", "FR"), ("en-gb", "EN-GB"), (None, "EN"), ("  ", "EN")])
    def test_target(self, code, expected):
        assert lc.normalize_target_language(code) == expected


class TestRegionalVariant:

    def test_with_region(self):
        assert lc.split_regional_variant("PT-BR") == ("PT", "PT-BR")

    def test_without_region(self):
        assert lc.split_regional_variant("JA") == ("JA", None)

    def test_extract_base_language(self):
        assert lc.extract_base_language("ZH-HANS") == "ZH"


class TestSupported:

    def test_known_codes(self):
        assert lc.is_supported_language("de")
        assert lc.is_supported_language("EN-US")

    def test_unknown_code(self):
        assert not lc.is_supported_language("XX")

    def test_is_auto(self):
        assert lc.is_auto("AUTO")
        assert lc.is_auto("")
        assert not lc.is_auto("EN")
