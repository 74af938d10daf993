"""Tests for beam extraction."""

import pytest

from deeplx_bridge.lmt.exceptions import EmptyTranslationError, MalformedUpstreamResponse
from deeplx_bridge.lmt.extractor import collect_beam_texts, extract_translations


class TestExtractTranslations:

    def test_first_beam_is_primary(self, translate_factory):
        primary, alternatives = extract_translations(
            translate_factory(["Bonjour le monde.", "Salut le monde.", "Bonjour tout le monde."])
        )
        assert primary == "Bonjour le monde."
        assert alternatives == ["Salut le monde.", "Bonjour tout le monde."]

    def test_single_beam_has_no_alternatives(self, translate_factory):
        assert extract_translations(translate_factory(["Hallo."])) == ("Hallo.", [])

    def test_alternatives_never_repeat_primary(self, translate_factory):
        primary, alternatives = extract_translations(translate_factory(["Hallo.", "Hallo.", "Servus."]))
        assert primary not in alternatives
        assert alternatives == ["Servus."]

    def test_no_beams_raises(self):
        response = {"result": {"translations": [{"beams": []}]}}
        with pytest.raises(EmptyTranslationError):
            extract_translations(response)

    def test_missing_translations_raises(self):
        with pytest.raises(EmptyTranslationError) as exc_info:
            extract_translations({"result": {}})
        assert isinstance(exc_info.value, MalformedUpstreamResponse)
        assert exc_info.value.code == "empty_translation"

    def test_beams_without_sentences_are_skipped(self):
        response = {"result": {"translations": [{"beams": [
            {"sentences": []},
            {"sentences": [{"text": "Ciao."}]},
        ]}]}}
        assert collect_beam_texts(response) == ["Ciao."]

    def test_sentences_mapping_is_skipped(self):
        response = {"result": {"translations": [{"beams": [
            {"sentences": {"0": {"text": "Hola."}}},
            {"sentences": ["Hola."]},
        ]}]}}
        with pytest.raises(EmptyTranslationError):
            extract_translations(response)
