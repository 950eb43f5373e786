import pytest

from mflashstudio.bcp47 import (
    SUPPORTED_LANGUAGES,
    TtsLanguage,
    match_voice_language,
    normalize_to_bcp47,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("english", "en-US"),
        ("en_us", "en-US"),
        ("English (UK)", "en-GB"),
        (" Estonian ", "et-EE"),
        ("EST", "et-EE"),
        ("lv", "lv-LV"),
        ("lithuanian", "lt-LT"),
        ("fi-FI", "fi-FI"),
        ("swe", "sv-SE"),
        ("is", "is-IS"),
        ("Spanish", "es-ES"),
        ("fra", "fr-FR"),
        ("de-de", "de-DE"),
        ("ita", "it-IT"),
        ("nld", "nl-NL"),
        ("pt-br", "pt-PT"),
        ("russian", "ru-RU"),
        ("pol", "pl-PL"),
        ("uk", "uk-UA"),
        ("jpn", "ja-JP"),
        ("ko", "ko-KR"),
        ("Mandarin", "zh-CN"),
        ("Latin", "la"),
        ("greek", "el-GR"),
        ("he", "he-IL"),
        ("", "en-US"),
        ("   ", "en-US"),
    ],
)
def test_normalize_known_names(text, expected):
    assert normalize_to_bcp47(text) == expected


def test_unknown_tag_passes_through_trimmed():
    assert normalize_to_bcp47("  Tok-Pisin ") == "Tok-Pisin"


def test_normalized_known_tag_is_stable():
    for lang in SUPPORTED_LANGUAGES:
        once = normalize_to_bcp47(lang.bcp_47)
        assert normalize_to_bcp47(once) == once


def test_supported_languages_have_unique_tags():
    tags = [lang.bcp_47 for lang in SUPPORTED_LANGUAGES]
    assert len(tags) == len(set(tags))
    assert SUPPORTED_LANGUAGES[0] == TtsLanguage("English (US)", "en-US")


def test_match_voice_defaults_to_english():
    assert match_voice_language(["fr-FR", "en-US"], None) == "en-US"


def test_match_voice_by_prefix_ignoring_case():
    assert match_voice_language(["fr-fr", "ET-EE-x-voice"], "estonian") == "ET-EE-x-voice"


def test_match_voice_first_match_wins():
    assert match_voice_language(["de-DE-a", "de-DE-b"], "german") == "de-DE-a"


def test_match_voice_none_when_missing():
    assert match_voice_language(["fr-FR", "de-DE"], "japanese") is None


def test_match_voice_empty_list():
    assert match_voice_language([], "en") is None