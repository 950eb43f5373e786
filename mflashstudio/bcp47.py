"""Language tags for text-to-speech voices."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class TtsLanguage:
    """A language offered for speech, with its BCP-47 tag."""

    display_name: str
    bcp_47: str


SUPPORTED_LANGUAGES: tuple[TtsLanguage, ...] = (
    TtsLanguage("English (US)", "en-US"),
    TtsLanguage("English (UK)", "en-GB"),
    TtsLanguage("English (Australia)", "en-AU"),
    TtsLanguage("Spanish (Spain)", "es-ES"),
    TtsLanguage("Spanish (Mexico)", "es-MX"),
    TtsLanguage("French (France)", "fr-FR"),
    TtsLanguage("French (Canada)", "fr-CA"),
    TtsLanguage("German (Germany)", "de-DE"),
    TtsLanguage("Japanese", "ja-JP"),
    TtsLanguage("Korean", "ko-KR"),
    TtsLanguage("Chinese (Mandarin, Simplified)", "zh-CN"),
    TtsLanguage("Chinese (Mandarin, Traditional)", "zh-TW"),
    TtsLanguage("Italian", "it-IT"),
    TtsLanguage("Portuguese (Portugal)", "pt-PT"),
    TtsLanguage("Portuguese (Brazil)", "pt-BR"),
    TtsLanguage("Russian", "ru-RU"),
    TtsLanguage("Dutch", "nl-NL"),
    TtsLanguage("Polish", "pl-PL"),
    TtsLanguage("Latin", "la"),
)

DEFAULT_LANGUAGE = "en-US"

_ALIASES: dict[str, tuple[str, ...]] = {
    "en-US": ("english", "eng", "en", "en-us", "en_us"),
    "en-GB": ("english (uk)", "en-gb", "en_gb"),
    "et-EE": ("estonian", "est", "et", "et-ee"),
    "lv-LV": ("latvian", "lav", "lv", "lv-lv"),
    "lt-LT": ("lithuanian", "lit", "lt", "lt-lt"),
    "fi-FI": ("finnish", "fin", "fi", "fi-fi"),
    "sv-SE": ("swedish", "swe", "sv", "sv-se"),
    "is-IS": ("icelandic", "isl", "is", "is-is"),
    "es-ES": ("spanish", "spa", "es", "es-es"),
    "fr-FR": ("french", "fra", "fr", "fr-fr"),
    "de-DE": ("german", "deu", "de", "de-de"),
    "it-IT": ("italian", "ita", "it", "it-it"),
    "nl-NL": ("dutch", "nld", "nl", "nl-nl"),
    "pt-PT": ("portuguese", "por", "pt", "pt-br", "pt-pt"),
    "ru-RU": ("russian", "rus", "ru", "ru-ru"),
    "pl-PL": ("polish", "pol", "pl", "pl-pl"),
    "uk-UA": ("ukrainian", "ukr", "uk", "uk-ua"),
    "ja-JP": ("japanese", "jpn", "ja", "ja-jp"),
    "ko-KR": ("korean", "kor", "ko", "ko-kr"),
    "zh-CN": ("chinese", "mandarin", "zho", "zh", "zh-cn"),
    "la": ("latin", "lat", "la"),
    "el-GR": ("greek", "ell", "el", "el-gr"),
    "he-IL": ("hebrew", "heb", "he", "he-il"),
    DEFAULT_LANGUAGE + "": ("",),
}

_LOOKUP: dict[str, str] = {
    alias: tag for tag, aliases in _ALIASES.items() for alias in aliases
}


def normalize_to_bcp47(text: str) -> str:
    """Map a loose language name or code to a BCP-47 tag.

    Known names and codes are matched case-insensitively; an empty input
    gives ``en-US`` and anything else is returned trimmed, unchanged.
    """
    cleaned = text.strip()
    return _LOOKUP.get(cleaned.lower(), cleaned)


def match_voice_language(
    voice_languages: Iterable[str], language: str | None
) -> str | None:
    """Pick the first voice language that fits the requested language.

    A voice fits when its language equals the normalised tag, or starts
    with it, ignoring case. ``None`` asks for ``en-US``.
    """
    wanted = normalize_to_bcp47(language if language is not None else DEFAULT_LANGUAGE).lower()
    return next(
        (voice for voice in voice_languages if voice.lower().startswith(wanted)),
        None,
    )