"""Data model of a version 3 ``.mflash`` deck."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar, Union

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1

T = TypeVar("T")


class CardKind(Enum):
    """The kind of a flashcard."""

    BASIC = "basic"
    IMAGE_OCCLUSION = "image_occlusion"
    LISTENING = "listening"
    MEDIA_PROMPT = "media_prompt"
    CLOZE = "cloze"

    @classmethod
    def parse(cls, value: Any) -> "CardKind":
        """Read a kind from its engine number or its snake_case name.

        Unknown numbers and names fall back to ``BASIC``; values that are
        neither an integer nor a string raise ``ValueError``.
        """
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise ValueError(f"card kind must be an integer or a string, not {value!r}")
        if isinstance(value, int):
            if not _I32_MIN <= value <= _I32_MAX:
                raise ValueError(f"card kind number out of range: {value}")
            return _KIND_BY_NUMBER.get(value, cls.BASIC)
        try:
            return cls(value)
        except ValueError:
            return cls.BASIC


_KIND_BY_NUMBER = {
    1: CardKind.BASIC,
    2: CardKind.IMAGE_OCCLUSION,
    3: CardKind.LISTENING,
    4: CardKind.MEDIA_PROMPT,
    5: CardKind.CLOZE,
}


# --- field readers -------------------------------------------------------


def _mapping(data: Any, owner: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{owner}: expected an object, got {type(data).__name__}")
    return data


def _required(data: Mapping[str, Any], key: str, owner: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"{owner}: missing field `{key}`") from None


def _req_str(data: Mapping[str, Any], key: str, owner: str) -> str:
    value = _required(data, key, owner)
    if not isinstance(value, str):
        raise ValueError(f"{owner}: field `{key}` must be a string")
    return value


def _opt_str(data: Mapping[str, Any], key: str, owner: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{owner}: field `{key}` must be a string or null")
    return value


def _str_list(data: Mapping[str, Any], key: str, owner: str) -> list[str]:
    if key not in data:
        return []
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{owner}: field `{key}` must be a list of strings")
    return list(value)


def _obj_list(
    data: Mapping[str, Any], key: str, owner: str, build: Callable[[Any], T]
) -> list[T]:
    if key not in data:
        return []
    value = data[key]
    if not isinstance(value, list):
        raise ValueError(f"{owner}: field `{key}` must be a list")
    return [build(item) for item in value]


def _number(data: Mapping[str, Any], key: str, owner: str) -> float:
    value = _required(data, key, owner)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{owner}: field `{key}` must be a number")
    return float(value)


def _put(target: dict[str, Any], key: str, value: Any) -> None:
    """Store an optional value unless it is absent or an empty list."""
    if value is None or (isinstance(value, list) and not value):
        return
    target[key] = value


# --- model classes -------------------------------------------------------


@dataclass
class MediaInfo:
    """A media reference: image, audio or other file."""

    src: str
    media_type: str
    id: str | None = None
    role: str | None = None
    alt: str | None = None
    description: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "MediaInfo":
        data = _mapping(data, "media")
        return cls(
            id=_opt_str(data, "id", "media"),
            src=_req_str(data, "src", "media"),
            media_type=_req_str(data, "type", "media"),
            role=_opt_str(data, "role", "media"),
            alt=_opt_str(data, "alt", "media"),
            description=_opt_str(data, "description", "media"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "id", self.id)
        out["src"] = self.src
        out["type"] = self.media_type
        _put(out, "role", self.role)
        _put(out, "alt", self.alt)
        _put(out, "description", self.description)
        return out


@dataclass
class OcclusionMask:
    """A rectangle hiding part of an occlusion image."""

    id: str
    x: float
    y: float
    width: float
    height: float
    label: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "OcclusionMask":
        data = _mapping(data, "mask")
        return cls(
            id=_req_str(data, "id", "mask"),
            x=_number(data, "x", "mask"),
            y=_number(data, "y", "mask"),
            width=_number(data, "width", "mask"),
            height=_number(data, "height", "mask"),
            label=_opt_str(data, "label", "mask"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }
        _put(out, "label", self.label)
        return out


@dataclass
class Occlusion:
    """An image with masks for image-occlusion cards."""

    image: MediaInfo
    masks: list[OcclusionMask] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Occlusion":
        data = _mapping(data, "occlusion")
        return cls(
            image=MediaInfo.from_dict(_required(data, "image", "occlusion")),
            masks=_obj_list(data, "masks", "occlusion", OcclusionMask.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"image": self.image.to_dict()}
        _put(out, "masks", [mask.to_dict() for mask in self.masks])
        return out


@dataclass
class LexicalInfo:
    """Dictionary-style details about a term."""

    phonetic: str | None = None
    part_of_speech: str | None = None
    forms: list[str] = field(default_factory=list)
    synonyms: list[str] = field(default_factory=list)
    antonyms: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "LexicalInfo":
        data = _mapping(data, "lexical")
        return cls(
            phonetic=_opt_str(data, "phonetic", "lexical"),
            part_of_speech=_opt_str(data, "part_of_speech", "lexical"),
            forms=_str_list(data, "forms", "lexical"),
            synonyms=_str_list(data, "synonyms", "lexical"),
            antonyms=_str_list(data, "antonyms", "lexical"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "phonetic", self.phonetic)
        _put(out, "part_of_speech", self.part_of_speech)
        _put(out, "forms", list(self.forms))
        _put(out, "synonyms", list(self.synonyms))
        _put(out, "antonyms", list(self.antonyms))
        return out


@dataclass
class ExampleInfo:
    """An example sentence with optional translation and media."""

    text: str
    translation: str | None = None
    lang: str | None = None
    translation_lang: str | None = None
    media: list[MediaInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ExampleInfo":
        data = _mapping(data, "example")
        return cls(
            text=_req_str(data, "text", "example"),
            translation=_opt_str(data, "translation", "example"),
            lang=_opt_str(data, "lang", "example"),
            translation_lang=_opt_str(data, "translation_lang", "example"),
            media=_obj_list(data, "media", "example", MediaInfo.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"text": self.text}
        _put(out, "translation", self.translation)
        _put(out, "lang", self.lang)
        _put(out, "translation_lang", self.translation_lang)
        _put(out, "media", [media.to_dict() for media in self.media])
        return out


Example = Union[str, ExampleInfo]


def parse_example(value: Any) -> Example:
    """Read an example given either as plain text or as a detailed object."""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        return ExampleInfo.from_dict(value)
    raise ValueError(f"example must be a string or an object, not {value!r}")


def example_to_data(example: Example) -> Any:
    """Turn an example back into plain JSON-ready data."""
    if isinstance(example, ExampleInfo):
        return example.to_dict()
    return example


@dataclass
class Card:
    """A single flashcard."""

    id: str
    kind: CardKind = CardKind.BASIC
    term: str | None = None
    definition: str | None = None
    prompt: str | None = None
    answer: str | None = None
    term_lang: str | None = None
    def_lang: str | None = None
    notes: str | None = None
    tags: list[str] = field(default_factory=list)
    examples: list[Example] = field(default_factory=list)
    media: list[MediaInfo] = field(default_factory=list)
    occlusion: Occlusion | None = None
    lexical: LexicalInfo | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Card":
        data = _mapping(data, "card")
        kind = data.get("kind")
        occlusion = data.get("occlusion")
        lexical = data.get("lexical")
        return cls(
            id=_req_str(data, "id", "card"),
            kind=CardKind.BASIC if "kind" not in data else CardKind.parse(kind),
            term=_opt_str(data, "term", "card"),
            definition=_opt_str(data, "definition", "card"),
            prompt=_opt_str(data, "prompt", "card"),
            answer=_opt_str(data, "answer", "card"),
            term_lang=_opt_str(data, "term_lang", "card"),
            def_lang=_opt_str(data, "def_lang", "card"),
            notes=_opt_str(data, "notes", "card"),
            tags=_str_list(data, "tags", "card"),
            examples=_obj_list(data, "examples", "card", parse_example),
            media=_obj_list(data, "media", "card", MediaInfo.from_dict),
            occlusion=None if occlusion is None else Occlusion.from_dict(occlusion),
            lexical=None if lexical is None else LexicalInfo.from_dict(lexical),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id, "kind": self.kind.value}
        _put(out, "term", self.term)
        _put(out, "definition", self.definition)
        _put(out, "prompt", self.prompt)
        _put(out, "answer", self.answer)
        _put(out, "term_lang", self.term_lang)
        _put(out, "def_lang", self.def_lang)
        _put(out, "notes", self.notes)
        _put(out, "tags", list(self.tags))
        _put(out, "examples", [example_to_data(example) for example in self.examples])
        _put(out, "media", [media.to_dict() for media in self.media])
        if self.occlusion is not None:
            out["occlusion"] = self.occlusion.to_dict()
        if self.lexical is not None:
            out["lexical"] = self.lexical.to_dict()
        return out


@dataclass
class MFlashDeck:
    """A whole deck: metadata, cover and cards."""

    id: str
    title: str
    format: str = "mflash"
    version: int = 3
    description: str | None = None
    snippet: str | None = None
    default_term_lang: str | None = None
    default_def_lang: str | None = None
    deck_tags: list[str] = field(default_factory=list)
    cover: MediaInfo | None = None
    cards: list[Card] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "MFlashDeck":
        data = _mapping(data, "deck")
        fmt = data.get("format", "mflash")
        if not isinstance(fmt, str):
            raise ValueError("deck: field `format` must be a string")
        version = data.get("version", 3)
        if isinstance(version, bool) or not isinstance(version, int) or not 0 <= version < 2**32:
            raise ValueError("deck: field `version` must be a non-negative integer")
        cover = data.get("cover")
        return cls(
            format=fmt,
            version=version,
            id=_req_str(data, "id", "deck"),
            title=_req_str(data, "title", "deck"),
            description=_opt_str(data, "description", "deck"),
            snippet=_opt_str(data, "snippet", "deck"),
            default_term_lang=_opt_str(data, "default_term_lang", "deck"),
            default_def_lang=_opt_str(data, "default_def_lang", "deck"),
            deck_tags=_str_list(data, "deck_tags", "deck"),
            cover=None if cover is None else MediaInfo.from_dict(cover),
            cards=_obj_list(data, "cards", "deck", Card.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "format": self.format,
            "version": self.version,
            "id": self.id,
            "title": self.title,
        }
        _put(out, "description", self.description)
        _put(out, "snippet", self.snippet)
        _put(out, "default_term_lang", self.default_term_lang)
        _put(out, "default_def_lang", self.default_def_lang)
        _put(out, "deck_tags", list(self.deck_tags))
        if self.cover is not None:
            out["cover"] = self.cover.to_dict()
        _put(out, "cards", [card.to_dict() for card in self.cards])
        return out

    @classmethod
    def from_json(cls, text: str) -> "MFlashDeck":
        """Parse a deck from JSON text; raises ``ValueError`` on bad input."""
        return cls.from_dict(json.loads(text))

    def to_json(self) -> str:
        """Render the deck as pretty-printed JSON."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)