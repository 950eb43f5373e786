"""Rendering and parsing a deck in JSON, TOML, YAML or XML."""

from __future__ import annotations

import json
import tomllib
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Any

import tomli_w
import yaml

from .models import MFlashDeck

_XML_ROOT = "MFlashDeck"
_LIST_KEYS = frozenset(
    {"deck_tags", "cards", "tags", "examples", "media", "masks", "forms", "synonyms", "antonyms"}
)
_OBJECT_KEYS = frozenset({"cover", "image", "occlusion", "lexical", "cards", "media", "masks"})
_FLOAT_KEYS = frozenset({"x", "y", "width", "height"})


class SchemaFormat(Enum):
    """Text formats the schema editor can show a deck in."""

    JSON = "json"
    TOML = "toml"
    YAML = "yaml"
    XML = "xml"


class SchemaError(ValueError):
    """Deck text could not be rendered or parsed."""


def render_deck(deck: MFlashDeck, schema_format: SchemaFormat) -> str:
    """Render a deck as text in the given format."""
    data = deck.to_dict()
    try:
        if schema_format is SchemaFormat.JSON:
            return json.dumps(data, indent=2, ensure_ascii=False)
        if schema_format is SchemaFormat.TOML:
            return tomli_w.dumps(data)
        if schema_format is SchemaFormat.YAML:
            return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
        return _render_xml(data)
    except (TypeError, ValueError, yaml.YAMLError) as exc:
        raise SchemaError(str(exc)) from exc


def parse_deck(text: str, schema_format: SchemaFormat) -> MFlashDeck:
    """Parse deck text in the given format; raises ``SchemaError``."""
    try:
        if schema_format is SchemaFormat.JSON:
            data = json.loads(text)
        elif schema_format is SchemaFormat.TOML:
            data = tomllib.loads(text)
        elif schema_format is SchemaFormat.YAML:
            data = yaml.safe_load(text)
        else:
            data = _parse_xml(text)
        return MFlashDeck.from_dict(data)
    except (ValueError, yaml.YAMLError, ET.ParseError) as exc:
        raise SchemaError(str(exc)) from exc


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _fill_element(element: ET.Element, data: dict[str, Any]) -> None:
    for key, value in data.items():
        for item in value if isinstance(value, list) else [value]:
            child = ET.SubElement(element, key)
            if isinstance(item, dict):
                _fill_element(child, item)
            else:
                child.text = _scalar_text(item)


def _render_xml(data: dict[str, Any]) -> str:
    root = ET.Element(_XML_ROOT)
    _fill_element(root, data)
    return ET.tostring(root, encoding="unicode")


def _element_value(element: ET.Element) -> Any:
    key = element.tag
    if key in _OBJECT_KEYS or (key == "examples" and len(element)):
        return _element_to_dict(element)
    text = element.text or ""
    if key == "version":
        return int(text)
    if key in _FLOAT_KEYS:
        return float(text)
    return text


def _element_to_dict(element: ET.Element) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for child in element:
        value = _element_value(child)
        if child.tag in _LIST_KEYS:
            out.setdefault(child.tag, []).append(value)
        else:
            out[child.tag] = value
    return out


def _parse_xml(text: str) -> dict[str, Any]:
    return _element_to_dict(ET.fromstring(text))