"""Reading and writing ``.mflash`` packages and raw deck JSON files."""

from __future__ import annotations

import os
import zipfile
from dataclasses import dataclass
from pathlib import Path

from .models import ExampleInfo, MediaInfo, MFlashDeck

DECK_ENTRY = "deck.json"


class DeckLoadError(Exception):
    """A deck could not be read or is not a supported version."""


@dataclass
class _IngestItem:
    source_path: str
    internal_path: str


def is_raw_json_path(path: str) -> bool:
    """Tell whether a path names a bare JSON deck rather than a package."""
    return path.endswith(".mflash.json") or path.endswith(".json")


def sanitize_file_name(name: str) -> str:
    """Replace every character other than ASCII letters, digits, ``.-_`` with ``_``."""
    return "".join(c if (c.isascii() and c.isalnum()) or c in ".-_" else "_" for c in name)


def is_unsafe_package_path(path: str) -> bool:
    """Tell whether an archive entry name could escape the package."""
    normalized = path.replace("\\", "/")
    if normalized.startswith("/"):
        return True
    if "../" in normalized or normalized == "..":
        return True
    return normalized[1:2] == ":"


def _read_deck_json(path: str) -> str:
    if is_raw_json_path(path):
        return Path(path).read_text(encoding="utf-8")
    with zipfile.ZipFile(path) as archive:
        return archive.read(DECK_ENTRY).decode("utf-8")


def load_mflash(path: str) -> tuple[MFlashDeck, str]:
    """Load a version 3 deck and return it with its normalised JSON text."""
    try:
        deck = MFlashDeck.from_json(_read_deck_json(path))
    except (OSError, zipfile.BadZipFile, KeyError, ValueError) as exc:
        raise DeckLoadError(f"cannot load deck from {path}: {exc}") from exc
    if deck.version != 3:
        raise DeckLoadError("Unsupported deck version. Please use a v3 deck.")
    return deck, deck.to_json()


def save_mflash(source_path: str, dest_path: str, new_json: str) -> None:
    """Save deck JSON to ``dest_path``, packing local media into the archive.

    Absolute media paths that exist are copied into the package and
    rewritten to package-relative paths. When either path is a raw JSON
    path, only the JSON is written. Raises ``ValueError`` on bad JSON.
    """
    deck = MFlashDeck.from_json(new_json)
    queue = _collect_external_assets(deck)
    cleaned = deck.to_json()

    if is_raw_json_path(dest_path) or is_raw_json_path(source_path):
        Path(dest_path).write_text(cleaned, encoding="utf-8")
        return

    _save_packaged(source_path, dest_path, cleaned, queue)


def _save_packaged(
    source_path: str, dest_path: str, cleaned_json: str, queue: list[_IngestItem]
) -> None:
    temp_path = f"{dest_path}.tmp"
    added: set[str] = set()

    with zipfile.ZipFile(temp_path, "w", compression=zipfile.ZIP_DEFLATED) as out:
        for item in queue:
            if item.internal_path in added:
                continue
            try:
                data = Path(item.source_path).read_bytes()
            except OSError:
                continue
            out.writestr(item.internal_path, data)
            added.add(item.internal_path)

        if os.path.exists(source_path):
            _copy_existing_entries(source_path, out, added)

        out.writestr(DECK_ENTRY, cleaned_json.encode("utf-8"))

    os.replace(temp_path, dest_path)


def _copy_existing_entries(source_path: str, out: zipfile.ZipFile, added: set[str]) -> None:
    try:
        original = zipfile.ZipFile(source_path)
    except (OSError, zipfile.BadZipFile):
        return
    with original:
        for info in original.infolist():
            name = info.filename
            if name == DECK_ENTRY or is_unsafe_package_path(name) or name in added:
                continue
            out.writestr(name, original.read(info))
            added.add(name)


def _collect_external_assets(deck: MFlashDeck) -> list[_IngestItem]:
    queue: list[_IngestItem] = []
    used: set[str] = set()

    if deck.cover is not None:
        _ingest_media(deck.cover, queue, "assets/deck", used)

    for card in deck.cards:
        card_dir = f"assets/cards/{sanitize_file_name(card.id)}"
        for media in card.media:
            _ingest_media(media, queue, card_dir, used)
        if card.occlusion is not None:
            _ingest_media(card.occlusion.image, queue, card_dir, used)
        for example in card.examples:
            if isinstance(example, ExampleInfo):
                for media in example.media:
                    _ingest_media(media, queue, card_dir, used)

    return queue


def _split_stem(name: str) -> tuple[str, str]:
    if name == "..":
        return name, ""
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return name, ""
    return stem, ext


def _ingest_media(
    media: MediaInfo, queue: list[_IngestItem], target_dir: str, used: set[str]
) -> None:
    path = Path(media.src)
    if not path.is_absolute() or not path.exists():
        return
    if not path.name:
        return

    safe_name = sanitize_file_name(path.name)
    internal = f"{target_dir}/{safe_name}"

    stem, ext = _split_stem(safe_name)
    suffix = f".{ext}" if ext else ""
    counter = 1
    while internal in used:
        internal = f"{target_dir}/{stem}_{counter}{suffix}"
        counter += 1

    used.add(internal)
    queue.append(_IngestItem(source_path=media.src, internal_path=internal))
    media.src = internal