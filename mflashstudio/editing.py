"""Edit-menu actions: card operations, text tools, find stepping and selections."""

from __future__ import annotations

import copy
import json
from collections.abc import Callable

from .app import StudioState, Workspace
from .models import Card, CardKind
from .schema import SchemaFormat

_AUDIO_EXTENSIONS = (".mp3", ".wav", ".ogg", ".flac", ".m4a")
_IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp", ".gif", ".bmp", ".svg")


# --- card checks ----------------------------------------------------------


def has_current_card(state: StudioState) -> bool:
    """Tell whether the selection points at an existing card."""
    return state.deck is not None and 0 <= state.selected_index < len(state.deck.cards)


def can_move_current_card_up(state: StudioState) -> bool:
    """Tell whether the selected card has a card above it."""
    return has_current_card(state) and state.selected_index > 0


def can_move_current_card_down(state: StudioState) -> bool:
    """Tell whether the selected card has a card below it."""
    if state.deck is None:
        return False
    return has_current_card(state) and state.selected_index + 1 < len(state.deck.cards)


# --- card operations ------------------------------------------------------


def new_card_from_current_template(state: StudioState) -> None:
    """Insert a blank card after the selected one and select it."""
    deck = state.deck
    if deck is None:
        return
    if deck.cards:
        insert_at = min(state.selected_index, len(deck.cards) - 1) + 1
    else:
        insert_at = 0

    state.push_snapshot()
    deck = state.deck
    new_card = Card(
        id=f"card-{len(deck.cards) + 1}",
        kind=CardKind.BASIC,
        term="",
        definition="",
        term_lang=deck.default_term_lang,
        def_lang=deck.default_def_lang,
    )
    deck.cards.insert(insert_at, new_card)
    state.selected_index = insert_at
    state.json_error = "Created a new blank card."


def duplicate_current_card(state: StudioState) -> None:
    """Insert a copy of the selected card right after it and select the copy."""
    if not has_current_card(state):
        return
    deck = state.deck
    insert_at = state.selected_index + 1
    cloned = copy.deepcopy(deck.cards[state.selected_index])
    cloned.id = f"card-{len(deck.cards) + 1}"

    state.push_snapshot()
    state.deck.cards.insert(insert_at, cloned)
    state.selected_index = insert_at
    state.json_error = "Duplicated current card."


def delete_current_card(state: StudioState) -> None:
    """Remove the selected card, keeping the selection inside the deck."""
    if not has_current_card(state):
        return
    state.push_snapshot()
    cards = state.deck.cards
    del cards[state.selected_index]
    state.selected_index = min(state.selected_index, len(cards) - 1) if cards else 0
    state.json_error = "Deleted current card."


def move_current_card(state: StudioState, direction: int) -> None:
    """Swap the selected card with its neighbour ``direction`` steps away."""
    if not has_current_card(state):
        return
    current = state.selected_index
    target = current + direction
    if not 0 <= target < len(state.deck.cards):
        return

    state.push_snapshot()
    cards = state.deck.cards
    cards[current], cards[target] = cards[target], cards[current]
    state.selected_index = target
    state.json_error = "Moved card up." if direction < 0 else "Moved card down."


def reset_current_card_media(state: StudioState) -> None:
    """Drop all media and occlusion data from the selected card."""
    if not has_current_card(state):
        return
    state.push_snapshot()
    card = state.deck.cards[state.selected_index]
    card.media.clear()
    card.occlusion = None
    state.json_error = "Reset current card media and occlusion data."


def swap_current_card_front_back(state: StudioState) -> None:
    """Exchange term/definition, prompt/answer and their languages."""
    if not has_current_card(state):
        return
    state.push_snapshot()
    card = state.deck.cards[state.selected_index]
    card.term, card.definition = card.definition, card.term
    card.prompt, card.answer = card.answer, card.prompt
    card.term_lang, card.def_lang = card.def_lang, card.term_lang
    state.json_error = "Swapped current card front/back fields."


# --- text tools -----------------------------------------------------------


def transform_schema_text(state: StudioState, transform: Callable[[str], str]) -> None:
    """Apply ``transform`` to the schema text, recording an undo step."""
    state.push_snapshot()
    state.raw_schema_text = transform(state.raw_schema_text)
    state.json_error = "Text tool applied to schema text."


def clear_schema_text(state: StudioState) -> None:
    """Empty the schema text, recording an undo step."""
    state.push_snapshot()
    state.raw_schema_text = ""
    state.json_error = "Schema text cleared. Use Undo to restore it."


def trim_lines(text: str) -> str:
    """Strip surrounding whitespace from every line."""
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return "\n".join(line.strip() for line in lines)


def normalize_spaces(text: str) -> str:
    """Collapse all runs of whitespace, newlines included, into single spaces."""
    return " ".join(text.split())


def sentence_case(text: str) -> str:
    """Trim, upper-case the first character and lower-case the rest."""
    trimmed = text.strip()
    if not trimmed:
        return ""
    return trimmed[0].upper() + trimmed[1:].lower()


# --- find -----------------------------------------------------------------


def _report_match(state: StudioState) -> None:
    state.json_error = (
        f"Find match {state.current_match_idx + 1} of {len(state.find_matches)}."
    )


def find_next(state: StudioState) -> None:
    """Step to the next find match, wrapping around."""
    if not state.find_matches:
        state.json_error = "No find matches available yet."
        return
    state.current_match_idx = (state.current_match_idx + 1) % len(state.find_matches)
    _report_match(state)


def find_previous(state: StudioState) -> None:
    """Step to the previous find match, wrapping around."""
    if not state.find_matches:
        state.json_error = "No find matches available yet."
        return
    if state.current_match_idx == 0:
        state.current_match_idx = len(state.find_matches) - 1
    else:
        state.current_match_idx -= 1
    _report_match(state)


# --- schema editor --------------------------------------------------------


def format_document(state: StudioState) -> bool:
    """Reparse and re-render the schema text; only in the schema editor."""
    if state.workspace != Workspace.SCHEMA_EDITOR:
        return False
    if not state.sync_text_to_deck():
        return False
    state.refresh_schema_text()
    state.json_error = "Schema formatted successfully."
    return True


def validate_schema(state: StudioState) -> bool:
    """Check that the schema text parses; only in the schema editor."""
    if state.workspace != Workspace.SCHEMA_EDITOR:
        return False
    if not state.sync_text_to_deck():
        return False
    state.json_error = "Schema is valid."
    return True


def convert_schema_format(state: StudioState, target_format: SchemaFormat, label: str) -> bool:
    """Show the deck in another text format.

    In the schema editor the current text must parse first; elsewhere the
    schema editor is opened in the new format.
    """
    if state.workspace == Workspace.SCHEMA_EDITOR:
        if not state.sync_text_to_deck():
            return False
        state.active_schema_format = target_format
        state.refresh_schema_text()
        state.json_error = f"Schema converted to {label}."
        return True

    state.active_schema_format = target_format
    state.switch_workspace(Workspace.SCHEMA_EDITOR)
    state.refresh_schema_text()
    state.json_error = f"Opened Schema Editor as {label}."
    return True


# --- selection ------------------------------------------------------------


def select_all(state: StudioState) -> None:
    """Copy the schema text into the selection buffer."""
    if state.workspace == Workspace.SCHEMA_EDITOR:
        state.last_selected_text = state.raw_schema_text
        state.json_error = "Schema text copied into the app selection buffer."
    else:
        state.json_error = "Select All is currently implemented for the Schema Editor buffer."


def select_current_card_as_json(state: StudioState) -> None:
    """Put the selected card, as pretty JSON, into the selection buffer."""
    if not has_current_card(state):
        return
    card = state.deck.cards[state.selected_index]
    try:
        card_json = json.dumps(card.to_dict(), indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        state.json_error = f"Selection Error: {exc}"
        return
    state.last_selected_text = card_json
    state.json_error = "Current card copied into the app selection buffer."


def _select_where(
    state: StudioState, predicate: Callable[[Card], bool], label: str
) -> list[int]:
    if state.deck is None:
        return []
    indices = [index for index, card in enumerate(state.deck.cards) if predicate(card)]
    state.last_selected_text = ", ".join(str(index) for index in indices)
    state.json_error = f"Selected {len(indices)} {label} into the app selection buffer."
    return indices


def select_cards_with_media(state: StudioState) -> list[int]:
    """Select the indices of cards that have any media."""
    return _select_where(state, lambda card: bool(card.media), "card(s) with media")


def select_cards_missing_audio(state: StudioState) -> list[int]:
    """Select the indices of cards without audio."""
    return _select_where(
        state, lambda card: not card_has_audio(card), "card(s) missing audio"
    )


def select_cards_missing_images(state: StudioState) -> list[int]:
    """Select the indices of cards without images."""
    return _select_where(
        state, lambda card: not card_has_image(card), "card(s) missing images"
    )


def card_has_audio(card: Card) -> bool:
    """Tell whether any media of the card looks like audio."""
    return any(
        "audio" in media.media_type.lower()
        or "audio" in (media.role or "").lower()
        or media.src.endswith(_AUDIO_EXTENSIONS)
        for media in card.media
    )


def card_has_image(card: Card) -> bool:
    """Tell whether the card has an occlusion image or image media."""
    if card.occlusion is not None:
        return True
    return any(
        "image" in media.media_type.lower()
        or "image" in (media.role or "").lower()
        or media.src.endswith(_IMAGE_EXTENSIONS)
        for media in card.media
    )