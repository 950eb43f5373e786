"""Editing state of the studio: workspaces, selection, schema text and history."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum

from .archive import DeckLoadError, load_mflash
from .config import AppConfig
from .models import Card, MFlashDeck
from .schema import SchemaError, SchemaFormat, parse_deck, render_deck


class Workspace(Enum):
    """The views the studio can show."""

    DECK = "deck"
    BROWSE = "browse"
    VISUAL_EDITOR = "visual_editor"
    MEDIA = "media"
    SCHEMA_EDITOR = "schema_editor"


@dataclass
class AppStateSnapshot:
    """A saved copy of the editable state for undo and redo."""

    deck: MFlashDeck | None
    raw_schema_text: str
    selected_index: int


class Plugin:
    """Base for studio plugins; subclasses react to card changes."""

    name: str = "plugin"

    def on_card_change(self, card: Card) -> None:
        """Called with a copy of the newly selected card; does nothing by default."""


def get_active_plugins(enabled_list: list[str]) -> list[Plugin]:
    """Return the plugins to load; none are bundled."""
    return []


@dataclass
class StudioState:
    """Everything the studio knows about the open deck and its views."""

    path: str = ""
    deck: MFlashDeck | None = None
    raw_schema_text: str = ""
    json_error: str | None = None

    active_workspace_id: str | None = None
    active_schema_json: str | None = None
    enable_live_save: bool = True

    workspace: Workspace = Workspace.BROWSE
    active_schema_format: SchemaFormat = SchemaFormat.JSON
    selected_index: int = 0
    search_query: str = ""
    lang_search_query: str = ""

    find_visible: bool = False
    replace_visible: bool = False
    find_query: str = ""
    replace_query: str = ""
    find_use_regex: bool = False
    find_case_sensitive: bool = False
    find_matches: list[tuple[int, int]] = field(default_factory=list)
    current_match_idx: int = 0

    config: AppConfig = field(default_factory=AppConfig)
    plugins: list[Plugin] = field(default_factory=list)

    undo_stack: list[AppStateSnapshot] = field(default_factory=list)
    redo_stack: list[AppStateSnapshot] = field(default_factory=list)

    last_selected_text: str = ""
    last_cursor_range: tuple[int, int] | None = None

    editor_mode: bool = True
    show_images: bool = True
    show_settings: bool = False
    settings_category: str = "Flashcards"

    show_lang_codes: bool = False
    show_phonetic: bool = False
    show_part_of_speech: bool = False
    show_notes: bool = False
    show_tags: bool = False

    enable_tts: bool = True
    enable_media_audio: bool = True

    # --- schema text ---------------------------------------------------

    def refresh_schema_text(self) -> None:
        """Re-render the schema text from the deck in the active format."""
        if self.deck is None:
            self.raw_schema_text = ""
            self.json_error = None
            return
        try:
            self.raw_schema_text = render_deck(self.deck, self.active_schema_format)
        except SchemaError as exc:
            self.json_error = f"Schema Render Error: {exc}"
            return
        self.json_error = None

    def sync_text_to_deck(self) -> bool:
        """Parse the schema text into the deck; return whether it succeeded."""
        try:
            deck = parse_deck(self.raw_schema_text, self.active_schema_format)
        except SchemaError as exc:
            self.json_error = f"Schema Parse Error: {exc}"
            return False
        self.deck = deck
        self.selected_index = min(self.selected_index, len(deck.cards) - 1) if deck.cards else 0
        self.json_error = None
        return True

    def open_deck(self, path: str) -> bool:
        """Open a deck file; on failure the state is left as it was."""
        try:
            deck, json_text = load_mflash(path)
        except DeckLoadError:
            return False
        self.path = path
        self.deck = deck
        self.active_schema_format = SchemaFormat.JSON
        self.raw_schema_text = json_text
        self.selected_index = 0
        self.json_error = None
        return True

    # --- selection and workspaces ---------------------------------------

    def has_valid_selected_card(self) -> bool:
        """Tell whether the selected index points at a card."""
        return self.deck is not None and 0 <= self.selected_index < len(self.deck.cards)

    def switch_workspace(self, target: Workspace) -> None:
        """Move to another workspace when the current state allows it."""
        if self.workspace == target:
            return
        if self.workspace == Workspace.SCHEMA_EDITOR and not self.sync_text_to_deck():
            return
        if target == Workspace.VISUAL_EDITOR:
            if self.deck is None or not self.deck.cards:
                return
            self.selected_index = min(self.selected_index, len(self.deck.cards) - 1)
        if target == Workspace.SCHEMA_EDITOR:
            self.refresh_schema_text()
        self.workspace = target

    def set_index(self, new_index: int) -> None:
        """Select a card, clamped to the deck, and tell the plugins."""
        if self.deck is None or not self.deck.cards:
            return
        index = max(0, min(new_index, len(self.deck.cards) - 1))
        if index == self.selected_index:
            return
        self.selected_index = index
        for plugin in self.plugins:
            plugin.on_card_change(copy.deepcopy(self.deck.cards[index]))

    def visible_workspaces(self) -> list[Workspace]:
        """Workspaces enabled in the settings, never empty."""
        shown = self.config.workspaces
        flags = (
            (shown.show_deck, Workspace.DECK),
            (shown.show_browse, Workspace.BROWSE),
            (shown.show_visual_editor, Workspace.VISUAL_EDITOR),
            (shown.show_media, Workspace.MEDIA),
            (shown.show_schema_editor, Workspace.SCHEMA_EDITOR),
        )
        return [workspace for enabled, workspace in flags if enabled] or [Workspace.BROWSE]

    def switch_workspace_by_offset(self, offset: int) -> None:
        """Step through the visible workspaces, wrapping around."""
        workspaces = self.visible_workspaces()
        try:
            current = workspaces.index(self.workspace)
        except ValueError:
            current = 0
        self.switch_workspace(workspaces[(current + offset) % len(workspaces)])

    def switch_to_visible_workspace(self, target: Workspace) -> None:
        """Switch to ``target`` only if it is visible."""
        if target in self.visible_workspaces():
            self.switch_workspace(target)

    def toggle_find(self) -> None:
        """Show or hide the find bar in the schema editor."""
        if self.workspace != Workspace.SCHEMA_EDITOR:
            return
        self.find_visible = not self.find_visible
        if not self.find_visible:
            self.find_matches.clear()
            self.current_match_idx = 0
            self.replace_visible = False

    def toggle_replace(self) -> None:
        """Show the find bar and toggle replace in the schema editor."""
        if self.workspace != Workspace.SCHEMA_EDITOR:
            return
        self.find_visible = True
        self.replace_visible = not self.replace_visible

    # --- history -------------------------------------------------------

    def _snapshot(self) -> AppStateSnapshot:
        return AppStateSnapshot(
            deck=copy.deepcopy(self.deck),
            raw_schema_text=self.raw_schema_text,
            selected_index=self.selected_index,
        )

    def _restore(self, snapshot: AppStateSnapshot) -> None:
        self.deck = snapshot.deck
        self.raw_schema_text = snapshot.raw_schema_text
        self.selected_index = snapshot.selected_index

    def push_snapshot(self) -> None:
        """Record the current state for undo and forget any redo history."""
        self.undo_stack.append(self._snapshot())
        self.redo_stack.clear()

    def undo(self) -> None:
        """Return to the last recorded state, if any."""
        if not self.undo_stack:
            return
        previous = self.undo_stack.pop()
        self.redo_stack.append(self._snapshot())
        self._restore(previous)

    def redo(self) -> None:
        """Reapply the last undone state, if any."""
        if not self.redo_stack:
            return
        following = self.redo_stack.pop()
        self.undo_stack.append(self._snapshot())
        self._restore(following)