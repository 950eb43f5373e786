# mflashstudio

A library for working with `.mflash` flashcard decks. It provides:

- a typed deck model
- loading and saving of zip-packaged decks and raw JSON decks
- conversion of a deck's schema text between JSON, TOML, YAML and XML
- an editing state with workspaces, undo/redo and card operations

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Deck model

`mflashstudio.models` holds the deck classes: `MFlashDeck`, `Card`, `CardKind`, `MediaInfo`, `Occlusion`, `OcclusionMask`, `LexicalInfo` and `ExampleInfo`.

Each class has `from_dict` and `to_dict`. `MFlashDeck` also has `from_json` and `to_json`; `to_json` writes pretty JSON.

- **Missing fields.** Optional fields that are missing get their defaults. A deck's `format` defaults to `"mflash"` and its `version` to `3`.
- **Invalid data.** Missing required fields or values of the wrong type raise `ValueError`.
- **Card kinds.** `CardKind.parse` accepts either an engine number (1–5) or a snake_case name such as `"image_occlusion"`. Unknown numbers and names fall back to `BASIC`.
- **Examples.** An example may be plain text or a detailed object. Use `parse_example` and `example_to_data` to convert between the two forms.

## Loading and saving

```python
from mflashstudio.archive import load_mflash, save_mflash

deck, normalized_json = load_mflash("spanish.mflash")
print(deck.title, len(deck.cards))

save_mflash("spanish.mflash", "spanish-copy.mflash", deck.to_json())
```

### Loading

`load_mflash` reads `deck.json` from the zip package. If the path ends in `.json`, it reads the file as plain JSON instead.

It raises `DeckLoadError` in these cases:

- the file cannot be read
- the file cannot be parsed
- the deck's version is not 3

### Saving

`save_mflash` parses the given JSON; invalid JSON raises `ValueError`. It then handles media as follows:

- **Media that gets copied.** Any media `src` that is an absolute path to an existing file is copied into the package, under one of two directories:
  - `assets/deck/` for the cover
  - `assets/cards/<card id>/` for card, occlusion and example media
- **Renamed paths.** Each copied `src` is rewritten to its new package-relative path. File names are sanitised with `sanitize_file_name`. Clashing names are numbered (`name_1.png`, …).
- **Existing entries.** Entries already in the source package are kept, with two exceptions:
  - the old `deck.json`
  - entries whose names could escape the package (see `is_unsafe_package_path`)
- **Write order.** The package is written to `<dest>.tmp`, which then replaces the destination.
- **Raw JSON.** If either path ends in `.json`, only the cleaned JSON is written to the destination.

## Schema formats

```python
from mflashstudio.schema import SchemaFormat, render_deck, parse_deck

yaml_text = render_deck(deck, SchemaFormat.YAML)
same_deck = parse_deck(yaml_text, SchemaFormat.YAML)
```

`SchemaFormat` has four values: `JSON`, `TOML`, `YAML` and `XML`. Text that cannot be rendered or parsed raises `SchemaError`, which is a `ValueError`.

## Editing state

`mflashstudio.app.StudioState` holds the following:

- the open deck
- the schema text and its format
- the selected card
- the current `Workspace`
- the find and replace flags
- the undo and redo stacks

```python
from mflashstudio.app import StudioState, Workspace
from mflashstudio import editing

state = StudioState()
if state.open_deck("spanish.mflash"):
    editing.new_card_from_current_template(state)
    editing.swap_current_card_front_back(state)
    state.undo()
    state.switch_workspace(Workspace.SCHEMA_EDITOR)
```

### Opening a deck

`open_deck` returns `False` and leaves the state unchanged if the deck cannot be loaded.

### Schema text

- `sync_text_to_deck` parses the schema text into the deck.
- `refresh_schema_text` renders the deck back into text.

On failure, these methods store a message in `json_error` rather than raising.

### Workspaces

- **Leaving the schema editor.** This works only if its text parses.
- **Entering the visual editor.** This needs at least one card.
- **Visible workspaces.** `visible_workspaces` follows the `[workspaces]` settings. It falls back to `BROWSE` when none are enabled.
- **Stepping.** `switch_workspace_by_offset` cycles through the visible workspaces.
- **Find bar.** `toggle_find` and `toggle_replace` act only in the schema editor.

### Selection and plugins

`set_index` clamps the selection to the deck. It then passes a copy of the new card to each `Plugin.on_card_change`.

`get_active_plugins` currently returns no plugins.

### Edit actions

`mflashstudio.editing` offers the following actions. Each one that changes the state records an undo step and sets a status message in `json_error`.

**Card operations**

- `new_card_from_current_template`
- `duplicate_current_card`
- `delete_current_card`
- `move_current_card`
- `reset_current_card_media`
- `swap_current_card_front_back`

**Text tools**

- `transform_schema_text`, used with one of:
  - `trim_lines`
  - `normalize_spaces`
  - `sentence_case`
- `clear_schema_text`

**Find stepping**

- `find_next`
- `find_previous`

**Schema actions**

- `format_document`
- `validate_schema`
- `convert_schema_format`

**Selection buffer**

- `select_all`
- `select_current_card_as_json`
- `select_cards_with_media`
- `select_cards_missing_audio`
- `select_cards_missing_images`

These select functions return the matching card indices. The helpers `card_has_audio` and `card_has_image` report whether a card has audio or image media.

## Other helpers

- **Language tags.** `mflashstudio.bcp47.normalize_to_bcp47` maps loose language names and codes to BCP-47 tags. For example, `"Estonian"` becomes `"et-EE"`. Empty input gives `"en-US"`, and unknown input is returned trimmed.
- **Voice matching.** `match_voice_language` picks the first voice language that starts with the normalised tag. `SUPPORTED_LANGUAGES` lists the offered languages.
- **Shortcuts.** `mflashstudio.shortcuts.parse_shortcut("Ctrl+Shift+Tab")` returns a `KeyboardShortcut` (`Modifiers` plus `Key`). It returns `None` if a part is unknown or no key is given.
- **Settings.** `mflashstudio.config.load_config(path="config.toml")` reads settings from a TOML file. It falls back to the built-in defaults if the file is missing, unreadable or incomplete.

## What this package does not do

- **No window or interface.** There is no graphical interface, menu bar or command-line program. Workspaces and shortcuts exist only as state and parsed descriptions.
- **No audio.** Nothing speaks text aloud or plays sounds. The language helpers only choose tags and voice names.
- **No live saving.** There is no live saving into a workspace database.
- **No `.mflash` packing through an external engine.** Saving goes through `save_mflash` only.
- **No image decoding or display.** Media files are not decoded or shown.