import json

import pytest

from mflashstudio.app import StudioState, Workspace
from mflashstudio.editing import (
    can_move_current_card_down,
    can_move_current_card_up,
    card_has_audio,
    card_has_image,
    clear_schema_text,
    convert_schema_format,
    delete_current_card,
    duplicate_current_card,
    find_next,
    find_previous,
    format_document,
    has_current_card,
    move_current_card,
    new_card_from_current_template,
    normalize_spaces,
    reset_current_card_media,
    select_all,
    select_cards_missing_audio,
    select_cards_missing_images,
    select_cards_with_media,
    select_current_card_as_json,
    sentence_case,
    swap_current_card_front_back,
    transform_schema_text,
    trim_lines,
    validate_schema,
)
from mflashstudio.models import Card, MediaInfo, MFlashDeck, Occlusion
from mflashstudio.schema import SchemaFormat, parse_deck


def make_deck():
    return MFlashDeck(
        id="deck",
        title="Words",
        default_term_lang="et",
        default_def_lang="en",
        cards=[
            Card(id="a", term="koer", definition="dog",
                 media=[MediaInfo(src="assets/a.mp3", media_type="audio")]),
            Card(id="b", term="kass", definition="cat",
                 media=[MediaInfo(src="assets/b.png", media_type="file")]),
            Card(id="c", term="hobune", definition="horse"),
        ],
    )


def make_state(**kwargs):
    return StudioState(deck=make_deck(), **kwargs)


def test_has_current_card_and_moves():
    state = make_state()
    assert has_current_card(state)
    assert not can_move_current_card_up(state)
    assert can_move_current_card_down(state)
    state.selected_index = 2
    assert can_move_current_card_up(state)
    assert not can_move_current_card_down(state)
    assert not has_current_card(StudioState())


def test_new_card_inserted_after_selection():
    state = make_state()
    new_card_from_current_template(state)
    cards = state.deck.cards
    assert len(cards) == 4
    assert state.selected_index == 1
    assert cards[1].id == "card-4"
    assert cards[1].term == "" and cards[1].definition == ""
    assert cards[1].term_lang == state.deck.default_term_lang
    assert state.json_error == "Created a new blank card."
    state.undo()
    assert [c.id for c in state.deck.cards] == ["a", "b", "c"]


def test_new_card_in_empty_deck():
    state = StudioState(deck=MFlashDeck(id="deck", title="Empty"))
    new_card_from_current_template(state)
    assert [c.id for c in state.deck.cards] == ["card-1"]
    assert state.selected_index == 0


def test_duplicate_current_card():
    state = make_state(selected_index=1)
    duplicate_current_card(state)
    cards = state.deck.cards
    assert state.selected_index == 2
    assert cards[2].id == "card-4"
    assert cards[2].term == cards[1].term
    cards[2].media.clear()
    assert cards[1].media
    assert state.json_error == "Duplicated current card."


def test_delete_last_card_clamps_selection():
    state = make_state(selected_index=2)
    delete_current_card(state)
    assert [c.id for c in state.deck.cards] == ["a", "b"]
    assert state.selected_index == 1
    assert state.json_error == "Deleted current card."


def test_move_card_down_and_up():
    state = make_state()
    move_current_card(state, 1)
    assert [c.id for c in state.deck.cards] == ["b", "a", "c"]
    assert state.selected_index == 1
    assert state.json_error == "Moved card down."
    move_current_card(state, -1)
    assert [c.id for c in state.deck.cards] == ["a", "b", "c"]
    assert state.json_error == "Moved card up."


def test_move_out_of_bounds_does_nothing():
    state = make_state()
    move_current_card(state, -1)
    assert [c.id for c in state.deck.cards] == ["a", "b", "c"]
    assert state.undo_stack == []


def test_reset_media():
    state = make_state()
    state.deck.cards[0].occlusion = Occlusion(image=MediaInfo(src="x.png", media_type="image"))
    reset_current_card_media(state)
    assert state.deck.cards[0].media == []
    assert state.deck.cards[0].occlusion is None
    assert state.json_error == "Reset current card media and occlusion data."


def test_swap_front_back():
    state = make_state()
    state.deck.cards[0].term_lang = "et"
    swap_current_card_front_back(state)
    card = state.deck.cards[0]
    assert (card.term, card.definition) == ("dog", "koer")
    assert (card.term_lang, card.def_lang) == (None, "et")
    state.undo()
    assert state.deck.cards[0].term == "koer"


def test_transform_and_clear_schema_text_are_undoable():
    state = make_state(raw_schema_text="Hello")
    transform_schema_text(state, str.upper)
    assert state.raw_schema_text == "HELLO"
    assert state.json_error == "Text tool applied to schema text."
    clear_schema_text(state)
    assert state.raw_schema_text == ""
    state.undo()
    assert state.raw_schema_text == "HELLO"


@pytest.mark.parametrize(
    "text, expected",
    [("  a  \n b\n", "a\nb"), ("", ""), ("x\r\n y ", "x\ny")],
)
def test_trim_lines(text, expected):
    assert trim_lines(text) == expected


def test_normalize_spaces_and_sentence_case():
    assert normalize_spaces("  a   b\n\tc ") == "a b c"
    assert sentence_case("  hELLO World ") == "Hello world"
    assert sentence_case("   ") == ""


def test_find_stepping_wraps():
    state = make_state(find_matches=[(0, 1), (2, 3), (4, 5)])
    find_previous(state)
    assert state.current_match_idx == 2
    assert state.json_error == "Find match 3 of 3."
    find_next(state)
    assert state.current_match_idx == 0


def test_find_without_matches():
    state = make_state()
    find_next(state)
    assert state.json_error == "No find matches available yet."


def test_convert_from_other_workspace_opens_schema_editor():
    state = make_state()
    assert convert_schema_format(state, SchemaFormat.YAML, "YAML")
    assert state.workspace == Workspace.SCHEMA_EDITOR
    assert state.active_schema_format == SchemaFormat.YAML
    assert parse_deck(state.raw_schema_text, SchemaFormat.YAML) == state.deck
    assert state.json_error == "Opened Schema Editor as YAML."


def test_convert_inside_schema_editor():
    state = make_state()
    state.switch_workspace(Workspace.SCHEMA_EDITOR)
    original = state.deck
    assert convert_schema_format(state, SchemaFormat.TOML, "TOML")
    assert parse_deck(state.raw_schema_text, SchemaFormat.TOML) == original
    assert state.json_error == "Schema converted to TOML."


def test_format_and_validate_reject_bad_text():
    state = make_state()
    state.switch_workspace(Workspace.SCHEMA_EDITOR)
    state.raw_schema_text = "{ not json"
    assert not format_document(state)
    assert state.json_error.startswith("Schema Parse Error")
    assert not validate_schema(state)


def test_format_document_round_trips():
    state = make_state()
    state.switch_workspace(Workspace.SCHEMA_EDITOR)
    state.raw_schema_text = json.dumps(json.loads(state.raw_schema_text))
    assert format_document(state)
    assert state.raw_schema_text == state.deck.to_json()
    assert state.json_error == "Schema formatted successfully."


def test_validate_outside_schema_editor_is_refused():
    state = make_state()
    assert not validate_schema(state)
    assert state.json_error is None


def test_select_all():
    state = make_state()
    select_all(state)
    assert state.json_error == "Select All is currently implemented for the Schema Editor buffer."
    state.switch_workspace(Workspace.SCHEMA_EDITOR)
    select_all(state)
    assert state.last_selected_text == state.raw_schema_text


def test_select_current_card_as_json():
    state = make_state(selected_index=1)
    select_current_card_as_json(state)
    assert Card.from_dict(json.loads(state.last_selected_text)) == state.deck.cards[1]


def test_selection_queries():
    state = make_state()
    assert select_cards_with_media(state) == [0, 1]
    assert state.last_selected_text == "0, 1"
    assert state.json_error == "Selected 2 card(s) with media into the app selection buffer."
    assert select_cards_missing_audio(state) == [1, 2]
    assert select_cards_missing_images(state) == [0, 2]


def test_card_media_detection():
    by_role = Card(id="r", media=[MediaInfo(src="x.bin", media_type="file", role="Audio")])
    assert card_has_audio(by_role)
    assert not card_has_image(by_role)
    with_occlusion = Card(id="o", occlusion=Occlusion(image=MediaInfo(src="y", media_type="x")))
    assert card_has_image(with_occlusion)
    upper_ext = Card(id="u", media=[MediaInfo(src="clip.MP3", media_type="file")])
    assert not card_has_audio(upper_ext)