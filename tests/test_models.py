import json

import pytest

from mflashstudio.models import (
    Card,
    CardKind,
    ExampleInfo,
    LexicalInfo,
    MediaInfo,
    MFlashDeck,
    Occlusion,
    OcclusionMask,
    example_to_data,
    parse_example,
)


def _full_deck_data():
    return {
        "format": "mflash",
        "version": 3,
        "id": "deck-1",
        "title": "Animals",
        "description": "Some animals",
        "default_term_lang": "et",
        "default_def_lang": "en",
        "deck_tags": ["zoo"],
        "cover": {"src": "assets/deck/cover.png", "type": "image"},
        "cards": [
            {
                "id": "c1",
                "kind": "image_occlusion",
                "term": "koer",
                "definition": "dog",
                "tags": ["pets"],
                "examples": [
                    "Koer haugub.",
                    {"text": "See on koer.", "translation": "This is a dog.",
                     "media": [{"src": "a.mp3", "type": "audio"}]},
                ],
                "media": [{"id": "m1", "src": "dog.png", "type": "image", "role": "front"}],
                "occlusion": {
                    "image": {"src": "dog.png", "type": "image"},
                    "masks": [{"id": "k", "x": 1.5, "y": 2.0, "width": 3.0,
                               "height": 4.0, "label": "tail"}],
                },
                "lexical": {"phonetic": "koer", "synonyms": ["peni"]},
            }
        ],
    }


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, CardKind.BASIC),
        (2, CardKind.IMAGE_OCCLUSION),
        (3, CardKind.LISTENING),
        (4, CardKind.MEDIA_PROMPT),
        (5, CardKind.CLOZE),
        (99, CardKind.BASIC),
        (0, CardKind.BASIC),
        ("image_occlusion", CardKind.IMAGE_OCCLUSION),
        ("listening", CardKind.LISTENING),
        ("media_prompt", CardKind.MEDIA_PROMPT),
        ("cloze", CardKind.CLOZE),
        ("basic", CardKind.BASIC),
        ("something else", CardKind.BASIC),
    ],
)
def test_card_kind_parse(value, expected):
    assert CardKind.parse(value) is expected


@pytest.mark.parametrize("value", [True, 1.5, None, [1], {"a": 1}, 2**40])
def test_card_kind_parse_rejects_other_types(value):
    with pytest.raises(ValueError):
        CardKind.parse(value)


@pytest.mark.parametrize(
    "number, name",
    [(1, "basic"), (2, "image_occlusion"), (3, "listening"), (4, "media_prompt"), (5, "cloze")],
)
def test_numeric_card_kinds_serialise_as_snake_case(number, name):
    assert Card.from_dict({"id": "c", "kind": number}).to_dict()["kind"] == name


def test_deck_defaults_when_format_and_version_missing():
    deck = MFlashDeck.from_dict({"id": "d", "title": "T"})
    assert deck.format == "mflash"
    assert deck.version == 3
    assert deck.cards == []
    assert deck.cover is None


def test_minimal_deck_serialises_only_required_fields():
    deck = MFlashDeck.from_dict({"id": "d", "title": "T"})
    assert deck.to_dict() == {"format": "mflash", "version": 3, "id": "d", "title": "T"}


def test_full_deck_round_trip_through_dict():
    data = _full_deck_data()
    deck = MFlashDeck.from_dict(data)
    assert MFlashDeck.from_dict(deck.to_dict()) == deck
    # Every explicitly kept value comes back unchanged.
    assert deck.to_dict()["cards"][0]["examples"] == data["cards"][0]["examples"]
    assert deck.to_dict()["cover"] == data["cover"]


def test_full_deck_round_trip_through_json():
    deck = MFlashDeck.from_dict(_full_deck_data())
    text = deck.to_json()
    assert MFlashDeck.from_json(text) == deck
    assert json.loads(text) == deck.to_dict()


def test_to_json_is_indented_by_two_spaces():
    text = MFlashDeck(id="d", title="T").to_json()
    assert text.splitlines()[1] == '  "format": "mflash",'


def test_nested_objects_are_built():
    deck = MFlashDeck.from_dict(_full_deck_data())
    card = deck.cards[0]
    assert card.kind is CardKind.IMAGE_OCCLUSION
    assert card.media[0] == MediaInfo(id="m1", src="dog.png", media_type="image", role="front")
    assert isinstance(card.examples[1], ExampleInfo)
    assert card.examples[0] == "Koer haugub."
    assert card.occlusion.masks[0].label == "tail"
    assert card.lexical.synonyms == ["peni"]


def test_card_kind_numeric_is_written_as_name():
    card = Card.from_dict({"id": "c", "kind": 5})
    assert card.to_dict()["kind"] == "cloze"


def test_card_without_kind_is_basic():
    card = Card.from_dict({"id": "c"})
    assert card.kind is CardKind.BASIC
    assert card.to_dict() == {"id": "c", "kind": "basic"}


def test_media_uses_type_key():
    media = MediaInfo(src="x.png", media_type="image")
    assert media.to_dict() == {"src": "x.png", "type": "image"}
    assert MediaInfo.from_dict(media.to_dict()) == media


def test_media_missing_type_raises():
    with pytest.raises(ValueError):
        MediaInfo.from_dict({"src": "x.png"})


def test_deck_missing_title_raises():
    with pytest.raises(ValueError):
        MFlashDeck.from_dict({"id": "d"})


def test_card_missing_id_raises():
    with pytest.raises(ValueError):
        MFlashDeck.from_dict({"id": "d", "title": "T", "cards": [{"term": "x"}]})


def test_wrong_field_type_raises():
    with pytest.raises(ValueError):
        Card.from_dict({"id": "c", "term": 5})


def test_negative_version_raises():
    with pytest.raises(ValueError):
        MFlashDeck.from_dict({"id": "d", "title": "T", "version": -1})


def test_invalid_json_raises_value_error():
    with pytest.raises(ValueError):
        MFlashDeck.from_json("{not json")


def test_null_optionals_are_none():
    card = Card.from_dict({"id": "c", "term": None, "occlusion": None})
    assert card.term is None
    assert card.occlusion is None


def test_unknown_fields_are_ignored():
    deck = MFlashDeck.from_dict({"id": "d", "title": "T", "extra": 1})
    assert "extra" not in deck.to_dict()


def test_mask_accepts_integers():
    mask = OcclusionMask.from_dict({"id": "m", "x": 1, "y": 2, "width": 3, "height": 4})
    assert (mask.x, mask.y, mask.width, mask.height) == (1.0, 2.0, 3.0, 4.0)


def test_mask_rejects_non_numbers():
    with pytest.raises(ValueError):
        OcclusionMask.from_dict({"id": "m", "x": "1", "y": 2, "width": 3, "height": 4})


def test_occlusion_requires_image():
    with pytest.raises(ValueError):
        Occlusion.from_dict({"masks": []})


def test_empty_lexical_serialises_to_empty_dict():
    assert LexicalInfo().to_dict() == {}


def test_parse_example_variants():
    assert parse_example("hello") == "hello"
    detailed = parse_example({"text": "hi", "lang": "en"})
    assert detailed == ExampleInfo(text="hi", lang="en")
    assert example_to_data(detailed) == {"text": "hi", "lang": "en"}
    assert example_to_data("hello") == "hello"


def test_parse_example_rejects_numbers():
    with pytest.raises(ValueError):
        parse_example(42)