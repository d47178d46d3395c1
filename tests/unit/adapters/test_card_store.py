"""Unit tests for card loading and the in-memory card store."""

import threading

import orjson
from prometheus_client import REGISTRY
import pytest

from hemolymph.adapters.card_store import CardLoadError, CardStore, load_cards, parse_cards
from hemolymph.domain.model import CardID, CardIDData, StringData


CARDS_JSON = [
    {
        "id": "ant",
        "name": "Ant",
        "type": "creature",
        "description": "A humble worker.",
        "cost": 1,
        "health": 1,
        "defense": 0,
        "power": 1,
        "kins": ["antling"],
    },
    {
        "id": "anteater",
        "name": "Anteater",
        "type": "creature",
        "description": "Eats ants whole.",
        "cost": 4,
        "health": 5,
        "defense": 2,
        "power": 4,
        "img": ["anteater1", "anteater2"],
        "keywords": [
            {"name": "devours", "data": {"type": "CardID", "data": {"name": "Ant"}}},
            {"name": "note", "data": "plain text"},
        ],
    },
]


@pytest.mark.unit
class TestParseCards:
    """JSON decoding turns failures into CardLoadError."""

    def test_parses_valid_payload(self):
        cards = parse_cards(orjson.dumps(CARDS_JSON))

        assert [card.id for card in cards] == ["ant", "anteater"]
        assert cards[1].keywords[0].card_reference().name == "Ant"
        assert cards[0].keywords == ()

    def test_decodes_tagged_keyword_data(self):
        payload = b"""[{
            "id": "anteater", "name": "Anteater", "type": "creature", "description": "",
            "cost": 4, "health": 5, "defense": 2, "power": 4,
            "keywords": [
                {"name": "devours", "data": {"type": "CardID", "data": {"name": "Ant", "kins": ["antling"]}}},
                {"name": "search deck", "data": {"type": "String", "data": "any card"}},
                {"name": "first strike"}
            ]
        }]"""

        devours, search_deck, first_strike = parse_cards(payload)[0].keywords

        assert devours.data == CardIDData(data=CardID(name="Ant", kins=("antling",)))
        assert search_deck.data == StringData(data="any card")
        assert first_strike.data is None

    @pytest.mark.parametrize(
        "data",
        [
            {"type": "CardID", "name": "Ant"},
            {"type": "String", "value": "any card"},
        ],
    )
    def test_untagged_keyword_payload_rejected(self, data):
        card = {**CARDS_JSON[0], "keywords": [{"name": "devours", "data": data}]}

        with pytest.raises(CardLoadError, match="validation"):
            parse_cards(orjson.dumps([card]))

    def test_accepts_text_payload(self):
        assert len(parse_cards(orjson.dumps(CARDS_JSON).decode("utf-8"))) == 2

    def test_malformed_json(self):
        with pytest.raises(CardLoadError, match="Malformed"):
            parse_cards(b"[{")

    def test_schema_failure(self):
        broken = [{**CARDS_JSON[0]}]
        del broken[0]["cost"]

        with pytest.raises(CardLoadError, match="validation"):
            parse_cards(orjson.dumps(broken))

    def test_non_list_payload(self):
        with pytest.raises(CardLoadError):
            parse_cards(b'{"id": "ant"}')


@pytest.mark.unit
class TestLoadCards:
    """File loading."""

    def test_loads_file(self, tmp_path):
        path = tmp_path / "cards.json"
        path.write_bytes(orjson.dumps(CARDS_JSON))

        assert len(load_cards(path)) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(CardLoadError, match="Cannot read"):
            load_cards(tmp_path / "missing.json")


@pytest.mark.unit
class TestCardStore:
    """Replace-on-refresh store with immutable snapshots."""

    def test_starts_empty(self):
        store = CardStore()

        assert store.snapshot() == ()
        assert len(store) == 0

    def test_replace_swaps_collection(self, sample_cards):
        store = CardStore(sample_cards[:2])
        old_snapshot = store.snapshot()

        store.replace(sample_cards[2:])

        assert [card.id for card in store.snapshot()] == ["lost-man", "anteater", "flask"]
        assert [card.id for card in old_snapshot] == ["mantis", "ant"]

    def test_get_by_id(self, sample_cards):
        store = CardStore(sample_cards)

        assert store.get("ant") is sample_cards[1]
        assert store.get("missing") is None

    def test_load_file_replaces_contents(self, tmp_path, sample_cards):
        path = tmp_path / "cards.json"
        path.write_bytes(orjson.dumps(CARDS_JSON))
        store = CardStore(sample_cards)

        assert store.load_file(path) == 2
        assert store.get("mantis") is None
        assert store.get("anteater") is not None

    def test_failed_load_keeps_previous_contents(self, tmp_path, sample_cards):
        path = tmp_path / "cards.json"
        path.write_bytes(b"not json")
        store = CardStore(sample_cards)

        with pytest.raises(CardLoadError):
            store.load_file(path)

        assert len(store) == len(sample_cards)

    def test_updates_card_count_gauge(self, sample_cards):
        CardStore(sample_cards)

        assert REGISTRY.get_sample_value("hemolymph_store_cards") == len(sample_cards)

    def test_concurrent_readers_see_whole_collections(self, sample_cards):
        store = CardStore(sample_cards)
        sizes: set[int] = set()

        def read():
            for _ in range(200):
                sizes.add(len(store.snapshot()))

        readers = [threading.Thread(target=read) for _ in range(4)]
        for reader in readers:
            reader.start()
        for _ in range(50):
            store.replace(sample_cards[:2])
            store.replace(sample_cards)
        for reader in readers:
            reader.join()

        assert sizes <= {2, len(sample_cards)}
