"""Shared test fixtures and configuration."""

import os
from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


# Test environment that pins every config value the settings model reads
TEST_ENV = {
    "STRICT_SYNTAX": "false",
    "MAX_RESULTS": "0",
    "NAME_WEIGHT": "2.0",
    "TYPE_WEIGHT": "1.8",
    "DESCRIPTION_WEIGHT": "1.6",
    "KIN_WEIGHT": "1.5",
    "KEYWORD_WEIGHT": "1.2",
    "LOG_LEVEL": "info",
    "LOG_JSON": "true",
    "MASK_ERROR_DETAILS": "true",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value
os.environ.pop("CARDS_FILE", None)

from hemolymph.domain.model import Card, CardID, CardIDData, Keyword, StringData


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset config environment variables before each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("CARDS_FILE", raising=False)


def make_card(card_id: str, name: str, **fields) -> Card:
    """Build a card with neutral defaults for every field not given."""
    data = {
        "id": card_id,
        "name": name,
        "type": "creature",
        "description": "",
        "cost": 1,
        "health": 1,
        "defense": 0,
        "power": 1,
    }
    data.update(fields)
    return Card(**data)


@pytest.fixture
def sample_cards() -> list[Card]:
    """A small collection covering every searchable field."""
    return [
        make_card(
            "mantis",
            "Mantis",
            description="Ambush predator.\nStrikes first.",
            cost=3,
            health=2,
            defense=1,
            power=3,
            kins=("mantis",),
            keywords=(Keyword(name="first strike"),),
        ),
        make_card(
            "ant",
            "Ant",
            description="A humble worker.",
            cost=1,
            health=1,
            power=1,
            kins=("antling",),
        ),
        make_card(
            "lost-man",
            "Lost Man",
            type="command",
            description="Search your deck for a card.",
            cost=0,
            health=0,
            power=0,
            keywords=(Keyword(name="search deck", data=StringData(data="any card")),),
        ),
        make_card(
            "anteater",
            "Anteater",
            description="Eats ants whole.",
            cost=4,
            health=5,
            defense=2,
            power=4,
            kins=("beast",),
            keywords=(Keyword(name="devours", data=CardIDData(data=CardID(name="Ant"))),),
        ),
        make_card(
            "flask",
            "Blood Flask",
            type="blood flask",
            description="Gain 2 blood.",
            cost=0,
            health=0,
            power=0,
        ),
    ]


@pytest.fixture
def card_factory():
    """Expose ``make_card`` to tests."""
    return make_card
