"""Shared fixtures: an in-memory address engine."""

import pytest

import addr_lens
from addr_lens.engines.base import BaseEngine


class FakeEngine(BaseEngine):
    """Engine that answers from canned parse and expand tables."""

    name = "fake"

    def __init__(self, parses=None, expansions=None):
        self.parses = parses or {}
        self.expansions = expansions or {}
        self.parse_calls = []
        self.expand_calls = []
        self.options_requested = 0
        self._ready = False

    @property
    def is_ready(self) -> bool:
        return self._ready

    def setup(self) -> None:
        self._ready = True

    def teardown(self) -> None:
        self._ready = False

    def parser_options(self):
        self.options_requested += 1
        return {"kind": "parser"}

    def expand_options(self):
        self.options_requested += 1
        return {"kind": "expand"}

    def parse(self, text, options=None):
        self.parse_calls.append((text, options))
        return list(self.parses.get(text, []))

    def expand(self, text, options=None):
        self.expand_calls.append((text, options))
        return list(self.expansions.get(text, []))


FRANKLIN = "781 Franklin Ave Crown Heights Brooklyn NYC NY 11216 USA"
MAIN_ST = "12 Main St Apt 12"
LOVE_LANE = "fourty seven love lane pinner"

PARSES = {
    FRANKLIN: [
        ("house_number", "781"),
        ("road", "Franklin Ave"),
        ("suburb", "Crown Heights"),
        ("city_district", "Brooklyn"),
        ("city", "NYC"),
        ("state", "NY"),
        ("postal_code", "11216"),
        ("country", "USA"),
    ],
    MAIN_ST: [
        ("house_number", "12"),
        ("road", "Main St"),
        ("unit", "Apt 12"),
    ],
}

EXPANSIONS = {
    LOVE_LANE: ["47 love lane pinner", "forty seven love lane pinner"],
}


@pytest.fixture
def make_engine():
    def _make(parses=None, expansions=None) -> FakeEngine:
        engine = FakeEngine(
            parses=PARSES if parses is None else parses,
            expansions=EXPANSIONS if expansions is None else expansions,
        )
        engine.setup()
        return engine

    return _make


@pytest.fixture
def engine(make_engine):
    return make_engine()


@pytest.fixture
def active_engine(engine):
    """Install the fake engine as the process-wide default."""
    addr_lens.setup(engine)
    yield engine
    addr_lens.teardown()


@pytest.fixture(autouse=True)
def _reset_active_engine():
    yield
    addr_lens.teardown()
