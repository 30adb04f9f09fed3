"""Tests for the libpostal engine binding."""

import sys
from types import ModuleType

import pytest

from addr_lens.config import EngineConfig
from addr_lens.engines import ExpandOptions, LibpostalEngine, ParserOptions
from addr_lens.exceptions import EngineNotInitializedError, EngineSetupError


@pytest.fixture
def fake_postal(monkeypatch):
    """Stand-in pypostal modules recording their calls."""
    calls = {"parse": [], "expand": []}

    def parse_address(address, **kwargs):
        calls["parse"].append((address, kwargs))
        return [("781", "house_number"), ("franklin ave", "road"), ("11216", "postcode")]

    def expand_address(address, **kwargs):
        calls["expand"].append((address, kwargs))
        return ["781 franklin avenue", "781 franklin ave"]

    package = ModuleType("postal")
    parser = ModuleType("postal.parser")
    parser.parse_address = parse_address
    expand = ModuleType("postal.expand")
    expand.expand_address = expand_address
    package.parser = parser
    package.expand = expand

    monkeypatch.setitem(sys.modules, "postal", package)
    monkeypatch.setitem(sys.modules, "postal.parser", parser)
    monkeypatch.setitem(sys.modules, "postal.expand", expand)
    return calls


def test_parse_before_setup_raises():
    engine = LibpostalEngine()

    assert not engine.is_ready
    with pytest.raises(EngineNotInitializedError):
        engine.parse("781 Franklin Ave")
    with pytest.raises(EngineNotInitializedError):
        engine.expand("781 Franklin Ave")


def test_setup_failure_is_wrapped(monkeypatch):
    monkeypatch.setitem(sys.modules, "postal", None)
    monkeypatch.setitem(sys.modules, "postal.parser", None)

    with pytest.raises(EngineSetupError):
        LibpostalEngine().setup()


def test_parse_flips_pairs_to_label_value(fake_postal):
    engine = LibpostalEngine()
    engine.setup()

    pairs = engine.parse("781 Franklin Ave 11216", engine.parser_options())

    assert pairs == [("house_number", "781"), ("road", "franklin ave"), ("postcode", "11216")]
    assert fake_postal["parse"] == [("781 Franklin Ave 11216", {})]


def test_parse_passes_language_and_country(fake_postal):
    engine = LibpostalEngine(config=EngineConfig(language="en", country="us"))
    engine.setup()

    options = engine.parser_options()
    engine.parse("781 Franklin Ave", options)

    assert options == ParserOptions(language="en", country="us")
    assert fake_postal["parse"][0][1] == {"language": "en", "country": "us"}


def test_expand_passes_languages(fake_postal):
    engine = LibpostalEngine(config=EngineConfig(expand_languages=("en", "fr")))
    engine.setup()

    options = engine.expand_options()
    result = engine.expand("781 Franklin Ave", options)

    assert options == ExpandOptions(languages=("en", "fr"))
    assert result == ["781 franklin avenue", "781 franklin ave"]
    assert fake_postal["expand"][0][1] == {"languages": ["en", "fr"]}


def test_teardown_disables_engine(fake_postal):
    engine = LibpostalEngine()
    engine.setup()
    assert engine.is_ready

    engine.teardown()

    assert not engine.is_ready
    with pytest.raises(EngineNotInitializedError):
        engine.parse("781 Franklin Ave")
