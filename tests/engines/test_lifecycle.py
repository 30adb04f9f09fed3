"""Tests for the process-wide engine lifecycle."""

import pytest

import addr_lens
from addr_lens.config import EngineConfig
from addr_lens.engines import LibpostalEngine
from addr_lens.exceptions import EngineNotInitializedError


def test_get_engine_without_setup_raises():
    with pytest.raises(EngineNotInitializedError):
        addr_lens.get_engine()


def test_setup_installs_engine(make_engine):
    engine = make_engine()
    engine.teardown()

    active = addr_lens.setup(engine)

    assert active is engine
    assert engine.is_ready
    assert addr_lens.get_engine() is engine


def test_teardown_clears_engine(active_engine):
    addr_lens.teardown()

    assert not active_engine.is_ready
    with pytest.raises(EngineNotInitializedError):
        addr_lens.get_engine()


def test_teardown_without_setup_is_noop():
    addr_lens.teardown()


def test_setup_replaces_previous_engine(make_engine):
    first = make_engine()
    second = make_engine()
    addr_lens.setup(first)

    addr_lens.setup(second)

    assert not first.is_ready
    assert addr_lens.get_engine() is second


def test_setup_builds_engine_from_config(mocker):
    mocker.patch.object(LibpostalEngine, "setup")

    engine = addr_lens.setup(config=EngineConfig(country="gb"))

    assert isinstance(engine, LibpostalEngine)
    assert engine.config.country == "gb"
    LibpostalEngine.setup.assert_called_once_with()
