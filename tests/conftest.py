"""Minimal test fixtures - just what we actually need."""

import io

import pytest

from journal_watch.core.engine import EngineSettings, TailEngine
from journal_watch.core.extractor import FieldExtractor
from journal_watch.core.identity import IdentityResolver
from journal_watch.ui.render import RecordRenderer
from tests.fixtures.sources import FakeLogSource, FakeWaiter

USERS = {0: "root", 1000: "alice"}


def fake_lookup(uid: int) -> str:
    return USERS[uid]


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path, monkeypatch):
    """Keep a developer's own config file out of the tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    yield tmp_path / "config"


@pytest.fixture
def resolver():
    return IdentityResolver(lookup=fake_lookup)


@pytest.fixture
def renderer(resolver):
    return RecordRenderer(FieldExtractor(), resolver)


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def waiter():
    return FakeWaiter()


@pytest.fixture
def make_engine(renderer, output, waiter):
    """Build an engine around a source; opener defaults to a fresh empty source."""

    def _make(source, opener=None, **settings):
        return TailEngine(
            source,
            opener or (lambda: FakeLogSource()),
            renderer,
            output,
            waiter,
            EngineSettings(**settings),
        )

    return _make
