import pytest

from config.settings import GameSettings
from game.catalog import load_default_catalog
from game.engine import CaseEngine
from ui.feed import CortexFeed


@pytest.fixture(scope="session")
def catalog():
    return load_default_catalog()


@pytest.fixture()
def settings():
    return GameSettings()


@pytest.fixture()
def engine(catalog, settings):
    return CaseEngine(catalog, settings)


@pytest.fixture()
def feed(settings):
    return CortexFeed.from_settings(settings)
