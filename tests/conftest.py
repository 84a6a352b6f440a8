from __future__ import annotations

import pytest
from django.core.cache import cache

from backend.api import views
from helpers import Spies


@pytest.fixture
def spies() -> Spies:
    return Spies()


@pytest.fixture
def installed_pipeline(monkeypatch, spies: Spies) -> Spies:
    monkeypatch.setattr(views, "get_pipeline", spies.pipeline)
    return spies


@pytest.fixture(autouse=True)
def _clear_cache():
    get_pipeline = views.get_pipeline
    cache.clear()
    get_pipeline.cache_clear()
    yield
    cache.clear()
    get_pipeline.cache_clear()
