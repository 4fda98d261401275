from __future__ import annotations

from app.domains.news.scrapers import SourceRegistry
from tests.utils.news_builders import build_config


def test_registry_preserves_configuration_order():
    registry = SourceRegistry.from_config(build_config("Zeta", "Alpha", "Mid"))

    assert registry.categories() == ["Zeta", "Alpha", "Mid"]
    assert [spec.title for spec in registry] == ["Zeta", "Alpha", "Mid"]
    assert len(registry) == 3


def test_registry_get_by_title():
    registry = SourceRegistry.from_config(build_config("Library", "Sports"))

    assert registry.get("Sports").title == "Sports"
    assert registry.get("Unknown") is None


def test_empty_registry():
    registry = SourceRegistry()

    assert registry.categories() == []
    assert len(registry) == 0
