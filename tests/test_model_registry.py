"""
Tests for the per-symbol model registry.
"""

import pytest

from neurotrade.application.trading.model_registry import ModelRegistry
from neurotrade.domain.trading.errors import UnknownSymbolError


class _Model:
    def __init__(self, symbol):
        self.symbol = symbol


class TestModelRegistry:
    def test_create_and_get(self):
        registry = ModelRegistry(_Model)
        model = registry.create("ACME")
        assert registry.get("ACME") is model
        assert "ACME" in registry
        assert len(registry) == 1

    def test_create_replaces(self):
        registry = ModelRegistry(_Model)
        first = registry.create("ACME")
        second = registry.create("ACME")
        assert first is not second
        assert registry.get("ACME") is second
        assert len(registry) == 1

    def test_unknown_symbol(self):
        with pytest.raises(UnknownSymbolError) as exc_info:
            ModelRegistry(_Model).get("NOPE")
        assert exc_info.value.symbol == "NOPE"

    def test_iter_and_clear(self):
        registry = ModelRegistry(_Model)
        for symbol in ("ACME", "IBM"):
            registry.create(symbol)
        assert sorted(registry) == ["ACME", "IBM"]

        registry.clear()
        assert len(registry) == 0
        assert "ACME" not in registry
