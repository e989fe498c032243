"""
test_registry.py - Unit tests for Registry identity tables
"""

import pytest

from bourse import Registry, ConfigurationError


class TestRegistry:
    """Tests for get-or-create lookups."""

    def test_same_name_same_instance(self, registry):
        assert registry.company("Acme") is registry.company("Acme")
        assert registry.exchange("NYSE") is registry.exchange("NYSE")
        assert registry.operator("Bob") is registry.operator("Bob")

    def test_registries_are_independent(self):
        first = Registry()
        second = Registry()
        assert first.exchange("NYSE") is not second.exchange("NYSE")

    def test_existing_operator_keeps_balance(self, registry):
        registry.operator("Bob", 100)
        assert registry.operator("Bob", 5).balance == 100

    def test_negative_balance_rejected(self, registry):
        with pytest.raises(ConfigurationError):
            registry.operator("Bob", -1)
        assert registry.operators() == []

    @pytest.mark.parametrize("balance", [2.5, "100", None, True])
    def test_non_integer_balance_rejected(self, registry, balance):
        with pytest.raises(ConfigurationError, match="integer"):
            registry.operator("Bob", balance)
        assert registry.operators() == []

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_names_rejected(self, registry, name):
        with pytest.raises(ConfigurationError):
            registry.company(name)
        with pytest.raises(ConfigurationError):
            registry.exchange(name)
        with pytest.raises(ConfigurationError):
            registry.operator(name)

    def test_enumeration_sorted_by_name(self, registry):
        for name in ["Zeta", "Alpha", "Mu"]:
            registry.company(name)
            registry.exchange(name)
            registry.operator(name)
        assert [c.name for c in registry.companies()] == ["Alpha", "Mu", "Zeta"]
        assert [e.name for e in registry.exchanges()] == ["Alpha", "Mu", "Zeta"]
        assert [o.name for o in registry.operators()] == ["Alpha", "Mu", "Zeta"]

    def test_verbose_flag_reaches_exchanges(self):
        assert Registry(verbose=True).exchange("NYSE").verbose is True
        assert Registry().exchange("NYSE").verbose is False
