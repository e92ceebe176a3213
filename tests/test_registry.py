"""Tests for the strategy registry and the transformer chain fold."""
from enum import Enum

import pytest

from core.chain import ChainOutcome, run_chain, transform_each
from core.registry import BaseStrategy, StrategyRegistry, UnsupportedStrategyKind


class Color(str, Enum):
    RED = "RED"
    DARK_BLUE = "DARK_BLUE"
    GREEN = "GREEN"


class ColorStrategy(BaseStrategy):
    def __init__(self, kind, label="", enabled=True):
        self.kind = kind
        self.label = label
        self._enabled = enabled

    @property
    def description(self):
        return self.label or super().description

    def is_enabled(self):
        return self._enabled


class Stage:
    """Chain stage that records the units it sees"""

    def __init__(self, name, fn, enabled=True):
        self.kind = Color(name)
        self.fn = fn
        self.enabled = enabled
        self.seen = []

    def is_enabled(self):
        return self.enabled

    def transform(self, unit):
        self.seen.append(unit)
        return self.fn(unit)


class TestStrategyRegistry:
    """Tests for StrategyRegistry."""

    @pytest.fixture
    def registry(self):
        return StrategyRegistry(
            Color,
            [ColorStrategy(Color.RED, "Red one"), ColorStrategy(Color.DARK_BLUE, enabled=False)],
            category="Color"
        )

    def test_resolve_returns_strategy_of_same_kind(self, registry):
        """Every registered kind resolves to a strategy reporting that kind."""
        for kind in registry.list_all():
            assert registry.resolve(kind).kind == kind

    def test_resolve_accepts_strings(self, registry):
        """String kinds are normalized before lookup."""
        assert registry.resolve("red").kind == Color.RED
        assert registry.resolve(" dark-blue ").kind == Color.DARK_BLUE

    def test_resolve_unregistered_kind(self, registry):
        """A valid but unregistered kind raises UnsupportedStrategyKind."""
        with pytest.raises(UnsupportedStrategyKind, match="Unsupported Color kind: GREEN"):
            registry.resolve(Color.GREEN)

    def test_resolve_unknown_string(self, registry):
        """Unknown names raise UnsupportedStrategyKind, which is a ValueError."""
        with pytest.raises(ValueError, match="PURPLE"):
            registry.resolve("PURPLE")

    def test_find_and_contains(self, registry):
        assert registry.find(Color.GREEN) is None
        assert registry.find("RED") is not None
        assert "RED" in registry
        assert Color.GREEN not in registry
        assert registry.is_supported(Color.DARK_BLUE)

    def test_first_registration_wins(self):
        """Duplicate kinds keep the first strategy."""
        first = ColorStrategy(Color.RED, "first")
        registry = StrategyRegistry(Color, [first, ColorStrategy(Color.RED, "second")])

        assert len(registry) == 1
        assert registry.resolve(Color.RED) is first

    def test_enabled_filters_disabled_strategies(self, registry):
        assert [s.kind for s in registry.enabled()] == [Color.RED]

    def test_list_descriptions(self, registry):
        """Descriptions default to the class name."""
        assert registry.list_descriptions() == {
            "RED": "Red one",
            "DARK_BLUE": "ColorStrategy",
        }

    def test_descriptors(self, registry):
        descriptors = registry.descriptors()

        assert descriptors[0].kind == "RED"
        assert descriptors[1].enabled is False

    def test_category_defaults_to_enum_name(self):
        registry = StrategyRegistry(Color, [])

        assert registry.category == "Color"
        assert len(registry) == 0


class TestRunChain:
    """Tests for the short-circuiting chain fold."""

    def test_applies_stages_in_order(self):
        stages = [Stage("RED", lambda s: s + "a"), Stage("GREEN", lambda s: s + "b")]

        outcome = run_chain(stages, "x")

        assert outcome == ChainOutcome(value="xab")
        assert outcome.kept

    def test_discard_stops_chain(self):
        """No stage after a discard observes the unit."""
        later = Stage("GREEN", lambda s: s)
        stages = [Stage("RED", lambda s: None), later]

        outcome = run_chain(stages, "x")

        assert outcome.value is None
        assert outcome.discarded_by == "RED"
        assert not outcome.kept
        assert later.seen == []

    def test_disabled_stage_is_skipped(self):
        disabled = Stage("RED", lambda s: None, enabled=False)

        outcome = run_chain([disabled, Stage("GREEN", lambda s: s.upper())], "x")

        assert outcome.value == "X"
        assert disabled.seen == []

    def test_empty_chain_is_identity(self):
        assert run_chain([], "x").value == "x"


class TestTransformEach:
    """Tests for transform_each."""

    def test_keeps_order_and_counts_discards(self):
        kept, discarded = transform_each(
            lambda n: None if n % 2 else n * 10,
            [1, 2, 3, 4],
            "numbers"
        )

        assert kept == [20, 40]
        assert discarded == 2
