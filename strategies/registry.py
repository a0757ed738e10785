"""
Strategy registration tables: the one place that knows every wash tier
and add-on implementation.

When a worker pulls a car job from Redis it knows the job's wash_tier
("Basic") and add-on keys ("TireShine", ...) but needs the strategy objects
to execute them. The resolvers built here do that lookup.

Each strategy declares its own key (`key = WashTier.BASIC`); the builders
scan the tables and register each class under that key, so a duplicate
declaration fails at startup with DuplicateKeyError.

How to add a new add-on? Create the class, add one line to ADDON_STRATEGIES.
"""

from typing import Optional

from dispatch.events import EventSink
from dispatch.registry import StrategyRegistry, StrategyResolver
from models.enums import Addon, WashTier
from strategies.base import AbstractAddonStrategy, AbstractWashStrategy
from strategies.awesome_wash import AwesomeWash
from strategies.basic_wash import BasicWash
from strategies.hand_wax_and_shine import HandWaxAndShine
from strategies.interior_clean import InteriorClean
from strategies.tire_shine import TireShine
from strategies.to_the_max_wash import ToTheMaxWash

WASH_STRATEGIES: list[type[AbstractWashStrategy]] = [
    BasicWash,
    AwesomeWash,
    ToTheMaxWash,
]

ADDON_STRATEGIES: list[type[AbstractAddonStrategy]] = [
    TireShine,
    InteriorClean,
    HandWaxAndShine,
]


def build_wash_resolver(
    sink: EventSink,
    duration: Optional[float] = None,
    strategies: Optional[list[type[AbstractWashStrategy]]] = None,
) -> StrategyResolver[WashTier, AbstractWashStrategy]:
    """
    Build the read-only wash resolver.

    Args:
        sink: where every wash strategy emits its completion events
        duration: seconds per wash; None → settings.WASH_DURATION
        strategies: override the table (tests use this to inject conflicts)

    Raises:
        DuplicateKeyError: two classes declare the same WashTier
    """
    return _build(
        "wash", WashTier, WASH_STRATEGIES if strategies is None else strategies, sink, duration
    )


def build_addon_resolver(
    sink: EventSink,
    duration: Optional[float] = None,
    strategies: Optional[list[type[AbstractAddonStrategy]]] = None,
) -> StrategyResolver[Addon, AbstractAddonStrategy]:
    """Build the read-only add-on resolver. Same contract as build_wash_resolver."""
    return _build(
        "addon", Addon, ADDON_STRATEGIES if strategies is None else strategies, sink, duration
    )


def _build(kind, key_type, strategy_classes, sink, duration) -> StrategyResolver:
    registry = StrategyRegistry(kind, key_type)
    for strategy_cls in strategy_classes:
        registry.register_strategy(strategy_cls, sink=sink, duration=duration)
    return registry.freeze()
