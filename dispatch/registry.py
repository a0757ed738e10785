"""
Strategy registry: maps a dispatch key (WashTier, Addon) to the one
strategy that owns it.

Two objects, two lifetimes:

    StrategyRegistry  (startup, single-threaded, mutable)
        register(key, factory) ... register(key, factory)
                │
                │ freeze()  → instantiate each factory once, validate keys
                ▼
    StrategyResolver  (rest of the process, read-only)
        resolve(key) → strategy   or UnknownKeyError

Why split them?
- Duplicate keys are a deployment bug, so they must blow up at startup,
  not on the first job that happens to use the key.
- After freeze() the mapping is a MappingProxyType that nobody can write to,
  so any number of worker threads can resolve() without a lock.

This replaces an if/elif chain in the processor: adding a wash tier means
one new strategy module plus one line in strategies/registry.py.
"""

import enum
import logging
from types import MappingProxyType
from typing import Callable, Generic, Iterable, Mapping, TypeVar

from dispatch.errors import DuplicateKeyError, InvalidArgumentError, UnknownKeyError

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=enum.Enum)
S = TypeVar("S")


class StrategyResolver(Generic[K, S]):
    """Read-only lookup over a frozen key → strategy mapping."""

    def __init__(self, kind: str, key_type: type[K], strategies: Mapping[K, S]):
        self._kind = kind
        self._key_type = key_type
        self._strategies: Mapping[K, S] = MappingProxyType(dict(strategies))

    @property
    def kind(self) -> str:
        return self._kind

    def resolve(self, key: K) -> S:
        """Return the strategy for key. Raises UnknownKeyError if none is registered."""
        strategy = self._strategies.get(key)
        if strategy is None:
            raise UnknownKeyError(self._kind, key, [k.value for k in self._strategies])
        return strategy

    def keys(self) -> list[K]:
        return list(self._strategies)

    def missing_keys(self) -> list[K]:
        """Members of the key enum that have no strategy."""
        return [k for k in self._key_type if k not in self._strategies]

    def __contains__(self, key) -> bool:
        return key in self._strategies

    def __len__(self) -> int:
        return len(self._strategies)

    def __repr__(self) -> str:
        return f"<StrategyResolver {self._kind} keys={[k.value for k in self._strategies]}>"


class StrategyRegistry(Generic[K, S]):
    """
    Startup-time builder for a StrategyResolver.

    Args:
        kind: human label used in error messages ("wash", "addon")
        key_type: the enum whose members are valid keys
    """

    def __init__(self, kind: str, key_type: type[K]):
        if not kind:
            raise InvalidArgumentError("kind")
        if not (isinstance(key_type, type) and issubclass(key_type, enum.Enum)):
            raise InvalidArgumentError("key_type", "must be an Enum class")
        self._kind = kind
        self._key_type = key_type
        self._factories: dict[K, Callable[[], S]] = {}
        self._frozen = False

    def register(self, key: K, factory: Callable[[], S]) -> None:
        """
        Add one (key, factory) entry.

        Raises:
            InvalidArgumentError: key is not a member of key_type, factory is not
                callable, or the registry is already frozen
            DuplicateKeyError: key already has a factory
        """
        if self._frozen:
            raise InvalidArgumentError("key", f"cannot be registered, {self._kind} registry is frozen")
        if not isinstance(key, self._key_type):
            raise InvalidArgumentError(
                "key", f"must be a {self._key_type.__name__}, got {key!r}"
            )
        if not callable(factory):
            raise InvalidArgumentError("factory", "must be callable")

        existing = self._factories.get(key)
        if existing is not None:
            raise DuplicateKeyError(
                self._kind, key, [_factory_name(existing), _factory_name(factory)]
            )
        self._factories[key] = factory

    def register_all(self, entries: Iterable[tuple[K, Callable[[], S]]]) -> None:
        for key, factory in entries:
            self.register(key, factory)

    def register_strategy(self, strategy_cls: type, **kwargs) -> None:
        """
        Register a strategy class under the key it declares on itself.

        The class carries `key = WashTier.BASIC` (or similar); kwargs are
        passed to its constructor when the registry is frozen.
        """
        key = getattr(strategy_cls, "key", None)
        if not isinstance(key, self._key_type):
            raise InvalidArgumentError(
                "strategy_cls",
                f"{getattr(strategy_cls, '__name__', strategy_cls)!s} declares no "
                f"{self._key_type.__name__} key",
            )
        self.register(key, _StrategyFactory(strategy_cls, kwargs))

    def freeze(self) -> StrategyResolver[K, S]:
        """
        Instantiate every factory once and return the read-only resolver.

        Each instance must declare the same key it was registered under.
        """
        strategies: dict[K, S] = {}
        for key, factory in self._factories.items():
            strategy = factory()
            declared = getattr(strategy, "key", key)
            if declared != key:
                raise InvalidArgumentError(
                    "factory",
                    f"{_factory_name(factory)} declares key '{getattr(declared, 'value', declared)}' "
                    f"but was registered under '{key.value}'",
                )
            strategies[key] = strategy

        self._frozen = True
        logger.info(
            f"{self._kind.capitalize()} registry frozen with "
            f"{len(strategies)} strateg{'y' if len(strategies) == 1 else 'ies'}: "
            f"{[k.value for k in strategies]}"
        )
        return StrategyResolver(self._kind, self._key_type, strategies)

    def __len__(self) -> int:
        return len(self._factories)


class _StrategyFactory:
    """Deferred constructor call that keeps the class name for error messages."""

    def __init__(self, strategy_cls: type, kwargs: dict):
        self.strategy_cls = strategy_cls
        self.kwargs = kwargs

    def __call__(self):
        return self.strategy_cls(**self.kwargs)


def _factory_name(factory) -> str:
    if isinstance(factory, _StrategyFactory):
        return factory.strategy_cls.__name__
    func = getattr(factory, "func", factory)  # unwrap functools.partial
    return getattr(func, "__qualname__", None) or type(func).__name__
