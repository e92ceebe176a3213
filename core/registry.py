"""
Capability registry shared by every strategy category.

A registry maps a closed set of kind tags (an Enum) to strategy instances.
It is built once at startup from an explicit registration list and is
read-only afterwards, so concurrent lookups need no locking.
"""
from abc import ABC
from enum import Enum
from typing import Dict, Generic, Iterable, List, Optional, Type, TypeVar, Union
import logging

from domain.models import StrategyDescriptor

logger = logging.getLogger(__name__)


class UnsupportedStrategyKind(ValueError):
    """Raised when a kind is not registered in a registry"""

    def __init__(self, category: str, kind):
        self.category = category
        self.kind = kind
        super().__init__(f"Unsupported {category} kind: {kind}")


class BaseStrategy(ABC):
    """
    Common surface of every registered strategy.

    Subclasses set ``kind`` and override ``description`` when the text
    depends on their configuration.
    """

    kind: Enum

    @property
    def description(self) -> str:
        return self.__class__.__name__

    def is_enabled(self) -> bool:
        return True

    def descriptor(self) -> StrategyDescriptor:
        return StrategyDescriptor(
            kind=self.kind.value,
            description=self.description,
            enabled=self.is_enabled()
        )


K = TypeVar("K", bound=Enum)
S = TypeVar("S", bound=BaseStrategy)


def coerce_kind(kind_type: Type[K], kind: Union[K, str], category: str) -> K:
    """
    Turn an enum member or its name (any case, `-` for `_`) into a kind.

    Raises:
        UnsupportedStrategyKind: If the value names no member of kind_type
    """
    if isinstance(kind, kind_type):
        return kind
    if isinstance(kind, str):
        normalized = kind.strip().upper().replace("-", "_")
        try:
            return kind_type(normalized)
        except ValueError:
            pass
    raise UnsupportedStrategyKind(category, kind)


class StrategyRegistry(Generic[K, S]):
    """Kind-tag to strategy lookup for one category"""

    def __init__(
        self,
        kind_type: Type[K],
        strategies: Iterable[S],
        category: Optional[str] = None
    ):
        self.kind_type = kind_type
        self.category = category or kind_type.__name__
        self._strategies: Dict[K, S] = {}

        for strategy in strategies:
            if strategy.kind in self._strategies:
                logger.warning(
                    f"Duplicate {self.category} registration for {strategy.kind.value}, "
                    f"keeping {self._strategies[strategy.kind].__class__.__name__}"
                )
                continue
            self._strategies[strategy.kind] = strategy

        logger.info(
            f"{self.category} registry initialized with "
            f"{[kind.value for kind in self._strategies]}"
        )

    def _coerce(self, kind: Union[K, str]) -> K:
        return coerce_kind(self.kind_type, kind, self.category)

    def resolve(self, kind: Union[K, str]) -> S:
        """
        Look up the strategy registered for a kind.

        Raises:
            UnsupportedStrategyKind: If the kind is unknown or not registered
        """
        resolved = self._coerce(kind)
        strategy = self._strategies.get(resolved)
        if strategy is None:
            raise UnsupportedStrategyKind(self.category, resolved.value)
        return strategy

    def find(self, kind: Union[K, str]) -> Optional[S]:
        """Like resolve, but returns None when the kind is not registered"""
        try:
            return self.resolve(kind)
        except UnsupportedStrategyKind:
            return None

    def is_supported(self, kind: Union[K, str]) -> bool:
        return self.find(kind) is not None

    def list_all(self) -> Dict[K, S]:
        """Registered strategies in registration order"""
        return dict(self._strategies)

    def enabled(self) -> List[S]:
        return [s for s in self._strategies.values() if s.is_enabled()]

    def list_descriptions(self) -> Dict[str, str]:
        return {kind.value: s.description for kind, s in self._strategies.items()}

    def descriptors(self) -> List[StrategyDescriptor]:
        return [s.descriptor() for s in self._strategies.values()]

    def __contains__(self, kind) -> bool:
        return self.is_supported(kind)

    def __len__(self) -> int:
        return len(self._strategies)
