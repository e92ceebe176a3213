"""
Ordered fold used by document and segment transformer chains.

Each stage maps a unit to a new unit or to None (discard). The fold stops at
the first discard and reports which stage dropped the unit.
"""
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Optional, Tuple, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ChainOutcome(Generic[T]):
    """Result of running a unit through a chain"""
    value: Optional[T]
    discarded_by: Optional[str] = None

    @property
    def kept(self) -> bool:
        return self.value is not None


def run_chain(stages: Iterable, unit: T) -> ChainOutcome[T]:
    """
    Apply enabled stages in order, short-circuiting on the first discard.

    Args:
        stages: Objects with ``transform(unit)`` and ``is_enabled()``
        unit: Document or Segment to transform

    Returns:
        ChainOutcome holding the final unit, or None and the discarding stage
    """
    current = unit
    for stage in stages:
        if not stage.is_enabled():
            continue
        current = stage.transform(current)
        if current is None:
            return ChainOutcome(value=None, discarded_by=stage.kind.value)
    return ChainOutcome(value=current)


def transform_each(
    transform: Callable[[T], Optional[T]],
    units: Iterable[T],
    label: str
) -> Tuple[List[T], int]:
    """Map ``transform`` over units, dropping discarded ones"""
    kept: List[T] = []
    discarded = 0
    for unit in units:
        result = transform(unit)
        if result is None:
            discarded += 1
        else:
            kept.append(result)

    if discarded:
        logger.info(f"{label}: discarded {discarded} of {discarded + len(kept)} units")
    return kept, discarded
