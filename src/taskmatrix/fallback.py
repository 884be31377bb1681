"""Fallback orchestration across acquisition strategies."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from .core.records import RawRecord
from .ports import RecordSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Attempt:
    """Outcome of one strategy attempt."""

    strategy: str
    records: int
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.records > 0


@dataclass
class AcquisitionResult:
    """Records acquired for one logical source, with the attempt trail."""

    source: str
    records: list[RawRecord] = field(default_factory=list)
    strategy: str | None = None
    attempts: list[Attempt] = field(default_factory=list)

    @property
    def exhausted(self) -> bool:
        """True when every strategy failed or returned nothing."""
        return self.strategy is None


def acquire(source_name: str, strategies: Sequence[RecordSource]) -> AcquisitionResult:
    """
    Try strategies in order and return the first non-empty result.

    A strategy that raises or returns no records is logged and skipped. Later
    strategies are not invoked once one succeeds. Never raises: exhausting
    every strategy yields an empty result.
    """
    result = AcquisitionResult(source=source_name)

    for strategy in strategies:
        try:
            records = list(strategy.fetch())
        except Exception as e:
            logger.warning(f"{source_name}: strategy '{strategy.name}' failed: {e}")
            result.attempts.append(Attempt(strategy.name, 0, str(e) or type(e).__name__))
            continue

        result.attempts.append(Attempt(strategy.name, len(records)))
        if not records:
            logger.warning(f"{source_name}: strategy '{strategy.name}' returned no records")
            continue

        logger.info(f"{source_name}: {len(records)} records via '{strategy.name}'")
        result.records = records
        result.strategy = strategy.name
        return result

    logger.warning(f"{source_name}: all {len(strategies)} strategies exhausted, no data")
    return result
