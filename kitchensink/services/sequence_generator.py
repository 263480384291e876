# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: atomic id sequences.

Values are strictly increasing per sequence name and never repeat, but gaps
are allowed: a value consumed by a registration that later fails is lost.
"""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from kitchensink.core.errors import StoreUnavailable
from kitchensink.core.logging import get_logger
from kitchensink.metrics import SEQUENCE_VALUES_ISSUED
from kitchensink.repositories import CounterRepository

logger = get_logger(__name__)

# A sequence with no counter row behaves as if it held this value,
# so the first value ever issued is SEQUENCE_FLOOR + 1 == 0.
SEQUENCE_FLOOR = -1


class SequenceGenerator:
    def __init__(self, counter_repo: CounterRepository, floor: int = SEQUENCE_FLOOR):
        self._repo = counter_repo
        self._floor = floor

    @property
    def floor(self) -> int:
        return self._floor

    def next(self, sequence_name: str) -> int:
        """Atomically increment ``sequence_name`` and return the new value."""
        try:
            value = self._repo.increment(sequence_name, first_value=self._floor + 1)
        except SQLAlchemyError as exc:
            logger.error("Sequence %s could not be incremented: %s", sequence_name, exc)
            raise StoreUnavailable(
                f"Unable to generate next value for sequence '{sequence_name}'",
                operation="sequence_next",
            ) from exc
        SEQUENCE_VALUES_ISSUED.labels(sequence=sequence_name).inc()
        return value

    def initialize(self, sequence_name: str, initial_value: int) -> bool:
        """Seed the counter only if it does not exist yet; never rewinds."""
        try:
            created = self._repo.insert_if_absent(sequence_name, initial_value)
        except SQLAlchemyError as exc:
            raise StoreUnavailable(
                f"Unable to initialize sequence '{sequence_name}'",
                operation="sequence_initialize",
            ) from exc
        if created:
            logger.info("Sequence %s initialized to %d", sequence_name, initial_value)
        return created

    def current(self, sequence_name: str) -> Optional[int]:
        return self._repo.get(sequence_name)
