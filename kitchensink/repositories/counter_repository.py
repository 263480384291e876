# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: named counters backing the id sequences.
Every mutation is a single statement so the database serialises it.
"""

from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine


class CounterRepository:
    """One row per sequence name in the ``counters`` table."""

    def __init__(self, engine: Engine):
        self._engine = engine

    def increment(self, name: str, first_value: int) -> int:
        """Add one to the counter and return the new value.

        A missing row is created holding ``first_value`` in the same statement.
        """
        with self._engine.begin() as conn:
            return conn.execute(
                text("""
                    INSERT INTO counters (name, seq)
                    VALUES (:name, :first_value)
                    ON CONFLICT (name) DO UPDATE SET seq = counters.seq + 1
                    RETURNING seq
                """),
                {"name": name, "first_value": first_value},
            ).scalar_one()

    def insert_if_absent(self, name: str, value: int) -> bool:
        """Create the counter at ``value``; returns False if it already existed."""
        with self._engine.begin() as conn:
            result = conn.execute(
                text("""
                    INSERT INTO counters (name, seq)
                    VALUES (:name, :value)
                    ON CONFLICT (name) DO NOTHING
                """),
                {"name": name, "value": value},
            )
        return result.rowcount == 1

    def get(self, name: str) -> Optional[int]:
        with self._engine.connect() as conn:
            row = conn.execute(
                text("SELECT seq FROM counters WHERE name = :name"), {"name": name}
            ).first()
        return row[0] if row else None
