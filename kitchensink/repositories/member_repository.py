# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Member data access — pure CRUD, no business rules.
Email uniqueness is enforced by the ``ux_members_email`` index, not here.
"""

from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from kitchensink.core.errors import DuplicateKey
from kitchensink.core.logging import get_logger
from kitchensink.models.domain import Member

logger = get_logger(__name__)

MEMBER_COLS = "id, name, email, phone_number"

EMAIL_INDEX = "ux_members_email"


def _violates_email_index(exc: IntegrityError) -> bool:
    # Postgres names the constraint in diag, SQLite names the column in the message
    diag = getattr(exc.orig, "diag", None)
    if getattr(diag, "constraint_name", None):
        return diag.constraint_name == EMAIL_INDEX
    message = str(exc.orig)
    return EMAIL_INDEX in message or "members.email" in message


def _row_to_member(row) -> Member:
    return Member(id=row[0], name=row[1], email=row[2], phone_number=row[3])


class MemberRepository:
    """Handles all direct database operations for members."""

    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Startup ────────────────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create the unique email index. Failures are logged, never raised."""
        try:
            with self._engine.begin() as conn:
                conn.execute(text(
                    f"CREATE UNIQUE INDEX IF NOT EXISTS {EMAIL_INDEX} ON members (email)"
                ))
        except SQLAlchemyError as exc:
            logger.error("Failed to create unique index on members.email: %s", exc)
            return False
        logger.info("Unique index on members.email is in place")
        return True

    # ── Write ──────────────────────────────────────────────────────────

    def insert(self, member: Member) -> Member:
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    text(f"""
                        INSERT INTO members ({MEMBER_COLS})
                        VALUES (:id, :name, :email, :phone_number)
                    """),
                    member.to_row(),
                )
        except IntegrityError as exc:
            if not _violates_email_index(exc):
                raise
            raise DuplicateKey(str(exc.orig), email=member.email) from exc
        return member

    # ── Read ───────────────────────────────────────────────────────────

    def find_by_email(self, email: str) -> Optional[Member]:
        with self._engine.connect() as conn:
            row = conn.execute(
                text(f"SELECT {MEMBER_COLS} FROM members WHERE email = :email"),
                {"email": email},
            ).first()
        return _row_to_member(row) if row else None

    def find_by_id(self, member_id: int) -> Optional[Member]:
        with self._engine.connect() as conn:
            row = conn.execute(
                text(f"SELECT {MEMBER_COLS} FROM members WHERE id = :id"),
                {"id": member_id},
            ).first()
        return _row_to_member(row) if row else None

    def list_all_ordered_by_name(self) -> List[Member]:
        with self._engine.connect() as conn:
            rows = conn.execute(
                text(f"SELECT {MEMBER_COLS} FROM members ORDER BY name ASC, id ASC")
            ).fetchall()
        return [_row_to_member(r) for r in rows]

    def count(self) -> int:
        with self._engine.connect() as conn:
            return conn.execute(text("SELECT COUNT(*) FROM members")).scalar() or 0

    def verify_connection(self) -> None:
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def dispose(self):
        self._engine.dispose()
