# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: member registration — validation, uniqueness, id assignment, persistence.

register() walks one attempt through
    validate -> check email -> assign id -> insert -> notify
and stops at the first failure. There is no retry loop; callers resubmit.
"""

from collections.abc import Mapping
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from kitchensink.core.config import settings
from kitchensink.core.errors import (
    DuplicateKey,
    EmailAlreadyExists,
    IdNotAllowed,
    InvalidArgument,
    PersistenceError,
    RegistrationError,
    ValidationFailed,
)
from kitchensink.core.logging import get_logger
from kitchensink.metrics import (
    MEMBERS_REGISTERED,
    MEMBERS_TOTAL,
    REGISTRATION_FAILURES,
    REGISTRATION_LATENCY,
)
from kitchensink.models.domain import Member
from kitchensink.repositories import MemberRepository
from kitchensink.schemas import MemberCreate, violations_by_field
from kitchensink.services.member_events import MemberEventPublisher
from kitchensink.services.sequence_generator import SequenceGenerator

logger = get_logger(__name__)

_FAILURE_REASONS = {
    InvalidArgument: "invalid_argument",
    IdNotAllowed: "id_not_allowed",
    ValidationFailed: "validation",
    EmailAlreadyExists: "duplicate_email",
}


class RegistrationService:
    """Single entry point that turns a candidate payload into a stored Member."""

    def __init__(
        self,
        member_repo: MemberRepository,
        sequence_generator: SequenceGenerator,
        publisher: Optional[MemberEventPublisher] = None,
        sequence_name: Optional[str] = None,
    ):
        self._repo = member_repo
        self._sequences = sequence_generator
        self._publisher = publisher or MemberEventPublisher()
        self._sequence_name = sequence_name or settings.MEMBER_ID_SEQUENCE

    @property
    def publisher(self) -> MemberEventPublisher:
        return self._publisher

    # ── Commands ───────────────────────────────────────────────────────

    def register(self, candidate: Optional[Mapping]) -> Member:
        with REGISTRATION_LATENCY.time():
            try:
                member = self._register(candidate)
            except RegistrationError as exc:
                reason = _FAILURE_REASONS.get(type(exc), "store_unavailable")
                REGISTRATION_FAILURES.labels(reason=reason).inc()
                raise
        MEMBERS_REGISTERED.inc()
        MEMBERS_TOTAL.inc()
        self._publisher.publish(member)
        return member

    def _register(self, candidate: Optional[Mapping]) -> Member:
        if candidate is None:
            logger.error("Attempt to register a null member")
            raise InvalidArgument("Member to register cannot be null.")
        if not isinstance(candidate, Mapping):
            logger.error("Attempt to register a non-object payload: %s", type(candidate).__name__)
            raise InvalidArgument("Member data must be a JSON object.")

        if candidate.get("id") is not None:
            logger.warning("Registration payload carries an id: %s", candidate.get("id"))
            raise IdNotAllowed(candidate.get("id"))

        member = self.validate(candidate)
        logger.info("Attempting to register member: %s", member.email)

        if self._find_by_email(member.email) is not None:
            logger.warning("Email already exists: %s", member.email)
            raise EmailAlreadyExists(member.email)

        member = member.with_id(self._sequences.next(self._sequence_name))
        logger.info("Assigned new ID %d to member: %s", member.id, member.email)

        try:
            self._repo.insert(member)
        except DuplicateKey:
            # lost a race with a concurrent registration; the id is abandoned
            logger.warning("Email claimed concurrently: %s (id %d abandoned)",
                           member.email, member.id)
            raise EmailAlreadyExists(member.email)
        except SQLAlchemyError as exc:
            logger.error("Failed to persist member email=%s id=%d: %s",
                         member.email, member.id, exc)
            raise PersistenceError("Member could not be persisted", operation="insert") from exc

        logger.info("Member persisted: %s with ID: %d", member.email, member.id)
        return member

    @staticmethod
    def validate(candidate: Mapping) -> Member:
        """Apply the field rules; every failing field is reported at once."""
        try:
            data = MemberCreate.model_validate(dict(candidate))
        except ValidationError as exc:
            errors = violations_by_field(exc)
            logger.warning("Validation violations found: %s",
                           ", ".join(f"{k}: {v}" for k, v in sorted(errors.items())))
            raise ValidationFailed(errors) from exc
        return Member(name=data.name, email=data.email, phone_number=data.phone_number)

    # ── Queries ────────────────────────────────────────────────────────

    def get_member(self, member_id: int) -> Optional[Member]:
        try:
            return self._repo.find_by_id(member_id)
        except SQLAlchemyError as exc:
            logger.error("Failed to look up member id=%s: %s", member_id, exc)
            raise PersistenceError("Member lookup failed", operation="find_by_id") from exc

    def list_members(self) -> List[Member]:
        try:
            return self._repo.list_all_ordered_by_name()
        except SQLAlchemyError as exc:
            logger.error("Failed to list members: %s", exc)
            raise PersistenceError("Member listing failed", operation="list") from exc

    def _find_by_email(self, email: str) -> Optional[Member]:
        try:
            return self._repo.find_by_email(email)
        except SQLAlchemyError as exc:
            logger.error("Email uniqueness check failed for %s: %s", email, exc)
            raise PersistenceError("Email uniqueness check failed",
                                   operation="find_by_email") from exc
