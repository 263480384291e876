# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Startup seeding: schema, unique email index, id sequence floor, default member.
Safe to run on every boot and from several replicas at once.
"""

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from kitchensink.core.config import settings
from kitchensink.core.database import init_schema
from kitchensink.core.errors import EmailAlreadyExists, StoreUnavailable
from kitchensink.core.logging import get_logger
from kitchensink.metrics import MEMBERS_TOTAL
from kitchensink.repositories import MemberRepository
from kitchensink.services.registration_service import RegistrationService
from kitchensink.services.sequence_generator import SequenceGenerator

logger = get_logger(__name__)

DEFAULT_MEMBER = {
    "name": "John Smith",
    "email": "john.smith@mailinator.com",
    "phoneNumber": "2125551212",
}


class DataSeeder:
    def __init__(
        self,
        engine: Engine,
        member_repo: MemberRepository,
        sequence_generator: SequenceGenerator,
        registration_service: RegistrationService,
    ):
        self._engine = engine
        self._repo = member_repo
        self._sequences = sequence_generator
        self._registration = registration_service

    def run(self, seed_default_member: bool = None) -> bool:
        """Bring the store to a usable state. Returns False if the database was unreachable."""
        if seed_default_member is None:
            seed_default_member = settings.SEED_DEFAULT_MEMBER
        logger.info("DataSeeder: checking and seeding initial data if necessary")
        try:
            init_schema(self._engine)
        except SQLAlchemyError as exc:
            logger.warning("Could not create schema — DB may not be ready yet: %s", exc)
            return False

        self._repo.ensure_indexes()

        try:
            sequence_name = settings.MEMBER_ID_SEQUENCE
            self._sequences.initialize(sequence_name, self._sequences.floor)
            logger.info("Sequence %s at %s (first id is %d)", sequence_name,
                        self._sequences.current(sequence_name), self._sequences.floor + 1)

            existing = self._repo.count()
            if seed_default_member and existing == 0:
                self._seed_default_member()
            else:
                logger.info("Members already exist or seeding disabled, count=%d", existing)

            MEMBERS_TOTAL.set(self._repo.count())
        except (SQLAlchemyError, StoreUnavailable) as exc:
            logger.warning("Seeding incomplete: %s", exc)
            return False
        return True

    def _seed_default_member(self) -> None:
        logger.info("No members found. Seeding initial data")
        try:
            member = self._registration.register(DEFAULT_MEMBER)
        except EmailAlreadyExists:
            logger.info("Default member already seeded by another instance")
            return
        logger.info("Default member '%s' seeded with ID: %d", member.name, member.id)
