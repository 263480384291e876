# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire repositories and services.
"""
from concurrent.futures import ThreadPoolExecutor

from kitchensink.core.config import settings
from kitchensink.core.database import engine
from kitchensink.repositories import CounterRepository, MemberRepository
from kitchensink.services.data_seeder import DataSeeder
from kitchensink.services.member_events import MemberEventPublisher
from kitchensink.services.notification_client import MemberNotificationClient
from kitchensink.services.registration_service import RegistrationService
from kitchensink.services.sequence_generator import SequenceGenerator

# ── Singleton instances ──
_member_repo = MemberRepository(engine)
_counter_repo = CounterRepository(engine)
_sequence_generator = SequenceGenerator(_counter_repo)

_event_executor = ThreadPoolExecutor(
    max_workers=settings.EVENT_WORKERS, thread_name_prefix="member-events"
)
_publisher = MemberEventPublisher(executor=_event_executor)
_notification_client = MemberNotificationClient()
_publisher.subscribe(_notification_client.on_member_registered)

_registration_service = RegistrationService(
    member_repo=_member_repo,
    sequence_generator=_sequence_generator,
    publisher=_publisher,
)
_data_seeder = DataSeeder(
    engine=engine,
    member_repo=_member_repo,
    sequence_generator=_sequence_generator,
    registration_service=_registration_service,
)


# ── FastAPI dependency functions ──
def get_member_repo() -> MemberRepository:
    return _member_repo


def get_sequence_generator() -> SequenceGenerator:
    return _sequence_generator


def get_registration_service() -> RegistrationService:
    return _registration_service


def get_data_seeder() -> DataSeeder:
    return _data_seeder


def shutdown() -> None:
    """Drain pending registration events, then release the connection pool."""
    _event_executor.shutdown(wait=True)
    engine.dispose()
