"""
Shared fixtures. Every test gets its own SQLite file so sequences start
from the floor and the unique email index is real.
"""
import os
import tempfile

# Settings are read at import time; point them at a scratch database first.
_SCRATCH = tempfile.mkdtemp(prefix="kitchensink-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_SCRATCH, 'app.db')}"
os.environ["SEED_DEFAULT_MEMBER"] = "false"
os.environ["NOTIFICATION_WEBHOOK_URL"] = ""
os.environ["EVENT_WORKERS"] = "1"

import pytest
from fastapi.testclient import TestClient

from kitchensink.core.database import build_engine, init_schema
from kitchensink.core.dependencies import get_member_repo, get_registration_service
from kitchensink.repositories import CounterRepository, MemberRepository
from kitchensink.services.member_events import MemberEventPublisher
from kitchensink.services.registration_service import RegistrationService
from kitchensink.services.sequence_generator import SequenceGenerator

MEMBER_SEQUENCE = "memberId"


@pytest.fixture
def engine(tmp_path):
    eng = build_engine(f"sqlite:///{tmp_path / 'members.db'}")
    init_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def member_repo(engine):
    repo = MemberRepository(engine)
    repo.ensure_indexes()
    return repo


@pytest.fixture
def counter_repo(engine):
    return CounterRepository(engine)


@pytest.fixture
def sequence_generator(counter_repo):
    return SequenceGenerator(counter_repo)


@pytest.fixture
def publisher():
    return MemberEventPublisher()


@pytest.fixture
def registration_service(member_repo, sequence_generator, publisher):
    return RegistrationService(
        member_repo=member_repo,
        sequence_generator=sequence_generator,
        publisher=publisher,
        sequence_name=MEMBER_SEQUENCE,
    )


@pytest.fixture
def client(registration_service, member_repo):
    from main import app

    app.dependency_overrides[get_registration_service] = lambda: registration_service
    app.dependency_overrides[get_member_repo] = lambda: member_repo
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def member_payload(name="John Smith", email="john@x.com", phone="2125551212", **extra):
    payload = {"name": name, "email": email, "phoneNumber": phone}
    payload.update(extra)
    return payload
