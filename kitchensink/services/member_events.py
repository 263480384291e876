# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Post-registration fan-out.

Observers are plain callables taking the persisted Member. A failing observer
is logged and counted; it never reaches the registering caller.
"""

import contextvars
from concurrent.futures import Executor
from typing import Callable, List, Optional

from kitchensink.core.logging import get_logger
from kitchensink.metrics import EVENT_DELIVERY_FAILURES
from kitchensink.models.domain import Member

logger = get_logger(__name__)

MemberObserver = Callable[[Member], None]


def _observer_name(observer: MemberObserver) -> str:
    return getattr(observer, "__qualname__", None) or type(observer).__name__


class MemberEventPublisher:
    """Observer list for ``member registered`` events.

    With an executor every observer call is submitted to it and ``publish``
    returns immediately; without one observers run inline, in subscription order.
    """

    def __init__(self, executor: Optional[Executor] = None):
        self._observers: List[MemberObserver] = []
        self._executor = executor

    def subscribe(self, observer: MemberObserver) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: MemberObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    @property
    def observers(self) -> List[MemberObserver]:
        return list(self._observers)

    def publish(self, member: Member) -> None:
        for observer in list(self._observers):
            if self._executor is not None:
                try:
                    # carry request_id into worker-thread log records
                    self._executor.submit(contextvars.copy_context().run,
                                          self._deliver, observer, member)
                except RuntimeError as exc:
                    # executor already shut down
                    logger.warning("Dropped registration event for member id=%s: %s",
                                   member.id, exc)
            else:
                self._deliver(observer, member)

    @staticmethod
    def _deliver(observer: MemberObserver, member: Member) -> None:
        try:
            observer(member)
        except Exception:
            name = _observer_name(observer)
            EVENT_DELIVERY_FAILURES.labels(observer=name).inc()
            logger.exception("Observer %s failed for member id=%s email=%s",
                             name, member.id, member.email)
