# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package — re-exports for convenience."""
from kitchensink.repositories.counter_repository import CounterRepository
from kitchensink.repositories.member_repository import MemberRepository

__all__ = ["CounterRepository", "MemberRepository"]
