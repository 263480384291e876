# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Member(BaseModel):
    """A registered member. ``id`` stays None until the sequence assigns one."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[int] = None
    name: str
    email: str
    phone_number: str = Field(..., alias="phoneNumber")

    def with_id(self, member_id: int) -> "Member":
        return self.model_copy(update={"id": member_id})

    def to_row(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone_number": self.phone_number,
        }
