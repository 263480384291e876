# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Pydantic request/response schemas."""
import unicodedata
from typing import Dict, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 25
PHONE_MIN_LENGTH = 10
PHONE_MAX_LENGTH = 12


class MemberCreate(BaseModel):
    """Registration payload. Every rule raises one message per field."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", validate_default=True)

    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = Field(None, alias="phoneNumber")

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, v):
        if v is None:
            raise PydanticCustomError("not_null", "must not be null")
        if not isinstance(v, str):
            raise PydanticCustomError("string_type", "must be a string")
        if not NAME_MIN_LENGTH <= len(v) <= NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "size", f"size must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH}"
            )
        if any(ch in "0123456789" for ch in v):
            raise PydanticCustomError("pattern", "Must not contain numbers")
        if any(unicodedata.category(ch) == "Cc" for ch in v):
            raise PydanticCustomError("pattern", "Must not contain control characters")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, v):
        if v is None:
            raise PydanticCustomError("not_null", "must not be null")
        if not isinstance(v, str):
            raise PydanticCustomError("string_type", "must be a string")
        if not v:
            raise PydanticCustomError("not_empty", "must not be empty")
        # special-use domains (.test, .local) pass; the domain must still contain a dot
        try:
            info = validate_email(v, check_deliverability=False, globally_deliverable=False)
        except EmailNotValidError:
            raise PydanticCustomError("email", "must be a well-formed email address")
        if "." not in info.ascii_domain:
            raise PydanticCustomError("email", "must be a well-formed email address")
        return v

    @field_validator("phone_number", mode="before")
    @classmethod
    def check_phone_number(cls, v):
        if v is None:
            raise PydanticCustomError("not_null", "must not be null")
        if not isinstance(v, str):
            raise PydanticCustomError("string_type", "must be a string")
        if not PHONE_MIN_LENGTH <= len(v) <= PHONE_MAX_LENGTH:
            raise PydanticCustomError(
                "size", f"size must be between {PHONE_MIN_LENGTH} and {PHONE_MAX_LENGTH}"
            )
        # str.isdigit() also accepts superscripts and other Unicode digits
        if not all(ch in "0123456789" for ch in v):
            raise PydanticCustomError(
                "digits", f"numeric value out of bounds (<{PHONE_MAX_LENGTH} digits>.<0 digits> expected)"
            )
        return v


def violations_by_field(exc: ValidationError) -> Dict[str, str]:
    """Flatten a pydantic ValidationError into ``{json_field: message}``, first message wins."""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        loc = err.get("loc") or ("",)
        field = str(loc[0])
        if field == "phone_number":
            field = "phoneNumber"
        errors.setdefault(field, err["msg"])
    return errors


class MemberOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    email: str
    phone_number: str = Field(..., alias="phoneNumber")


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
    request_id: Optional[str] = None
