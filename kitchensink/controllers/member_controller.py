# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Member endpoints — list, lookup, register.
Thin HTTP layer — delegates ALL logic to RegistrationService.
"""

import json
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from kitchensink.core.dependencies import get_registration_service
from kitchensink.core.errors import (
    EmailAlreadyExists,
    IdNotAllowed,
    InvalidArgument,
    StoreUnavailable,
    ValidationFailed,
)
from kitchensink.core.logging import get_logger
from kitchensink.schemas import ErrorResponse, MemberOut
from kitchensink.services.registration_service import RegistrationService

logger = get_logger(__name__)

router = APIRouter(tags=["Members"])

DUPLICATE_EMAIL_MESSAGE = "Email already exists"


def _to_out(member) -> MemberOut:
    return MemberOut(
        id=member.id, name=member.name, email=member.email, phone_number=member.phone_number,
    )


async def _json_payload(request: Request) -> Any:
    """Raw JSON body; an empty or malformed body comes back as None."""
    body = await request.body()
    if not body.strip():
        return None
    try:
        return json.loads(body)
    except ValueError as exc:
        logger.warning("Rejected malformed member payload: %s", exc)
        return None


@router.get("/members", response_model=List[MemberOut],
            summary="List all members ordered by name")
def list_members(service: RegistrationService = Depends(get_registration_service)):
    try:
        members = service.list_members()
    except StoreUnavailable:
        raise HTTPException(status_code=500, detail="Members could not be listed")
    logger.info("Listing %d members", len(members))
    return [_to_out(m) for m in members]


@router.get("/members/{member_id}", response_model=MemberOut,
            summary="Get a single member by ID",
            responses={404: {"description": "No member with this id"}})
def get_member(member_id: str,
               service: RegistrationService = Depends(get_registration_service)):
    try:
        parsed_id = int(member_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid member ID format")
    try:
        member = service.get_member(parsed_id)
    except StoreUnavailable:
        raise HTTPException(status_code=500, detail="Member could not be loaded")
    if member is None:
        raise HTTPException(status_code=404,
                            detail=f"Member with id of {parsed_id} does not exist.")
    return _to_out(member)


@router.post("/members", response_model=MemberOut, status_code=201,
             summary="Register a new member",
             responses={
                 400: {"description": "Missing payload or field violations, keyed by field"},
                 409: {"description": "Email already registered, or an id was supplied"},
                 500: {"model": ErrorResponse, "description": "Store failure"},
             })
def register_member(payload: Any = Depends(_json_payload),
                    service: RegistrationService = Depends(get_registration_service)):
    """Validate, check uniqueness, assign the next member id and persist."""
    try:
        member = service.register(payload)
    except InvalidArgument:
        return JSONResponse(status_code=400, content={"error": "Member data is required."})
    except ValidationFailed as exc:
        return JSONResponse(status_code=400, content=exc.errors)
    except EmailAlreadyExists:
        return JSONResponse(status_code=409, content={"email": DUPLICATE_EMAIL_MESSAGE})
    except IdNotAllowed as exc:
        return JSONResponse(status_code=409, content={"id": str(exc)})
    except StoreUnavailable as exc:
        logger.error("Registration failed during %s: %s", exc.operation, exc)
        return JSONResponse(
            status_code=500,
            content={"error": "internal_server_error",
                     "detail": "Registration could not be completed, please retry"},
        )
    return _to_out(member)
