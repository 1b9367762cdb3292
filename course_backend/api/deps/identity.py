"""
Caller identity resolution.

The upstream auth gateway authenticates the user and forwards who is calling
in request headers. This module trusts those headers and exposes the caller
as an Actor. Authorization failures are reported as 404 so the API never
reveals whether a resource exists.

Headers:
    X-Actor-Id: Authenticated user id (required)
    X-Actor-Role: User role (required)
    X-Patient-Id: Patient profile id of the caller, when the caller is a patient

Dependencies: fastapi
System role: Identity collaborator adapter
"""

import uuid
from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException, status

STAFF_ROLES = frozenset({"physiotherapist", "practitioner", "admin"})


@dataclass(frozen=True)
class Actor:
    """Authenticated caller."""

    user_id: uuid.UUID
    role: str
    patient_id: uuid.UUID | None = None

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES


def _parse_uuid(value: str, header: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid {header} header",
        ) from None


def get_current_actor(
    x_actor_id: str | None = Header(None),
    x_actor_role: str | None = Header(None),
    x_patient_id: str | None = Header(None),
) -> Actor:
    """
    Resolve the caller from gateway headers.

    Raises:
        HTTPException(401): Missing or malformed identity headers
    """
    if not x_actor_id or not x_actor_role:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return Actor(
        user_id=_parse_uuid(x_actor_id, "X-Actor-Id"),
        role=x_actor_role.strip().lower(),
        patient_id=_parse_uuid(x_patient_id, "X-Patient-Id") if x_patient_id else None,
    )


def require_staff(actor: Actor = Depends(get_current_actor)) -> Actor:
    """Staff-only routes; anyone else gets 404."""
    if not actor.is_staff:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return actor


def require_patient(actor: Actor = Depends(get_current_actor)) -> Actor:
    """Patient routes; callers without a patient profile get 404."""
    if actor.patient_id is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    return actor
