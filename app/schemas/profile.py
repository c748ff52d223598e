"""
Lunchbox API - Profile Schemas.

Pydantic schemas for self-service profile edits and admin role changes.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["staff", "catering", "admin"]
LunchSession = Literal["12:30", "13:00"]


class ProfileUpdate(BaseModel):
    """
    Merge-only profile patch.

    Absent keys are left alone; an explicit ``null`` clears the field.
    camelCase and snake_case keys are both accepted. Unknown keys,
    ``role`` included, are refused.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        json_schema_extra={
            "example": {"name": "Jane Doe", "lunchSession": "12:30"}
        }
    )

    name: Optional[str] = Field(None, max_length=255)
    location_id: Optional[str] = Field(None, alias="locationId", max_length=36)
    lunch_session: Optional[LunchSession] = Field(None, alias="lunchSession")

    def changes(self) -> Dict[str, Any]:
        """Only the fields the client actually sent."""
        out = {}
        for field in self.model_fields_set:
            value = getattr(self, field)
            if isinstance(value, str):
                value = value.strip() or None
            out[field] = value
        return out


class RoleUpdate(BaseModel):
    """Admin-only role assignment."""

    id: str = Field(..., min_length=1)
    role: Role


class ProfileOut(BaseModel):
    id: str
    name: Optional[str] = None
    role: Role = "staff"
    locationId: Optional[str] = None
    lunchSession: Optional[str] = None


class PrincipalOut(BaseModel):
    id: str
    email: Optional[str] = None


class ProfileResponse(BaseModel):
    user: PrincipalOut
    profile: Optional[ProfileOut] = None


class UserOut(BaseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: Role = "staff"
    lunchSession: Optional[str] = None
    locationId: Optional[str] = None


class UserListResponse(BaseModel):
    users: List[UserOut]


class OkResponse(BaseModel):
    ok: bool = True
    noChange: Optional[bool] = None
