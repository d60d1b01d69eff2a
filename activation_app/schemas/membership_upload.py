"""
activation_app/schemas/membership_upload.py

Response schemas for membership upload endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from activation_app.domain.membership import ActivationStatus, AnnotatedRow


class AnnotatedRowResponse(BaseModel):
    """
    API response model for one activated membership row.
    """

    model_config = ConfigDict(populate_by_name=True)

    firstname: str
    lastname: str
    username: str
    uid: int
    password: str
    email: str
    membershipplanid: int
    activation_status: ActivationStatus = Field(..., alias="activationStatus")

    @classmethod
    def from_row(cls, row: AnnotatedRow) -> AnnotatedRowResponse:
        return cls(
            firstname=row.firstname,
            lastname=row.lastname,
            username=row.username,
            uid=row.uid,
            password=row.password,
            email=row.email,
            membershipplanid=row.membershipplanid,
            activation_status=row.activation_status,
        )


class MembershipUploadSummaryResponse(BaseModel):
    """
    API response model for one processed upload.
    """

    rows_received: int = Field(..., ge=0)
    rows_valid: int = Field(..., ge=0)
    rows_invalid: int = Field(..., ge=0)
    status_counts: dict[str, int] = Field(default_factory=dict)
    errors: list[str] = Field(default_factory=list)
    rows: list[AnnotatedRowResponse] = Field(default_factory=list)


class MembershipResultsResponse(BaseModel):
    """
    API response model for the current upload session contents.
    """

    errors: list[str] = Field(default_factory=list)
    rows: list[AnnotatedRowResponse] = Field(default_factory=list)
