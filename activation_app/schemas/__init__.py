"""
activation_app/schemas package marker.
"""

from activation_app.schemas.membership_upload import (
    AnnotatedRowResponse,
    MembershipResultsResponse,
    MembershipUploadSummaryResponse,
)

__all__ = [
    "AnnotatedRowResponse",
    "MembershipResultsResponse",
    "MembershipUploadSummaryResponse",
]
