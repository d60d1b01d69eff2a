"""
activation_app/validators package marker.
"""

from activation_app.validators.membership_validator import (
    FIELD_RULES,
    FieldCheck,
    MembershipRowValidator,
)

__all__ = [
    "FIELD_RULES",
    "FieldCheck",
    "MembershipRowValidator",
]
