"""
activation_app/api/routers package marker.
"""

from activation_app.api.routers.membership_upload import router as membership_upload_router

__all__ = [
    "membership_upload_router",
]
