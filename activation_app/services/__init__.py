"""
activation_app/services package marker.
"""

from activation_app.services.activation_batch_service import (
    ActivationBatchService,
    get_activation_batch_service,
)
from activation_app.services.csv_decoder import (
    CSVDecodeError,
    CSVHeaderMismatchError,
    CSVParseError,
    decode_csv,
    decode_csv_bytes,
)
from activation_app.services.membership_upload_service import (
    MembershipUploadService,
    UploadOutcome,
    get_membership_upload_service,
)
from activation_app.services.row_processor import RowProcessingResult, RowProcessor
from activation_app.services.upload_session import UploadSession, get_upload_session

__all__ = [
    "ActivationBatchService",
    "get_activation_batch_service",
    "CSVDecodeError",
    "CSVHeaderMismatchError",
    "CSVParseError",
    "decode_csv",
    "decode_csv_bytes",
    "MembershipUploadService",
    "UploadOutcome",
    "get_membership_upload_service",
    "RowProcessingResult",
    "RowProcessor",
    "UploadSession",
    "get_upload_session",
]
