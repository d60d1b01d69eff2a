"""
activation_app/api/routers/membership_upload.py

Membership CSV upload, results and download endpoints.

POST   /memberships/upload    multipart ``file``; validate, activate, store
GET    /memberships/results   current errors and annotated rows
DELETE /memberships/results   clear the current upload
GET    /memberships/template  csv_header_format.csv
GET    /memberships/report    activation_results.csv, 204 when there are no rows
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, UploadFile, status

from activation_app.api.dependencies import get_membership_csv_upload
from activation_app.schemas.membership_upload import (
    AnnotatedRowResponse,
    MembershipResultsResponse,
    MembershipUploadSummaryResponse,
)
from activation_app.services.csv_decoder import CSVDecodeError
from activation_app.services.membership_upload_service import (
    MembershipUploadService,
    get_membership_upload_service,
)
from activation_app.services.report_exporter import (
    ACTIVATION_REPORT_FILENAME,
    CSV_MEDIA_TYPE,
    HEADER_TEMPLATE_FILENAME,
    render_activation_report,
    render_header_template,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/memberships", tags=["memberships"])


def _csv_attachment(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/upload", response_model=MembershipUploadSummaryResponse)
def upload_memberships(
    file: UploadFile = Depends(get_membership_csv_upload),
    upload_service: MembershipUploadService = Depends(get_membership_upload_service),
) -> MembershipUploadSummaryResponse:
    """
    Validate one membership CSV and activate every valid row.
    """

    try:
        payload = file.file.read()
        outcome = upload_service.process_upload(payload)
    except CSVDecodeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    finally:
        file.file.close()

    return MembershipUploadSummaryResponse(
        rows_received=outcome.rows_received,
        rows_valid=outcome.rows_valid,
        rows_invalid=outcome.rows_invalid,
        status_counts=outcome.status_counts,
        errors=outcome.errors,
        rows=[AnnotatedRowResponse.from_row(row) for row in outcome.rows],
    )


@router.get("/results", response_model=MembershipResultsResponse)
def get_results(
    upload_service: MembershipUploadService = Depends(get_membership_upload_service),
) -> MembershipResultsResponse:
    snapshot = upload_service.session.snapshot()
    return MembershipResultsResponse(
        errors=list(snapshot.errors),
        rows=[AnnotatedRowResponse.from_row(row) for row in snapshot.rows],
    )


@router.delete("/results", status_code=status.HTTP_204_NO_CONTENT)
def clear_results(
    upload_service: MembershipUploadService = Depends(get_membership_upload_service),
) -> Response:
    upload_service.clear()
    logger.info("Membership upload session cleared")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/template", summary="Download the CSV header template")
def download_header_template() -> Response:
    return _csv_attachment(render_header_template(), HEADER_TEMPLATE_FILENAME)


@router.get("/report", summary="Download the activation report")
def download_activation_report(
    upload_service: MembershipUploadService = Depends(get_membership_upload_service),
) -> Response:
    """
    Return the current rows with their activation status as CSV.

    Responds 204 No Content when the session holds no rows.
    """

    snapshot = upload_service.session.snapshot()
    content = render_activation_report(snapshot.rows)
    if content is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return _csv_attachment(content, ACTIVATION_REPORT_FILENAME)
