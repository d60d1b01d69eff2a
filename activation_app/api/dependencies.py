"""
activation_app/api/dependencies.py

Request guards for the membership upload endpoint.
"""

from __future__ import annotations

import os

from fastapi import File, HTTPException, UploadFile, status

MEMBERSHIP_CSV_CONTENT_TYPES = frozenset(
    {
        "text/csv",
        "application/csv",
        "application/vnd.ms-excel",
    }
)


def _upload_size(file: UploadFile) -> int:
    stream = file.file
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(0)
    return size


def get_membership_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Accept a membership CSV by extension or MIME type.

    Files with no content are rejected here so an empty upload never
    replaces the results of the previous one.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").split(";")[0].strip().lower()

    if not filename.endswith(".csv") and content_type not in MEMBERSHIP_CSV_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are allowed.",
        )

    if _upload_size(file) == 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Uploaded membership file '{file.filename}' is empty.",
        )

    return file
