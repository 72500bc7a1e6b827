"""
Verification Routes

POST /verify-company - Check an uploaded logo against the company's registered logo

Request: multipart form with `companyName` and `logo`
Response: {"verified": bool, "message": str, "distance": int | null}
"""

import io
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from jobboard.api.dependencies import get_logo_verifier, get_upload_storage
from jobboard.core.config import Settings, get_settings
from jobboard.core.errors import VerificationError, VerificationErrorKind
from jobboard.schemas.schemas import VerificationResponse
from jobboard.services.verification_service import LogoVerificationService
from jobboard.utils.file_upload import UploadStorage, read_logo_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/verify-company", tags=["Verification"])


# Error kind -> HTTP status
ERROR_STATUS_CODES = {
    VerificationErrorKind.bad_request: 400,
    VerificationErrorKind.not_found: 404,
    VerificationErrorKind.unreadable_image: 500,
    VerificationErrorKind.incomparable_fingerprint: 200,
    VerificationErrorKind.internal_error: 500,
}


def error_response(status_code: int, message: str) -> JSONResponse:
    body = VerificationResponse(verified=False, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.post("", response_model=VerificationResponse)
async def verify_company(
    companyName: Optional[str] = Form(None),
    logo: Optional[UploadFile] = File(None),
    settings: Settings = Depends(get_settings),
    storage: UploadStorage = Depends(get_upload_storage),
    verifier: LogoVerificationService = Depends(get_logo_verifier),
):
    """
    Verify a company by its logo.

    200 for both a match and a clean mismatch; read `verified`.
    """
    if not companyName or not companyName.strip() or logo is None:
        return error_response(
            ERROR_STATUS_CODES[VerificationErrorKind.bad_request], "Missing company name or logo"
        )

    try:
        content, ext = await read_logo_upload(logo, settings.max_logo_size_bytes)
    except HTTPException as e:
        return error_response(e.status_code, e.detail)

    try:
        handle = storage.save(io.BytesIO(content), suffix=ext)
    except OSError:
        logger.exception("Could not store uploaded logo")
        return error_response(
            ERROR_STATUS_CODES[VerificationErrorKind.internal_error], "Internal server error"
        )

    # verify() owns the file from here and deletes it on every path
    try:
        verdict = await run_in_threadpool(verifier.verify, companyName, handle)
    except VerificationError as e:
        return error_response(ERROR_STATUS_CODES[e.kind], e.message)

    return VerificationResponse(
        verified=verdict.verified, message=verdict.message, distance=verdict.distance
    )
