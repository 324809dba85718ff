from fastapi import APIRouter, Depends

from sasurl.api.admin_auth import require_admin_key
from sasurl.api.deps import Issuer
from sasurl.core.error_codes import ErrorCode
from sasurl.core.errors import ApiError, InvalidArgumentError
from sasurl.schemas.urls import (
    ReadUrlRequest,
    ReadUrlResponse,
    WriteBatchRequest,
    WriteBatchResponse,
    WriteUrlItem,
)

router = APIRouter(prefix="/v1/urls", tags=["urls"], dependencies=[Depends(require_admin_key)])


@router.post("/write-batch", response_model=WriteBatchResponse)
def issue_write_batch(payload: WriteBatchRequest, issuer: Issuer) -> WriteBatchResponse:
    """Generate fresh blob names with a write URL for each."""
    try:
        items = issuer.issue_write_batch(payload.count, payload.extension)
    except InvalidArgumentError as exc:
        raise ApiError(status_code=400, code=ErrorCode.VALIDATION_ERROR, message=str(exc)) from exc

    return WriteBatchResponse(items=[WriteUrlItem(name=item.name, url=item.url) for item in items])


@router.post("/read", response_model=ReadUrlResponse)
def issue_read_url(payload: ReadUrlRequest, issuer: Issuer) -> ReadUrlResponse:
    try:
        url = issuer.issue_read_url(payload.name)
    except InvalidArgumentError as exc:
        raise ApiError(status_code=400, code=ErrorCode.VALIDATION_ERROR, message=str(exc)) from exc
    if not url:
        raise ApiError(status_code=400, code=ErrorCode.VALIDATION_ERROR, message="Name must be provided")

    return ReadUrlResponse(
        name=payload.name,
        url=url,
        local_path=issuer.local_read_path(payload.name),
        expires_in_seconds=issuer.config.read_ttl_seconds,
    )
