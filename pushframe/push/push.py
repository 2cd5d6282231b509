import base64
import binascii
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request

from pushframe.apns.error_response import decode_error_response
from pushframe.apns.errors import (
    NotificationError,
    PayloadTooLargeError,
    UnknownFieldError,
)
from pushframe.apns.notification import Notification
from pushframe.deps import Settings, get_settings
from pushframe.limits import limiter, rate_limit
from .models import (
    ApnsEncodeResponse,
    ApnsNotificationRequest,
    ApnsValidateResponse,
    ErrorResponseDecodeRequest,
    ErrorResponseDecoded,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/push", tags=["push"])

def _fields(req: ApnsNotificationRequest, settings: Settings) -> Dict[str, Any]:
    # nulls stand for "not set" only on declared fields; extra keys go through as-is
    fields = {
        k: v
        for k, v in req.model_dump(exclude={"truncate"}).items()
        if v is not None or k not in ApnsNotificationRequest.model_fields
    }
    if "sound" not in fields and settings.PUSH_DEFAULT_SOUND:
        fields["sound"] = settings.PUSH_DEFAULT_SOUND
    return fields

def _http_error(e: NotificationError) -> HTTPException:
    if isinstance(e, PayloadTooLargeError):
        return HTTPException(status_code=413, detail=str(e))
    if isinstance(e, UnknownFieldError):
        return HTTPException(status_code=422, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))

def _build(req: ApnsNotificationRequest, settings: Settings) -> Notification:
    try:
        return Notification(_fields(req, settings))
    except NotificationError as e:
        raise _http_error(e)

@router.post("/apns/encode", response_model=ApnsEncodeResponse)
@limiter.limit(rate_limit)
async def encode(
    request: Request,
    req: ApnsNotificationRequest,
    settings: Settings = Depends(get_settings),
):
    notification = _build(req, settings)

    truncated = False
    if req.truncate and notification.payload_too_large():
        try:
            notification.truncate(req.truncate)
        except UnknownFieldError as e:
            raise _http_error(e)
        except TypeError as e:
            raise HTTPException(status_code=400, detail=str(e))
        truncated = True

    try:
        frame = notification.to_bytes()
    except NotificationError as e:
        logger.warning("Rejected notification %s: %s", notification.identifier, e)
        raise _http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.debug(
        "Encoded notification %s (%s payload bytes, %s frame bytes)",
        notification.identifier,
        notification.payload_size,
        len(frame),
    )
    return ApnsEncodeResponse(
        frame_hex=frame.hex(),
        frame_base64=base64.b64encode(frame).decode("ascii"),
        payload=notification.payload,
        payload_size=notification.payload_size,
        truncated=truncated,
    )

@router.post("/apns/validate", response_model=ApnsValidateResponse)
@limiter.limit(rate_limit)
async def validate(
    request: Request,
    req: ApnsNotificationRequest,
    settings: Settings = Depends(get_settings),
):
    notification = _build(req, settings)
    error = notification.check()
    return ApnsValidateResponse(
        valid=error is None,
        payload_size=notification.payload_size,
        error=str(error) if error is not None else None,
    )

@router.post("/apns/error-response", response_model=ErrorResponseDecoded)
async def error_response(req: ErrorResponseDecodeRequest):
    try:
        data = base64.b64decode(req.data_base64, validate=True)
    except binascii.Error:
        raise HTTPException(status_code=400, detail="Invalid data_base64")
    try:
        decoded = decode_error_response(data)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ErrorResponseDecoded(
        command=decoded.command,
        status_code=decoded.status_code,
        status=decoded.status,
        identifier=decoded.identifier,
    )
