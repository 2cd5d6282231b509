from datetime import datetime
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

class ApnsNotificationRequest(BaseModel):
    # unknown keys are rejected by the Notification itself (UnknownFieldError)
    model_config = ConfigDict(extra="allow")

    device_token: str
    identifier: int = 0
    expiry: Optional[Union[int, datetime]] = None
    alert: Optional[Union[str, Dict[str, Any]]] = None
    badge: Optional[int] = None
    sound: Optional[str] = None
    content_available: Optional[bool] = None
    category: Optional[str] = None
    extra: Optional[Any] = None
    map: Optional[Any] = None
    hash: Optional[Any] = None
    data: Optional[Any] = None
    type: Optional[Any] = None
    private_group: Optional[Any] = None
    group: Optional[Any] = None
    conversation: Optional[Any] = None
    custom: Optional[Dict[str, Any]] = None
    truncate: Optional[str] = None  # field to shorten when the payload is too large

class ApnsEncodeResponse(BaseModel):
    frame_hex: str
    frame_base64: str
    payload: Dict[str, Any]
    payload_size: int
    truncated: bool = False

class ApnsValidateResponse(BaseModel):
    valid: bool
    payload_size: int
    error: Optional[str] = None

class ErrorResponseDecodeRequest(BaseModel):
    data_base64: str = Field(..., description="6-byte error-response packet, Base64")

class ErrorResponseDecoded(BaseModel):
    command: int
    status_code: int
    status: str
    identifier: int
