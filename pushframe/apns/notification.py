# pushframe/apns/notification.py
"""
Legacy APNs notification (binary "simple notification", command 1).

Frame: [1B command=1][4B identifier][4B expiry][2B token_len=32][32B token]
       [2B payload_len][payload JSON]
All integers big-endian.
"""
import binascii
import json
import logging
import math
import struct
from collections.abc import Sized
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from .errors import (
    InvalidDeviceTokenError,
    NoPayloadError,
    NotificationError,
    PayloadTooLargeError,
    UnknownFieldError,
)

logger = logging.getLogger(__name__)

MAX_PAYLOAD_SIZE = 2048
CONTENT_AVAILABLE_INDICATOR = 1
COMMAND = 1
DEVICE_TOKEN_LENGTH = 32

# order of keys inside "aps"
APS_FIELDS = (
    "alert",
    "badge",
    "sound",
    "content_available",
    "category",
    "extra",
    "map",
    "hash",
    "data",
    "type",
    "private_group",
    "group",
    "conversation",
)
PAYLOAD_FIELDS = APS_FIELDS + ("custom",)
FIELDS = ("device_token", "identifier", "expiry") + PAYLOAD_FIELDS

_FRAME_HEADER = struct.Struct("!BIIH32sH")
_UINT32_MAX = 0xFFFFFFFF


def _present(value: Any) -> bool:
    # 0 counts as a value (badge=0 clears the badge), empty text does not
    if value is None or value is False:
        return False
    if isinstance(value, Sized) and len(value) == 0:
        return False
    return True


class _PayloadField:
    """Notification attribute that ends up in the JSON body; writing it drops the cached body."""

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance._fields.get(self.name)

    def __set__(self, instance, value):
        instance._fields[self.name] = value
        instance._encoded_payload = None


class Notification:
    """
    A single notification for the legacy APNs binary interface.

    You must specify at least an `alert` or a `badge`. Fields can be passed as
    a mapping, as keyword arguments, or assigned afterwards:

        n = Notification({"device_token": "...", "alert": "Hello"}, badge=3)
        n.sound = "default"
        frame = n.to_bytes()
    """

    alert = _PayloadField()
    badge = _PayloadField()
    sound = _PayloadField()
    content_available = _PayloadField()
    category = _PayloadField()
    extra = _PayloadField()
    map = _PayloadField()
    hash = _PayloadField()
    data = _PayloadField()
    type = _PayloadField()
    private_group = _PayloadField()
    group = _PayloadField()
    conversation = _PayloadField()
    custom = _PayloadField()

    def __init__(self, payload: Optional[Mapping[str, Any]] = None, **fields: Any):
        self._fields: Dict[str, Any] = {}
        self._encoded_payload: Optional[bytes] = None
        self.device_token: Optional[str] = None
        self.identifier: int = 0
        self.expiry: Any = 0

        if payload:
            self.update(payload)
        if fields:
            self.update(fields)

    def __repr__(self) -> str:
        return (
            f"Notification(identifier={self.identifier!r}, "
            f"device_token={self.device_token!r}, payload={self.payload!r})"
        )

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    # ------------------------------------------------------------------
    # fields
    # ------------------------------------------------------------------

    def set(self, name: str, value: Any) -> None:
        if name not in FIELDS:
            raise UnknownFieldError(name)
        setattr(self, name, value)

    def update(self, fields: Mapping[str, Any]) -> None:
        """Apply every entry in order, exactly as if each attribute were assigned."""
        for name, value in fields.items():
            self.set(name, value)

    # ------------------------------------------------------------------
    # payload
    # ------------------------------------------------------------------

    @property
    def payload(self) -> Dict[str, Any]:
        aps: Dict[str, Any] = {}
        for name in APS_FIELDS:
            value = self._fields.get(name)
            if name == "content_available":
                if value:
                    aps["content-available"] = CONTENT_AVAILABLE_INDICATOR
            elif _present(value):
                aps[name] = value

        body: Dict[str, Any] = {"aps": aps}
        if self.custom:
            body.update(self.custom)
        return body

    @property
    def encoded_payload(self) -> bytes:
        if self._encoded_payload is None:
            self._encoded_payload = json.dumps(
                self.payload,
                ensure_ascii=False,
                separators=(",", ":"),
            ).encode("utf-8")
        return self._encoded_payload

    @property
    def payload_size(self) -> int:
        return len(self.encoded_payload)

    def payload_too_large(self) -> bool:
        return self.payload_size > MAX_PAYLOAD_SIZE

    # ------------------------------------------------------------------
    # validation
    # ------------------------------------------------------------------

    def check(self) -> Optional[NotificationError]:
        """Return the error that would stop this notification from being sent, or None."""
        if not (_present(self.alert) or _present(self.badge)):
            return NoPayloadError()
        size = self.payload_size
        if size > MAX_PAYLOAD_SIZE:
            return PayloadTooLargeError(size, MAX_PAYLOAD_SIZE)
        return None

    def validate(self) -> None:
        error = self.check()
        if error is not None:
            raise error

    def is_valid(self) -> bool:
        return self.check() is None

    # ------------------------------------------------------------------
    # truncation
    # ------------------------------------------------------------------

    def truncate(self, field: str) -> Optional[str]:
        """
        Shorten one text field so the body fits in MAX_PAYLOAD_SIZE.

        The field keeps at most `MAX_PAYLOAD_SIZE - (payload_size - field_size)`
        UTF-8 bytes, cut on a character boundary. When the rest of the body
        alone already fills the limit, the field is cleared. This runs once;
        JSON escaping can still push the body over, so validate afterwards.
        """
        if field not in FIELDS:
            raise UnknownFieldError(field)
        if field not in APS_FIELDS:
            raise TypeError(f"Only text payload fields can be truncated, not {field}")

        value = getattr(self, field)
        if not _present(value):
            return value
        if not isinstance(value, str):
            raise TypeError(
                f"Only text fields can be truncated, {field} is {type(value).__name__}"
            )

        # measure against a freshly built body
        self._encoded_payload = None
        raw = value.encode("utf-8")
        field_size = len(raw)
        payload_size = self.payload_size
        max_field_size = MAX_PAYLOAD_SIZE - (payload_size - field_size)

        if max_field_size > 0:
            truncated: Optional[str] = raw[:max_field_size].decode("utf-8", errors="ignore")
        else:
            truncated = None

        logger.debug(
            "truncate %s: payload=%s field=%s max=%s -> %s bytes",
            field,
            payload_size,
            field_size,
            max_field_size,
            len(truncated.encode("utf-8")) if truncated else 0,
        )
        setattr(self, field, truncated)
        return truncated

    # ------------------------------------------------------------------
    # frame
    # ------------------------------------------------------------------

    @property
    def expiry_epoch_time(self) -> int:
        expiry = self.expiry
        if not expiry:
            return 0
        if isinstance(expiry, datetime):
            if expiry.tzinfo is None:
                expiry = expiry.replace(tzinfo=timezone.utc)
            return int(expiry.timestamp())
        if isinstance(expiry, float) and not math.isfinite(expiry):
            raise ValueError(f"expiry is not a finite number: {expiry}")
        return int(expiry)

    @property
    def sanitized_device_token(self) -> Optional[str]:
        if self.device_token is None:
            return None
        return self.device_token.replace(" ", "")

    def encoded_device_token(self) -> bytes:
        token = self.sanitized_device_token
        if not token:
            raise InvalidDeviceTokenError("Missing device token")
        try:
            raw = binascii.unhexlify(token)
        except ValueError:
            raise InvalidDeviceTokenError(f"Device token is not a hex string: {token!r}") from None
        if len(raw) != DEVICE_TOKEN_LENGTH:
            raise InvalidDeviceTokenError(
                f"Device token must be {DEVICE_TOKEN_LENGTH} bytes, got {len(raw)}"
            )
        return raw

    def to_bytes(self) -> bytes:
        self.validate()
        payload = self.encoded_payload
        token = self.encoded_device_token()

        identifier = int(self.identifier or 0)
        expiry = self.expiry_epoch_time
        for label, number in (("identifier", identifier), ("expiry", expiry)):
            if not 0 <= number <= _UINT32_MAX:
                raise ValueError(f"{label} does not fit in 32 bits: {number}")

        header = _FRAME_HEADER.pack(
            COMMAND,
            identifier,
            expiry,
            DEVICE_TOKEN_LENGTH,
            token,
            len(payload),
        )
        return header + payload
