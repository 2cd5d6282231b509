# pushframe/apns/error_response.py
"""
Error-response packet the legacy gateway writes before closing the connection.

Format: [1B command=8][1B status][4B identifier BE]
The identifier is the one the rejected notification was sent with.
"""
import struct
from dataclasses import dataclass

COMMAND = 8
LENGTH = 6

STATUS_CODE_DESCRIPTIONS = {
    0: "No errors encountered",
    1: "Processing error",
    2: "Missing device token",
    3: "Missing topic",
    4: "Missing payload",
    5: "Invalid token size",
    6: "Invalid topic size",
    7: "Invalid payload size",
    8: "Invalid token",
    10: "Shutdown",
    255: "None (unknown)",
}

_PACKET = struct.Struct("!BBI")


@dataclass(frozen=True)
class ErrorResponse:
    command: int
    status_code: int
    identifier: int

    @property
    def status(self) -> str:
        return STATUS_CODE_DESCRIPTIONS.get(self.status_code, "Unknown error")


def decode_error_response(data: bytes) -> ErrorResponse:
    if len(data) != LENGTH:
        raise ValueError(f"Error response must be {LENGTH} bytes, got {len(data)}")
    command, status_code, identifier = _PACKET.unpack(data)
    if command != COMMAND:
        raise ValueError(f"Unexpected error response command: {command}")
    return ErrorResponse(command=command, status_code=status_code, identifier=identifier)
