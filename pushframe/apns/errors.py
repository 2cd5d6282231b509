# pushframe/apns/errors.py


class NotificationError(ValueError):
    """Base class for everything the encoder refuses to build."""


class NoPayloadError(NotificationError):
    def __init__(self, message: str = "Notification needs at least an alert or a badge"):
        super().__init__(message)


class PayloadTooLargeError(NotificationError):
    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Payload is {size} bytes, limit is {limit} bytes")


class UnknownFieldError(NotificationError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Unknown notification field: {field!r}")


class InvalidDeviceTokenError(NotificationError):
    pass
