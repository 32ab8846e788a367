"""
Error types raised by the justhttp request pipeline.

Classes:
    JustHttpError: Base class, carries a human readable message.
    InvalidURLError, EncodingError, TimeoutError, TransportError,
    AuthError, SizeLimitError, DecodeError: One class per failure kind.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations


class JustHttpError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidURLError(JustHttpError):
    def __init__(self, url: str, reason: str):
        super().__init__(f'parse "{url}": {reason}')
        self.url = url
        self.reason = reason


class EncodingError(JustHttpError):
    pass


class TimeoutError(JustHttpError):
    """The per-call deadline elapsed. ``limit`` is in milliseconds."""

    def __init__(self, limit: int):
        super().__init__(f"Time limit ({_format_duration(limit)}) exceeded")
        self.limit = limit


class TransportError(JustHttpError):
    pass


class AuthError(JustHttpError):
    def __init__(self, status_code: int):
        super().__init__(f"HTTP error {status_code}")
        self.status_code = status_code


class SizeLimitError(JustHttpError):
    def __init__(self, limit: int):
        super().__init__(f"Body limit ({limit} bytes) exceeded")
        self.limit = limit


class DecodeError(JustHttpError):
    pass


def _format_duration(milliseconds: int) -> str:
    """Render a duration as 500ms, 1.5s, 1m1s or 1h0m0s."""
    if milliseconds == 0:
        return "0s"
    if milliseconds < 1000:
        return f"{milliseconds}ms"
    hours, rest = divmod(milliseconds, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    seconds, millis = divmod(rest, 1000)
    text = f"{seconds}.{millis:03d}".rstrip("0").rstrip(".") + "s"
    if hours:
        return f"{hours}h{minutes}m{text}"
    if minutes:
        return f"{minutes}m{text}"
    return text
