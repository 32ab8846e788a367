"""
JustHttpRequest runs one request through the pipeline stages.

Stages, in order, each terminal on failure:
    serialize -> construct -> decorate -> dispatch -> classify status -> decode bounded

Classes:
    Deadline: Per-call time budget started when the request is constructed.
    JustHttpRequest: One call's pipeline; owns the body buffer, the outgoing
        request and the in-flight response. Never reused across calls.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import logging
import socket
import threading
import time
from typing import Any, Callable, Generic, Optional, Type, TypeVar

import httpx
from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from .client import ApiClient
from .errors import (
    AuthError,
    DecodeError,
    EncodingError,
    InvalidURLError,
    SizeLimitError,
    TimeoutError,
    TransportError,
)
from .options import RequestArguments

logger = logging.getLogger(__name__)

TData = TypeVar("TData")
TResponse = TypeVar("TResponse")


class Deadline:
    def __init__(self, limit_ms: int):
        self.limit_ms = limit_ms
        self._expires_at = time.monotonic() + limit_ms / 1000
        self._timer: threading.Timer | None = None

    def remaining(self) -> float:
        """Seconds left; raises TimeoutError once the budget is spent."""
        left = self._expires_at - time.monotonic()
        if left <= 0:
            raise TimeoutError(self.limit_ms)
        return left

    def expired(self) -> bool:
        return time.monotonic() >= self._expires_at

    def arm(self, on_expiry: Callable[[], None]):
        """Run on_expiry from a timer thread when the budget runs out."""
        self._timer = threading.Timer(self.remaining(), on_expiry)
        self._timer.daemon = True
        self._timer.start()

    def release(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


def parse_url(raw: str) -> httpx.URL:
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidURLError(str(raw), str(e)) from e
    if url.scheme not in ("http", "https"):
        raise InvalidURLError(raw, "missing an 'http://' or 'https://' scheme")
    if not url.host:
        raise InvalidURLError(raw, "missing host")
    return url


class JustHttpRequest(Generic[TData, TResponse]):
    def __init__(
        self,
        url: str,
        method: str,
        data: TData,
        response_type: Type[TResponse],
        args: RequestArguments,
        client: ApiClient,
    ):
        self.url = url
        self.method = method.upper()
        self.data = data
        self.response_type = response_type
        self.args = args

        self._client = client
        self._adapter: Optional[TypeAdapter] = None
        self._buffer: bytes | None = None
        self._req: Optional[httpx.Request] = None
        self._resp: Optional[httpx.Response] = None
        self._deadline: Optional[Deadline] = None
        self._interrupted = False

    def process(self) -> TResponse:
        """Send the request and return the decoded response body."""
        self._prepare_response_adapter()
        self._encode_request_payload()
        self._create_request_with_timeout()
        try:
            self._add_basic_auth_header()
            self._add_url_query_params()
            self._send_request()
            try:
                self._handle_http_status_codes()
                return self._decode_response_payload()
            finally:
                self._resp.close()
        finally:
            if self._deadline is not None:
                self._deadline.release()

    def _prepare_response_adapter(self):
        try:
            self._adapter = TypeAdapter(self.response_type)
        except PydanticSchemaGenerationError as e:
            raise DecodeError(f"cannot decode into {self.response_type!r}: {e}") from e

    def _encode_request_payload(self):
        # GET carries no body; other methods encode None as JSON null.
        if self.method == "GET":
            self._buffer = None
            return
        try:
            self._buffer = to_json(self.data)
        except (PydanticSerializationError, ValueError, TypeError) as e:
            raise EncodingError(f"cannot encode request payload: {e}") from e

    def _create_request_with_timeout(self):
        url = parse_url(self.url)
        if self.args.timeout_in_milliseconds:
            self._deadline = Deadline(self.args.timeout_in_milliseconds)
        headers = {"Accept": "application/json"}
        if self._buffer is not None:
            headers["Content-Type"] = "application/json"
        self._req = self._client.build_request(
            self.method, url, content=self._buffer, headers=headers)

    def _add_basic_auth_header(self):
        creds = self.args.basic_auth_credentials
        if creds is None or creds.is_empty():
            return
        auth = httpx.BasicAuth(creds.user, creds.password)
        self._req = next(auth.auth_flow(self._req))

    def _add_url_query_params(self):
        if not self.args.query_params:
            return
        items = list(self._req.url.params.multi_items())
        items.extend(self.args.query_params.items())
        self._req.url = self._req.url.copy_with(params=httpx.QueryParams(items))

    def _send_request(self):
        logger.debug("dispatching %s %s", self.method, self._req.url)
        timeout = self._deadline.remaining() if self._deadline else None
        try:
            self._resp = self._client.dispatch(self._req, timeout=timeout)
        except httpx.TimeoutException as e:
            raise self._timeout_error() from e
        except httpx.RequestError as e:
            logger.info("request to %s failed: %s", self._req.url, e)
            raise TransportError(str(e) or type(e).__name__) from e
        if self._deadline is not None:
            try:
                self._deadline.arm(self._interrupt_response)
            except TimeoutError:
                self._resp.close()
                raise

    def _interrupt_response(self):
        # httpx applies its timeout per read, so a stalled body is cut off here.
        stream = self._resp.extensions.get("network_stream")
        sock = stream.get_extra_info("socket") if stream is not None else None
        if sock is None:
            return
        logger.debug("deadline reached, interrupting %s", self._req.url)
        self._interrupted = True
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError as e:
            logger.debug("socket for %s already closed: %s", self._req.url, e)

    def _handle_http_status_codes(self):
        status = self._resp.status_code
        logger.debug("received %s from %s", status, self._req.url)
        if status == httpx.codes.UNAUTHORIZED:
            raise AuthError(status)

    def _decode_response_payload(self) -> TResponse:
        max_size = self.args.size_limit
        body = self._read_bounded(max_size)
        try:
            return self._adapter.validate_json(body)
        except ValidationError as e:
            raise DecodeError(f"cannot decode response body: {e}") from e

    def _read_bounded(self, max_size: int) -> bytes:
        body = bytearray()
        try:
            for chunk in self._resp.iter_bytes():
                body.extend(chunk)
                if len(body) > max_size:
                    logger.warning("response from %s exceeds %d bytes", self._req.url, max_size)
                    raise SizeLimitError(max_size)
                if self._deadline is not None:
                    self._deadline.remaining()
        except httpx.TimeoutException as e:
            raise self._timeout_error() from e
        except httpx.RequestError as e:
            if self._deadline_passed():
                raise self._timeout_error() from e
            raise TransportError(str(e) or type(e).__name__) from e
        if self._deadline_passed():
            raise self._timeout_error()
        return bytes(body)

    def _deadline_passed(self) -> bool:
        if self._deadline is None:
            return False
        return self._interrupted or self._deadline.expired()

    def _timeout_error(self) -> TimeoutError:
        limit = self._deadline.limit_ms if self._deadline else 0
        logger.info("request to %s timed out after %dms", self._req.url, limit)
        return TimeoutError(limit)


def send_request(
    url: str,
    method: str,
    data: Any,
    response_type: Type[TResponse],
    args: RequestArguments,
    client: ApiClient | None = None,
) -> TResponse:
    if client is not None:
        return JustHttpRequest(url, method, data, response_type, args, client).process()
    with ApiClient() as transient:
        return JustHttpRequest(url, method, data, response_type, args, transient).process()
