"""
ApiClient is the transport the request pipeline dispatches to, using httpx.

Attributes:
    _client (httpx.Client): The underlying httpx client instance. It owns
        connection reuse; ApiClient adds no pooling policy of its own.

Methods:
    __init__(transport: httpx.BaseTransport | None = None):
        Initializes the ApiClient, optionally over a custom httpx transport.

    build_request(method, url, content, headers):
        Builds an outgoing httpx.Request without sending it.

    dispatch(request, timeout):
        Sends a built request with the body left unread (streaming), so the
        caller decides how many bytes to consume. The caller must close the
        returned response.

    close():
        Closes the underlying httpx client.

    __enter__():
        Enables use of ApiClient as a context manager.

    __exit__(exc_type, exc, tb):
        Ensures the client is closed when exiting a context.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

import httpx
from typing import Dict

from . import __version__


class ApiClient:
    def __init__(
        self,
        transport: httpx.BaseTransport | None = None,
    ):
        hdrs = {"User-Agent": f"justhttp/{__version__}"}
        self._client = httpx.Client(transport=transport, headers=hdrs)

    def build_request(
        self,
        method: str,
        url: httpx.URL,
        content: bytes | None = None,
        headers: Dict[str, str] | None = None,
    ) -> httpx.Request:
        return self._client.build_request(
            method.upper(), url, content=content, headers=headers)

    def dispatch(
        self,
        request: httpx.Request,
        *,
        timeout: float | None = None,
    ) -> httpx.Response:
        request.extensions["timeout"] = httpx.Timeout(timeout).as_dict()
        return self._client.send(request, stream=True)

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
