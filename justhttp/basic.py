"""Raw fetch helpers. They issue a plain GET and return the whole body,
without the policy merge, status checks or size bound of the JSON helpers."""


from __future__ import annotations

import httpx

from .client import ApiClient
from .errors import TransportError


def get_raw(url: str, *, client: ApiClient | None = None) -> bytes:
    if client is not None:
        return _fetch(client, url)
    with ApiClient() as transient:
        return _fetch(transient, url)


def get_string(url: str, *, client: ApiClient | None = None) -> str:
    return get_raw(url, client=client).decode("utf-8", errors="replace")


def _fetch(client: ApiClient, url: str) -> bytes:
    try:
        request = client.build_request("GET", httpx.URL(url))
        response = client.dispatch(request)
        try:
            return response.read()
        finally:
            response.close()
    except (httpx.RequestError, httpx.InvalidURL) as e:
        raise TransportError(str(e) or type(e).__name__) from e
