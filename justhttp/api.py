"""JSON request helpers: get, post, put and delete over the request pipeline."""


from __future__ import annotations

from typing import Any, Type, TypeVar

from .client import ApiClient
from .options import RequestArguments, resolve
from .request import send_request

TResponse = TypeVar("TResponse")


def get(
    url: str,
    *args: RequestArguments,
    response_type: Type[TResponse] = Any,
    client: ApiClient | None = None,
) -> TResponse:
    return send_request(url, "GET", None, response_type, resolve(*args), client)


def post(
    url: str,
    data: Any,
    *args: RequestArguments,
    response_type: Type[TResponse] = Any,
    client: ApiClient | None = None,
) -> TResponse:
    return send_request(url, "POST", data, response_type, resolve(*args), client)


def put(
    url: str,
    data: Any,
    *args: RequestArguments,
    response_type: Type[TResponse] = Any,
    client: ApiClient | None = None,
) -> TResponse:
    return send_request(url, "PUT", data, response_type, resolve(*args), client)


def delete(
    url: str,
    data: Any,
    *args: RequestArguments,
    response_type: Type[TResponse] = Any,
    client: ApiClient | None = None,
) -> TResponse:
    return send_request(url, "DELETE", data, response_type, resolve(*args), client)
