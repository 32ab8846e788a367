"""
Per-call request policy and its merge rules.

Classes:
    BasicAuthCredentials: User and password sent as a Basic credential header.
    RequestArguments: Partial or effective policy for one request.

Functions:
    resolve(*overrides) -> RequestArguments:
        Folds the overrides over DEFAULT_ARGUMENTS, later values winning per field.

A zero-value field (None, 0, empty mapping, blank credentials) is "not set"
and never erases a value set by an earlier policy.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

SIZE_LIMIT_1MB = 1 << 20


@dataclass(frozen=True)
class BasicAuthCredentials:
    user: str = ""
    password: str = ""

    def is_empty(self) -> bool:
        return not self.user and not self.password


@dataclass(frozen=True)
class RequestArguments:
    timeout_in_milliseconds: Optional[int] = None
    size_limit: Optional[int] = None
    basic_auth_credentials: Optional[BasicAuthCredentials] = None
    query_params: Optional[Dict[str, str]] = None

    @property
    def timeout(self) -> float | None:
        if not self.timeout_in_milliseconds:
            return None
        return self.timeout_in_milliseconds / 1000

    def merge(self, other: "RequestArguments") -> "RequestArguments":
        return RequestArguments(
            timeout_in_milliseconds=_pick(self.timeout_in_milliseconds, other.timeout_in_milliseconds),
            size_limit=_pick(self.size_limit, other.size_limit),
            basic_auth_credentials=_pick(self.basic_auth_credentials, other.basic_auth_credentials),
            query_params=_pick(self.query_params, other.query_params),
        )

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "RequestArguments":
        auth = data.get("basic_auth")
        credentials = None
        if auth:
            credentials = BasicAuthCredentials(
                user=str(auth.get("user", "")),
                password=str(auth.get("password", "")),
            )
        params = data.get("query_params")
        return RequestArguments(
            timeout_in_milliseconds=data.get("timeout_in_milliseconds"),
            size_limit=data.get("size_limit"),
            basic_auth_credentials=credentials,
            query_params={str(k): str(v) for k, v in params.items()} if params else None,
        )


DEFAULT_ARGUMENTS = RequestArguments(size_limit=SIZE_LIMIT_1MB)


def _is_set(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, BasicAuthCredentials):
        return not value.is_empty()
    if isinstance(value, dict):
        return len(value) > 0
    return value != 0


def _pick(current: Any, override: Any) -> Any:
    return override if _is_set(override) else current


def resolve(*overrides: RequestArguments) -> RequestArguments:
    merged = DEFAULT_ARGUMENTS
    for override in overrides:
        merged = merged.merge(override)
    return merged
