from importlib.metadata import version as _pkg_version, PackageNotFoundError as _PkgNotFound

try:
    __version__ = _pkg_version("justhttp")
except _PkgNotFound:
    __version__ = "dev"

from .api import get, post, put, delete
from .basic import get_raw, get_string
from .client import ApiClient
from .errors import (
    JustHttpError,
    InvalidURLError,
    EncodingError,
    TimeoutError,
    TransportError,
    AuthError,
    SizeLimitError,
    DecodeError,
)
from .options import BasicAuthCredentials, RequestArguments, DEFAULT_ARGUMENTS, resolve

__all__ = [
    "__version__",
    "get",
    "post",
    "put",
    "delete",
    "get_raw",
    "get_string",
    "ApiClient",
    "BasicAuthCredentials",
    "RequestArguments",
    "DEFAULT_ARGUMENTS",
    "resolve",
    "JustHttpError",
    "InvalidURLError",
    "EncodingError",
    "TimeoutError",
    "TransportError",
    "AuthError",
    "SizeLimitError",
    "DecodeError",
]
