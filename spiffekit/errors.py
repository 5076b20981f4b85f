"""Errors raised when talking to the Workload API, and related constants."""

from __future__ import annotations

import enum

from spiffekit.jwt_bundle import JwtBundleError
from spiffekit.spiffe_id import SpiffeIdError
from spiffekit.x509_bundle import X509BundleError
from spiffekit.x509_svid import X509SvidError

DEFAULT_SVID = 0
"""Index of the default SVID in a list returned by the Workload API."""

SPIFFE_SOCKET_ENV = "SPIFFE_ENDPOINT_SOCKET"
"""Environment variable holding the Workload API endpoint socket address."""


class SocketPathErrorKind(enum.Enum):
    """The reasons a Workload API endpoint socket address can be rejected."""

    INVALID_SCHEME = "workload endpoint socket URI must have a tcp:// or unix:// scheme"
    UNIX_ADDRESS_EMPTY_PATH = "workload endpoint unix socket URI must include a path"
    TCP_ADDRESS_NON_EMPTY_PATH = "workload endpoint tcp socket URI must not include a path"
    HAS_QUERY_VALUES = "workload endpoint socket URI must not include query values"
    HAS_FRAGMENT = "workload endpoint socket URI must not include a fragment"
    HAS_USER_INFO = "workload endpoint socket URI must not include user info"
    TCP_EMPTY_HOST = "workload endpoint tcp socket URI must include a host"
    TCP_ADDRESS_NO_IP_PORT = (
        "workload endpoint tcp socket URI host component must be an IP:port"
    )
    PARSE = "workload endpoint socket is not a valid URI"


class SocketPathError(ValueError):
    """Raised when a Workload API endpoint socket address is not valid."""

    def __init__(self, kind: SocketPathErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SocketPathError):
            return self.kind is other.kind
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.kind)


class GrpcClientErrorKind(enum.Enum):
    """The ways fetching material from the Workload API can fail."""

    MISSING_ENDPOINT_SOCKET_PATH = (
        "missing endpoint socket address environment variable (SPIFFE_ENDPOINT_SOCKET)"
    )
    EMPTY_RESPONSE = "received an empty response from the GRPC client"
    INVALID_ENDPOINT_SOCKET_PATH = "invalid endpoint socket path"
    INVALID_X509_SVID = "failed to process X509Svid response"
    INVALID_JWT_SVID = "failed to process JwtSvid response"
    INVALID_X509_BUNDLE = "failed to process X509Bundle response"
    INVALID_JWT_BUNDLE = "failed to process JwtBundle response"
    INVALID_TRUST_DOMAIN = "invalid trust domain in bundles response"
    GRPC = "error response from the GRPC client"
    TRANSPORT = "error creating transport channel to the GRPC client"


_KIND_BY_ERROR: tuple[tuple[type[Exception], GrpcClientErrorKind], ...] = (
    (SocketPathError, GrpcClientErrorKind.INVALID_ENDPOINT_SOCKET_PATH),
    (X509SvidError, GrpcClientErrorKind.INVALID_X509_SVID),
    (X509BundleError, GrpcClientErrorKind.INVALID_X509_BUNDLE),
    (JwtBundleError, GrpcClientErrorKind.INVALID_JWT_BUNDLE),
    (SpiffeIdError, GrpcClientErrorKind.INVALID_TRUST_DOMAIN),
)


class GrpcClientError(Exception):
    """Raised when material cannot be fetched from the Workload API."""

    def __init__(self, kind: GrpcClientErrorKind, cause: BaseException | None = None) -> None:
        super().__init__(kind.value)
        self.kind = kind
        self.__cause__ = cause

    @classmethod
    def from_error(cls, error: Exception) -> GrpcClientError:
        """Wrap a parsing or validation error in the matching client error."""
        for error_type, kind in _KIND_BY_ERROR:
            if isinstance(error, error_type):
                return cls(kind, error)
        raise TypeError(f"no client error kind for {type(error).__name__}")