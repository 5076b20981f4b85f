"""SPIFFE ID and trust domain types as defined by the SPIFFE standard."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

SPIFFE_SCHEME = "spiffe"
SCHEME_PREFIX = "spiffe://"

VALID_TRUST_DOMAIN_CHARS = frozenset("abcdefghijklmnopqrstuvwxyz0123456789-._")
VALID_PATH_SEGMENT_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-._"
)

_DOT_SEGMENTS = ("/.", "/..")


class SpiffeIdErrorKind(enum.Enum):
    """The reasons a SPIFFE ID or trust domain can be rejected."""

    EMPTY = "cannot be empty"
    MISSING_TRUST_DOMAIN = "trust domain is missing"
    WRONG_SCHEME = "scheme is missing or invalid"
    BAD_TRUST_DOMAIN_CHAR = (
        "trust domain characters are limited to lowercase letters, numbers, dots, "
        "dashes, and underscores"
    )
    BAD_PATH_SEGMENT_CHAR = (
        "path segment characters are limited to letters, numbers, dots, dashes, "
        "and underscores"
    )
    EMPTY_SEGMENT = "path cannot contain empty segments"
    DOT_SEGMENT = "path cannot contain dot segments"
    TRAILING_SLASH = "path cannot have a trailing slash"


class SpiffeIdError(ValueError):
    """Raised when a string cannot be parsed as a SPIFFE ID or trust domain."""

    def __init__(self, kind: SpiffeIdErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SpiffeIdError):
            return self.kind is other.kind
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.kind)


def _is_valid_trust_domain_char(c: str) -> bool:
    return c in VALID_TRUST_DOMAIN_CHARS


def _is_valid_path_segment_char(c: str) -> bool:
    return c in VALID_PATH_SEGMENT_CHARS


def _validate_trust_domain_name(name: str) -> None:
    if not all(_is_valid_trust_domain_char(c) for c in name):
        raise SpiffeIdError(SpiffeIdErrorKind.BAD_TRUST_DOMAIN_CHAR)


def validate_path(path: str) -> None:
    """Check that ``path`` is a conformant SPIFFE ID path; raise SpiffeIdError if not."""
    if not path:
        raise SpiffeIdError(SpiffeIdErrorKind.EMPTY)

    segment_start = 0
    for idx, c in enumerate(path):
        if c == "/":
            segment = path[segment_start:idx]
            if segment == "/":
                raise SpiffeIdError(SpiffeIdErrorKind.EMPTY_SEGMENT)
            if segment in _DOT_SEGMENTS:
                raise SpiffeIdError(SpiffeIdErrorKind.DOT_SEGMENT)
            segment_start = idx
            continue
        if not _is_valid_path_segment_char(c):
            raise SpiffeIdError(SpiffeIdErrorKind.BAD_PATH_SEGMENT_CHAR)

    last = path[segment_start:]
    if last == "/":
        raise SpiffeIdError(SpiffeIdErrorKind.TRAILING_SLASH)
    if last in _DOT_SEGMENTS:
        raise SpiffeIdError(SpiffeIdErrorKind.DOT_SEGMENT)


@dataclass(frozen=True, order=True)
class TrustDomain:
    """A SPIFFE trust domain name."""

    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise SpiffeIdError(SpiffeIdErrorKind.MISSING_TRUST_DOMAIN)
        _validate_trust_domain_name(self.name)

    @classmethod
    def parse(cls, id_or_name: str) -> TrustDomain:
        """Parse a trust domain from a bare name or from a SPIFFE ID string."""
        if not id_or_name:
            raise SpiffeIdError(SpiffeIdErrorKind.MISSING_TRUST_DOMAIN)
        if ":/" in id_or_name:
            return SpiffeId.parse(id_or_name).trust_domain
        return cls(id_or_name)

    def id_string(self) -> str:
        """Return the SPIFFE ID of the trust domain, e.g. ``spiffe://example.org``."""
        return f"{SPIFFE_SCHEME}://{self.name}"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, order=True)
class SpiffeId:
    """A SPIFFE ID: a trust domain plus an optional path."""

    trust_domain: TrustDomain
    path: str = ""

    @classmethod
    def parse(cls, id: str) -> SpiffeId:
        """Parse a SPIFFE ID such as ``spiffe://trustdomain/path/other``."""
        if not id:
            raise SpiffeIdError(SpiffeIdErrorKind.EMPTY)
        if not id.startswith(SCHEME_PREFIX):
            raise SpiffeIdError(SpiffeIdErrorKind.WRONG_SCHEME)

        rest = id[len(SCHEME_PREFIX):]
        slash = rest.find("/")
        i = len(rest) if slash < 0 else slash
        if i == 0:
            raise SpiffeIdError(SpiffeIdErrorKind.MISSING_TRUST_DOMAIN)

        td = rest[:i]
        _validate_trust_domain_name(td)

        path = rest[i:]
        if path:
            validate_path(path)

        return cls(TrustDomain(td), path)

    @classmethod
    def from_segments(cls, trust_domain: TrustDomain, segments: Iterable[str]) -> SpiffeId:
        """Build a SPIFFE ID in ``trust_domain`` by joining validated path segments."""
        parts = []
        for segment in segments:
            validate_path(segment)
            parts.append("/" + segment)
        return cls(trust_domain, "".join(parts))

    def is_member_of(self, trust_domain: TrustDomain) -> bool:
        """Return True if this ID belongs to ``trust_domain``."""
        return self.trust_domain == trust_domain

    def __str__(self) -> str:
        return f"{SPIFFE_SCHEME}://{self.trust_domain}{self.path}"