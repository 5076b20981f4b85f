"""JWT bundles: sets of JWT authorities (public keys) for trust domains."""

from __future__ import annotations

import enum
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from spiffekit.sources import Bundle, BundleRefSource
from spiffekit.spiffe_id import TrustDomain

JwtAuthority = dict[str, Any]


class JwtBundleError(Exception):
    """Raised when a JWT bundle cannot be built."""

    class Kind(enum.Enum):
        MISSING_KEY_ID = "missing key ID"
        DESERIALIZE = "cannot deserialize json jwk set"

    def __init__(self, kind: JwtBundleError.Kind) -> None:
        super().__init__(kind.value)
        self.kind = kind


def _deserialize_error() -> JwtBundleError:
    return JwtBundleError(JwtBundleError.Kind.DESERIALIZE)


def _parse_key_set(data: bytes | str) -> list[JwtAuthority]:
    """Decode a JWK set document and return its keys."""
    try:
        document = json.loads(data)
    except (ValueError, UnicodeDecodeError) as exc:
        raise _deserialize_error() from exc
    if not isinstance(document, dict) or not isinstance(document.get("keys"), list):
        raise _deserialize_error()
    keys = document["keys"]
    for key in keys:
        if not isinstance(key, dict) or not isinstance(key.get("kty"), str):
            raise _deserialize_error()
        if "kid" in key and not isinstance(key["kid"], str):
            raise _deserialize_error()
    return keys


@dataclass
class JwtBundle(Bundle):
    """The trusted JWT authorities of a trust domain, keyed by key ID."""

    trust_domain: TrustDomain
    jwt_authorities: dict[str, JwtAuthority] = field(default_factory=dict)

    @classmethod
    def from_jwt_authorities(
        cls, trust_domain: TrustDomain, jwt_authorities: bytes | str
    ) -> JwtBundle:
        """Build a bundle from an RFC 7517 JWK set document."""
        authorities: dict[str, JwtAuthority] = {}
        for key in _parse_key_set(jwt_authorities):
            key_id = key.get("kid")
            if key_id is None:
                raise JwtBundleError(JwtBundleError.Kind.MISSING_KEY_ID)
            authorities[key_id] = key
        return cls(trust_domain, authorities)

    def find_jwt_authority(self, key_id: str) -> JwtAuthority | None:
        """Return the authority with ``key_id``, or None."""
        return self.jwt_authorities.get(key_id)

    def add_jwt_authority(self, authority: Mapping[str, Any]) -> None:
        """Add an authority; it must carry a ``kid`` key ID."""
        key_id = authority.get("kid")
        if not isinstance(key_id, str):
            raise JwtBundleError(JwtBundleError.Kind.MISSING_KEY_ID)
        self.jwt_authorities[key_id] = dict(authority)


@dataclass
class JwtBundleSet(BundleRefSource):
    """JWT bundles keyed by trust domain."""

    bundles: dict[TrustDomain, JwtBundle] = field(default_factory=dict)

    def add_bundle(self, bundle: JwtBundle) -> None:
        """Add a bundle, replacing any existing one for the same trust domain."""
        self.bundles[bundle.trust_domain] = bundle

    def get_bundle(self, trust_domain: TrustDomain) -> JwtBundle | None:
        """Return the bundle for ``trust_domain``, or None."""
        return self.bundles.get(trust_domain)

    def get_bundle_for_trust_domain(self, trust_domain: TrustDomain) -> JwtBundle | None:
        """Return the bundle for ``trust_domain``, or None."""
        return self.bundles.get(trust_domain)