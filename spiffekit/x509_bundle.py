"""X.509 bundles: sets of trusted X.509 authorities for trust domains."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from spiffekit.certs import CertificateError, parse_x509_certificate, to_certificate_list
from spiffekit.sources import Bundle, BundleRefSource
from spiffekit.spiffe_id import TrustDomain


class X509BundleError(Exception):
    """Raised when the X.509 authorities of a bundle cannot be parsed or validated."""

    def __init__(self, error: CertificateError) -> None:
        super().__init__(str(error))
        self.certificate_error = error
        self.__cause__ = error


def _checked_authority(der: bytes) -> bytes:
    """Return ``der`` as bytes after checking that it is a DER X.509 certificate."""
    data = bytes(der)
    try:
        parse_x509_certificate(data)
    except CertificateError as exc:
        raise X509BundleError(exc) from exc
    return data


@dataclass
class X509Bundle(Bundle):
    """The trusted X.509 authorities of a trust domain, as DER-encoded certificates."""

    trust_domain: TrustDomain
    x509_authorities: list[bytes] = field(default_factory=list)

    @classmethod
    def from_x509_authorities(
        cls, trust_domain: TrustDomain, authorities: Iterable[bytes]
    ) -> X509Bundle:
        """Build a bundle from DER-encoded certificates, one per authority."""
        return cls(trust_domain, [_checked_authority(a) for a in authorities])

    @classmethod
    def parse_from_der(cls, trust_domain: TrustDomain, bundle_der: bytes) -> X509Bundle:
        """Build a bundle from concatenated DER-encoded certificates."""
        try:
            blocks = to_certificate_list(bundle_der)
        except CertificateError as exc:
            raise X509BundleError(exc) from exc
        return cls(trust_domain, [_checked_authority(b) for b in blocks])

    def add_authority(self, authority_bytes: bytes) -> None:
        """Add a DER-encoded X.509 authority after checking that it parses."""
        self.x509_authorities.append(_checked_authority(authority_bytes))

    @property
    def authorities(self) -> list[bytes]:
        """The DER-encoded X.509 authorities in the bundle."""
        return self.x509_authorities


@dataclass
class X509BundleSet(BundleRefSource):
    """X.509 bundles keyed by trust domain."""

    bundles: dict[TrustDomain, X509Bundle] = field(default_factory=dict)

    def add_bundle(self, bundle: X509Bundle) -> None:
        """Add a bundle, replacing any existing one for the same trust domain."""
        self.bundles[bundle.trust_domain] = bundle

    def get_bundle(self, trust_domain: TrustDomain) -> X509Bundle | None:
        """Return the bundle for ``trust_domain``, or None."""
        return self.bundles.get(trust_domain)

    def get_bundle_for_trust_domain(self, trust_domain: TrustDomain) -> X509Bundle | None:
        """Return the bundle for ``trust_domain``, or None."""
        return self.bundles.get(trust_domain)