"""X.509-SVIDs: a SPIFFE ID with its certificate chain and private key."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from cryptography import x509
from cryptography.x509.oid import ExtensionOID

from spiffekit.certs import (
    CertificateError,
    PrivateKeyError,
    get_x509_extension,
    parse_private_key,
    parse_x509_certificate,
    to_certificate_list,
)
from spiffekit.sources import Svid
from spiffekit.spiffe_id import SpiffeId, SpiffeIdError


class X509SvidErrorKind(enum.Enum):
    """The reasons an X.509-SVID can be rejected."""

    EMPTY_CHAIN = "no certificates found in chain"
    LEAF_CERTIFICATE_HAS_CA_FLAG = "leaf certificate must not have CA flag set to true"
    LEAF_CERTIFICATE_HAS_CRL_SIGN = (
        "leaf certificate must not have 'cRLSign' set as key usage"
    )
    LEAF_CERTIFICATE_HAS_KEY_CERT_SIGN = (
        "leaf certificate must not have 'keyCertSign' set as key usage"
    )
    LEAF_CERTIFICATE_NO_DIGITAL_SIGNATURE = (
        "leaf certificate must have 'digitalSignature' set as key usage"
    )
    SIGNING_CERTIFICATE_NO_CA = "signing certificate must have CA flag set to true"
    SIGNING_CERTIFICATE_NO_KEY_CERT_SIGN = (
        "signing certificate must have 'keyCertSign' set as key usage"
    )
    MISSING_SPIFFE_ID = "leaf certificate misses the SPIFFE-ID in the URI SAN"
    INVALID_SPIFFE_ID = "failed parsing SPIFFE ID from certificate URI SAN"
    CERTIFICATE = "certificate error"
    PRIVATE_KEY = "placeholder"


_TRANSPARENT_KINDS = (X509SvidErrorKind.CERTIFICATE, X509SvidErrorKind.PRIVATE_KEY)


def _kind_message(kind: X509SvidErrorKind) -> str:
    if kind in _TRANSPARENT_KINDS:
        return kind.name.lower().replace("_", " ") + " error"
    return kind.value


class X509SvidError(Exception):
    """Raised when a certificate chain and key do not make a valid X.509-SVID."""

    def __init__(self, kind: X509SvidErrorKind, cause: Exception | None = None) -> None:
        if kind in _TRANSPARENT_KINDS and cause:
            message = str(cause)
        else:
            message = _kind_message(kind)
        super().__init__(message)
        self.kind = kind
        self.__cause__ = cause


@contextmanager
def _certificate_errors() -> Iterator[None]:
    try:
        yield
    except CertificateError as exc:
        raise X509SvidError(X509SvidErrorKind.CERTIFICATE, exc) from exc


def _validate_leaf_key_usage(cert: x509.Certificate) -> None:
    key_usage = get_x509_extension(cert, ExtensionOID.KEY_USAGE)
    if not isinstance(key_usage, x509.KeyUsage):
        return
    if not key_usage.digital_signature:
        raise X509SvidError(X509SvidErrorKind.LEAF_CERTIFICATE_NO_DIGITAL_SIGNATURE)
    if key_usage.crl_sign:
        raise X509SvidError(X509SvidErrorKind.LEAF_CERTIFICATE_HAS_CRL_SIGN)
    if key_usage.key_cert_sign:
        raise X509SvidError(X509SvidErrorKind.LEAF_CERTIFICATE_HAS_KEY_CERT_SIGN)


def _validate_x509_leaf(cert: x509.Certificate) -> None:
    _validate_leaf_key_usage(cert)
    constraints = get_x509_extension(cert, ExtensionOID.BASIC_CONSTRAINTS)
    if isinstance(constraints, x509.BasicConstraints) and constraints.ca:
        raise X509SvidError(X509SvidErrorKind.LEAF_CERTIFICATE_HAS_CA_FLAG)


def _validate_signing(cert: x509.Certificate) -> None:
    constraints = get_x509_extension(cert, ExtensionOID.BASIC_CONSTRAINTS)
    if isinstance(constraints, x509.BasicConstraints) and not constraints.ca:
        raise X509SvidError(X509SvidErrorKind.SIGNING_CERTIFICATE_NO_CA)
    key_usage = get_x509_extension(cert, ExtensionOID.KEY_USAGE)
    if isinstance(key_usage, x509.KeyUsage) and not key_usage.key_cert_sign:
        raise X509SvidError(X509SvidErrorKind.SIGNING_CERTIFICATE_NO_KEY_CERT_SIGN)


def _find_spiffe_id(cert: x509.Certificate) -> SpiffeId:
    san = get_x509_extension(cert, ExtensionOID.SUBJECT_ALTERNATIVE_NAME)
    if not isinstance(san, x509.SubjectAlternativeName):
        raise CertificateError(CertificateError.Kind.UNEXPECTED_EXTENSION, repr(san))
    uris = san.get_values_for_type(x509.UniformResourceIdentifier)
    if not uris:
        raise X509SvidError(X509SvidErrorKind.MISSING_SPIFFE_ID)
    try:
        return SpiffeId.parse(uris[0])
    except SpiffeIdError as exc:
        raise X509SvidError(X509SvidErrorKind.INVALID_SPIFFE_ID, exc) from exc


def validate_leaf_certificate(cert: bytes) -> SpiffeId:
    """Validate a DER leaf certificate as an SVID and return its SPIFFE ID."""
    with _certificate_errors():
        parsed = parse_x509_certificate(cert)
        _validate_x509_leaf(parsed)
        return _find_spiffe_id(parsed)


def validate_signing_certificates(certs: Iterable[bytes]) -> None:
    """Validate DER certificates as signing (CA) certificates of an SVID chain."""
    with _certificate_errors():
        for cert in certs:
            _validate_signing(parse_x509_certificate(cert))


@dataclass(frozen=True)
class X509Svid(Svid):
    """A SPIFFE ID with its DER certificate chain (leaf first) and PKCS#8 private key."""

    spiffe_id: SpiffeId
    cert_chain: tuple[bytes, ...]
    private_key: bytes

    @classmethod
    def parse_from_der(cls, cert_chain_der: bytes, private_key_der: bytes) -> X509Svid:
        """Build an SVID from concatenated DER certificates and a DER PKCS#8 key."""
        with _certificate_errors():
            chain = to_certificate_list(cert_chain_der)
        if not chain:
            raise X509SvidError(X509SvidErrorKind.EMPTY_CHAIN)

        spiffe_id = validate_leaf_certificate(chain[0])
        validate_signing_certificates(chain[1:])
        try:
            private_key = parse_private_key(private_key_der)
        except PrivateKeyError as exc:
            raise X509SvidError(X509SvidErrorKind.PRIVATE_KEY, exc) from exc

        return cls(spiffe_id, tuple(chain), private_key)

    @property
    def leaf(self) -> bytes:
        """The leaf certificate of the chain."""
        return self.cert_chain[0]