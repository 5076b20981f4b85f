"""Parsing of DER-encoded X.509 certificates and PKCS#8 private keys."""

from __future__ import annotations

import enum
from collections.abc import Iterator

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization


class CertificateError(Exception):
    """Raised when X.509 certificates cannot be parsed or validated."""

    class Kind(enum.Enum):
        MISSING_X509_EXTENSION = "X.509 extension is missing: {}"
        UNEXPECTED_EXTENSION = "unexpected X.509 extension: {}"
        CHAIN_DECODE = "failed decoding chain of DER certificates"
        PARSE_DER = "failed parsing DER certificate"
        PARSE_X509_CERTIFICATE = "failed parsing X.509 certificate"

    def __init__(self, kind: CertificateError.Kind, detail: str = "") -> None:
        super().__init__(kind.value.format(detail))
        self.kind = kind
        self.detail = detail


class PrivateKeyError(Exception):
    """Raised when a PKCS#8 private key cannot be decoded."""

    def __init__(self) -> None:
        super().__init__("failed decoding PKCS#8 private key")


def _chain_error() -> CertificateError:
    return CertificateError(CertificateError.Kind.CHAIN_DECODE)


def _tlv_end(data: bytes, offset: int) -> int:
    """Return the offset just past the DER element that starts at ``offset``."""
    size = len(data)
    tag = data[offset]
    offset += 1
    if tag & 0x1F == 0x1F:
        while True:
            if offset >= size:
                raise _chain_error()
            more = data[offset] & 0x80
            offset += 1
            if not more:
                break
    if offset >= size:
        raise _chain_error()
    first = data[offset]
    offset += 1
    if first < 0x80:
        length = first
    elif first == 0x80:
        raise _chain_error()
    else:
        count = first & 0x7F
        if offset + count > size:
            raise _chain_error()
        length = int.from_bytes(data[offset:offset + count], "big")
        offset += count
    end = offset + length
    if end > size:
        raise _chain_error()
    return end


def _der_blocks(data: bytes) -> Iterator[bytes]:
    offset = 0
    while offset < len(data):
        end = _tlv_end(data, offset)
        yield data[offset:end]
        offset = end


def to_certificate_list(cert_chain_der: bytes) -> list[bytes]:
    """Split concatenated DER certificates into one DER byte string per certificate."""
    return list(_der_blocks(bytes(cert_chain_der)))


def parse_x509_certificate(der_bytes: bytes) -> x509.Certificate:
    """Parse DER bytes as an X.509 certificate, raising CertificateError on failure."""
    try:
        cert = x509.load_der_x509_certificate(bytes(der_bytes))
        cert.extensions  # extensions are parsed lazily; force them now
    except (ValueError, x509.DuplicateExtension) as exc:
        raise CertificateError(CertificateError.Kind.PARSE_X509_CERTIFICATE) from exc
    return cert


def get_x509_extension(cert: x509.Certificate, oid: x509.ObjectIdentifier) -> x509.ExtensionType:
    """Return the parsed value of the extension identified by ``oid``."""
    try:
        extension = cert.extensions.get_extension_for_oid(oid)
    except x509.ExtensionNotFound:
        raise CertificateError(
            CertificateError.Kind.MISSING_X509_EXTENSION, oid.dotted_string
        ) from None
    except (ValueError, x509.DuplicateExtension) as exc:
        raise CertificateError(CertificateError.Kind.PARSE_X509_CERTIFICATE) from exc
    return extension.value


def parse_private_key(private_key_der: bytes) -> bytes:
    """Check that the bytes hold an unencrypted DER private key and return them."""
    data = bytes(private_key_der)
    try:
        serialization.load_der_private_key(data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise PrivateKeyError() from exc
    return data