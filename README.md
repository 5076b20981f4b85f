# spiffekit

Types for working with SPIFFE workload identities:

- `SpiffeId` and `TrustDomain` (`spiffekit.spiffe_id`), parsed and validated by
  the SPIFFE ID rules.
- `X509Svid` (`spiffekit.x509_svid`), an X.509-SVID built from a DER certificate
  chain and a DER private key, with the leaf and signing certificate checks applied.
- `X509Bundle` / `X509BundleSet` (`spiffekit.x509_bundle`) and
  `JwtBundle` / `JwtBundleSet` (`spiffekit.jwt_bundle`), the trusted authorities
  of one or more trust domains.
- Abstract `Bundle`, `Svid`, `BundleSource`, `BundleRefSource`, `SvidSource` and
  `SvidRefSource` base classes (`spiffekit.sources`) for anything that hands out
  bundles or SVIDs.

## Install

```
pip install spiffekit
```

## SPIFFE IDs

```python
from spiffekit.spiffe_id import SpiffeId, SpiffeIdError, TrustDomain

spiffe_id = SpiffeId.parse("spiffe://example.org/service/web")
print(spiffe_id.trust_domain)      # example.org
print(spiffe_id.path)              # /service/web

td = TrustDomain.parse("example.org")
print(td.id_string())              # spiffe://example.org
print(spiffe_id.is_member_of(td))  # True

# A trust domain can also be taken from a full SPIFFE ID.
TrustDomain.parse("spiffe://example.org/path")  # TrustDomain(name='example.org')

print(SpiffeId.from_segments(td, ["service", "db"]))  # spiffe://example.org/service/db

try:
    SpiffeId.parse("spiffe://example.org/path/")
except SpiffeIdError as err:
    print(err.kind)  # SpiffeIdErrorKind.TRAILING_SLASH
```

`SpiffeIdError` is a `ValueError`; its `kind` is a `SpiffeIdErrorKind`
(empty input, missing trust domain, wrong scheme, bad trust domain or path
character, empty segment, dot segment, trailing slash). `validate_path(path)`
applies the path rules on its own. Both `SpiffeId` and `TrustDomain` are frozen,
hashable and ordered.

## JWT bundles

A JWT bundle holds the JWK entries of a trust domain, keyed by their `kid`.
Keys are kept as plain dictionaries; each must be a JSON object with a string
`kty`.

```python
from spiffekit.jwt_bundle import JwtBundle, JwtBundleError, JwtBundleSet
from spiffekit.spiffe_id import TrustDomain

jwks = b"""{
  "keys": [
    {
      "kty": "EC",
      "kid": "C6vs25welZOx6WksNYfbMfiw9l96pMnD",
      "crv": "P-256",
      "x": "ngLYQnlfF6GsojUwqtcEE3WgTNG2RUlsGhK73RNEl5k",
      "y": "tKbiDSUSsQ3F1P7wteeHNXIcU-cx6CgSbroeQrQHTLM"
    }
  ]
}"""

td = TrustDomain.parse("example.org")
bundle = JwtBundle.from_jwt_authorities(td, jwks)
key = bundle.find_jwt_authority("C6vs25welZOx6WksNYfbMfiw9l96pMnD")  # dict or None

bundle.add_jwt_authority({"kty": "EC", "kid": "other-key"})

bundles = JwtBundleSet()
bundles.add_bundle(bundle)          # replaces any bundle for the same trust domain
bundles.get_bundle(td)              # the bundle, or None
```

A document that is not a valid JWK set raises `JwtBundleError` with kind
`DESERIALIZE`; a key without a `kid` raises it with kind `MISSING_KEY_ID`.

## X.509 bundles

```python
from spiffekit.x509_bundle import X509Bundle, X509BundleSet

bundle = X509Bundle.parse_from_der(td, bundle_der)         # concatenated DER certificates
bundle = X509Bundle.from_x509_authorities(td, [ca_der])    # one DER certificate each
bundle.add_authority(other_ca_der)
print(len(bundle.authorities))                             # DER bytes, one per authority

bundles = X509BundleSet()
bundles.add_bundle(bundle)
bundles.get_bundle(td)
```

Every authority is checked to parse as an X.509 certificate; a failure raises
`X509BundleError`, whose `certificate_error` is the underlying `CertificateError`.

## X.509-SVIDs

```python
from spiffekit.x509_svid import X509Svid, X509SvidError

svid = X509Svid.parse_from_der(cert_chain_der, private_key_der)
print(svid.spiffe_id)      # from the first URI SAN of the leaf
print(len(svid.leaf))      # DER bytes of the leaf certificate
svid.cert_chain            # tuple of DER certificates, leaf first
svid.private_key           # the DER private key bytes
```

The leaf must carry key usage with `digitalSignature` and without `cRLSign` or
`keyCertSign`, basic constraints without the CA flag, and a subject alternative
name holding a URI that is a valid SPIFFE ID. Every further certificate in the
chain must have the CA flag and `keyCertSign`. A violation raises
`X509SvidError`, whose `kind` is an `X509SvidErrorKind`. The checks are also
available as `validate_leaf_certificate(der)` and
`validate_signing_certificates(ders)`.

Lower-level helpers live in `spiffekit.certs`: `to_certificate_list` splits
concatenated DER certificates, `parse_x509_certificate` and
`get_x509_extension` raise `CertificateError`, and `parse_private_key` raises
`PrivateKeyError`.

## Workload API errors and constants

`spiffekit.errors` defines `SPIFFE_SOCKET_ENV` (`"SPIFFE_ENDPOINT_SOCKET"`),
`DEFAULT_SVID` (`0`), `SocketPathError` with its `SocketPathErrorKind`, and
`GrpcClientError` with its `GrpcClientErrorKind`.
`GrpcClientError.from_error(err)` wraps a `SocketPathError`, `X509SvidError`,
`X509BundleError`, `JwtBundleError` or `SpiffeIdError` in the matching client
error.

## What this package does not do

- It has no Workload API client: it does not connect to an endpoint socket,
  read `SPIFFE_ENDPOINT_SOCKET`, or fetch SVIDs and bundles. The error types in
  `spiffekit.errors` are there for code that does.
- It does not parse or validate socket addresses; `SocketPathError` only
  describes such failures.
- It has no JWT-SVID type and does not verify JWT signatures; JWT bundle keys
  are stored as given.
- It does not verify certificate signatures or chain trust; X.509-SVID checks
  cover the extensions listed above.

## Tests

```
pip install -e .[test]
pytest
```