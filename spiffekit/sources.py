"""Abstract bundle and SVID types and the sources that provide them."""

from __future__ import annotations

import abc

from spiffekit.spiffe_id import TrustDomain


class Bundle(abc.ABC):
    """A collection of public keys trusted for a trust domain."""


class Svid(abc.ABC):
    """A SPIFFE Verifiable Identity Document."""


class BundleRefSource(abc.ABC):
    """A source of bundles, looked up by trust domain, that hands out the bundles it holds."""

    @abc.abstractmethod
    def get_bundle_for_trust_domain(self, trust_domain: TrustDomain) -> Bundle | None:
        """Return the bundle held for ``trust_domain``, or None if there is none.

        Implementations raise an exception if the source fails to fetch the bundle.
        """


class BundleSource(abc.ABC):
    """A source of bundles, looked up by trust domain, that hands out owned bundles."""

    @abc.abstractmethod
    def get_bundle_for_trust_domain(self, trust_domain: TrustDomain) -> Bundle | None:
        """Return a bundle for ``trust_domain``, or None if there is none.

        Implementations raise an exception if the source fails to fetch the bundle.
        """


class SvidSource(abc.ABC):
    """A source of SVIDs that hands out owned SVIDs."""

    @abc.abstractmethod
    def get_svid(self) -> Svid | None:
        """Return an SVID, or None if the source has none.

        Implementations raise an exception if the source fails to fetch the SVID.
        """


class SvidRefSource(abc.ABC):
    """A source of SVIDs that hands out the SVID it holds."""

    @abc.abstractmethod
    def get_svid_ref(self) -> Svid | None:
        """Return the SVID held by the source, or None if it has none.

        Implementations raise an exception if the source fails to fetch the SVID.
        """