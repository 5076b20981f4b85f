import pytest

from spiffekit.sources import (
    Bundle,
    BundleRefSource,
    BundleSource,
    Svid,
    SvidRefSource,
    SvidSource,
)
from spiffekit.spiffe_id import SpiffeId, TrustDomain


class _NamedBundle(Bundle):
    def __init__(self, trust_domain):
        self.trust_domain = trust_domain


class _NamedSvid(Svid):
    def __init__(self, spiffe_id):
        self.spiffe_id = spiffe_id


class _MapRefSource(BundleRefSource):
    def __init__(self, bundles):
        self._bundles = {b.trust_domain: b for b in bundles}

    def get_bundle_for_trust_domain(self, trust_domain):
        return self._bundles.get(trust_domain)


class _CopySource(BundleSource):
    def __init__(self, bundles):
        self._bundles = {b.trust_domain: b for b in bundles}

    def get_bundle_for_trust_domain(self, trust_domain):
        found = self._bundles.get(trust_domain)
        return None if found is None else _NamedBundle(found.trust_domain)


class _FixedSvidSource(SvidSource):
    def __init__(self, svid):
        self._svid = svid

    def get_svid(self):
        return self._svid


class _FixedSvidRefSource(SvidRefSource):
    def __init__(self, svid):
        self._svid = svid

    def get_svid_ref(self):
        return self._svid


@pytest.mark.parametrize(
    "abstract", [BundleRefSource, BundleSource, SvidSource, SvidRefSource]
)
def test_abstract_sources_cannot_be_instantiated(abstract):
    with pytest.raises(TypeError):
        abstract()


def test_ref_source_returns_held_bundle():
    td = TrustDomain.parse("example.org")
    bundle = _NamedBundle(td)
    source = _MapRefSource([bundle])
    assert source.get_bundle_for_trust_domain(td) is bundle


def test_ref_source_returns_none_for_unknown_domain():
    source = _MapRefSource([_NamedBundle(TrustDomain.parse("example.org"))])
    assert source.get_bundle_for_trust_domain(TrustDomain.parse("other.org")) is None


def test_owned_source_returns_new_bundle_for_domain():
    td = TrustDomain.parse("example.org")
    held = _NamedBundle(td)
    source = _CopySource([held])
    result = source.get_bundle_for_trust_domain(td)
    assert result is not held
    assert result.trust_domain == td


def test_svid_sources_return_their_svid():
    svid = _NamedSvid(SpiffeId.parse("spiffe://example.org/workload"))
    owned = _FixedSvidSource(svid).get_svid()
    referenced = _FixedSvidRefSource(svid).get_svid_ref()
    assert owned is svid
    assert referenced is svid
    assert str(owned.spiffe_id) == "spiffe://example.org/workload"


def test_svid_source_may_have_no_svid():
    empty = _FixedSvidSource(None)
    present = _FixedSvidSource(_NamedSvid(SpiffeId.parse("spiffe://example.org")))
    assert empty.get_svid() is None
    assert present.get_svid().spiffe_id.is_member_of(TrustDomain.parse("example.org"))