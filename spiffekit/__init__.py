"""SPIFFE IDs and trust domains, X.509-SVIDs, and X.509 and JWT trust bundles."""

__version__ = "0.1.0"