[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spiffekit"
version = "0.1.0"
description = "SPIFFE IDs, trust domains, X.509-SVIDs and X.509/JWT trust bundles"
requires-python = ">=3.10"
keywords = ["spiffe", "svid", "x509", "jwt", "workload-identity", "trust-bundle"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: Security :: Cryptography",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["spiffekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
