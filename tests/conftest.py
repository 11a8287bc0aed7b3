"""
Shared fixtures: deterministic keys and cheap scrypt parameters.
"""

import pytest

from ontology_client.crypto.key import KeyParameters, PrivateKey
from ontology_client.crypto.schemes import CurveLabel, KeyType
from ontology_client.crypto.scrypt import ScryptParams

ECDSA_PRIVATE_KEY = "c19f16785b8f3543bbaf5e1dbb5d398dfa6c85aaad54fc9d71203ce83e505c07"
EDDSA_PRIVATE_KEY = "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"


@pytest.fixture
def ecdsa_key():
    """Deterministic ECDSA P-256 private key."""
    return PrivateKey(ECDSA_PRIVATE_KEY, KeyType.ECDSA, KeyParameters(CurveLabel.SECP256R1))


@pytest.fixture
def eddsa_key():
    """Deterministic Ed25519 private key."""
    return PrivateKey(EDDSA_PRIVATE_KEY, KeyType.EDDSA, KeyParameters(CurveLabel.ED25519))


@pytest.fixture
def fast_scrypt():
    """Scrypt parameters small enough for unit tests."""
    return ScryptParams(cost=256, block_size=8, parallel=1, size=64)
