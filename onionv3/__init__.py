"""
Onion v3 address toolkit

Encode Ed25519 public keys as Tor style v3 onion addresses and verify
addresses back to their public keys.
"""

from .crypto import (
    VerificationResult,
    checksum,
    decode_address,
    encode_address,
    validate_address,
    verify_address,
)
from .identity import Identities, OnionIdentity, generate_onion_v3
from .keys import KeyPair, derive_public_key, generate_keys

__version__ = "1.0.0"
