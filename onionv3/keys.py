#!/usr/bin/env python3
"""
Key Module - Ed25519 key pair generation
=======================================

Onion v3 addresses embed a raw Ed25519 public key. This module creates
and derives those keys with the ecdsa library's Ed25519 curve.

Private key layout (64 bytes, the libsodium secret key layout):
[32-byte seed][32-byte public key]

A bare 32-byte seed is accepted wherever a private key is expected.
"""

from dataclasses import dataclass
from typing import Optional

import ecdsa

from .config import PRIVATE_KEY_LENGTH, SEED_LENGTH
from .exceptions import InvalidKeyError


@dataclass(frozen=True)
class KeyPair:
    """Ed25519 key pair: 64-byte secret key and 32-byte public key"""
    private_key: bytes
    public_key: bytes

    @property
    def seed(self) -> bytes:
        return self.private_key[:SEED_LENGTH]

    def signing_key(self) -> ecdsa.SigningKey:
        return ecdsa.SigningKey.from_string(self.seed, curve=ecdsa.Ed25519)


def _seed_from_private_key(private_key: bytes) -> bytes:
    if not isinstance(private_key, (bytes, bytearray)):
        raise InvalidKeyError("private key must be bytes")
    if len(private_key) not in (SEED_LENGTH, PRIVATE_KEY_LENGTH):
        raise InvalidKeyError(
            f"private key must be {SEED_LENGTH} or {PRIVATE_KEY_LENGTH} bytes, got {len(private_key)}"
        )
    return bytes(private_key[:SEED_LENGTH])


def derive_public_key(private_key: bytes) -> bytes:
    """
    Derive the public key from a private key

    Args:
    - private_key: 32-byte seed or 64-byte seed + public key

    Returns:
    - 32-byte raw Ed25519 public key

    Raises:
    - InvalidKeyError: If the key has the wrong size, or a 64-byte key
      carries a public half that does not belong to its seed
    """
    seed = _seed_from_private_key(private_key)
    signing_key = ecdsa.SigningKey.from_string(seed, curve=ecdsa.Ed25519)
    public_key = signing_key.get_verifying_key().to_string()

    if len(private_key) == PRIVATE_KEY_LENGTH and bytes(private_key[SEED_LENGTH:]) != public_key:
        raise InvalidKeyError("public half of the secret key does not match its seed")
    return public_key


def generate_keys(private_key: Optional[bytes] = None) -> KeyPair:
    """
    Generate a new key pair, or complete one from a private key

    Args:
    - private_key: Optional existing private key. When omitted a fresh
      key pair is generated from a cryptographically secure source.

    Returns:
    - KeyPair with a 64-byte private key and 32-byte public key

    Raises:
    - InvalidKeyError: If the provided private key cannot be used
    """
    if private_key is None:
        signing_key = ecdsa.SigningKey.generate(curve=ecdsa.Ed25519)
        seed = signing_key.to_string()
        public_key = signing_key.get_verifying_key().to_string()
    else:
        seed = _seed_from_private_key(private_key)
        public_key = derive_public_key(private_key)

    return KeyPair(private_key=seed + public_key, public_key=public_key)
