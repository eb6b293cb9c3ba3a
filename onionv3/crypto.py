#!/usr/bin/env python3
"""
Cryptographic Module - Onion v3 address encoding and verification
================================================================

This module provides the address utilities used throughout the package:
- Checksum calculation over a public key and version byte
- Address encoding from a raw Ed25519 public key
- Address decoding and validation with checksums

Address record (35 bytes):
[32-byte public key][2-byte checksum][1-byte version]

Textual address (62 characters):
base32(record).lower() + ".onion"

Checksum:
SHA3-256(".onion checksum" || public key || version)[:2]

Every function here is pure, so all of them are safe to call from any
number of threads at once.
"""

import base64
import binascii
import hashlib
import logging
from dataclasses import dataclass
from typing import Optional

from .config import (
    ADDRESS_LENGTH,
    BASE32_ALPHABET,
    CHECKSUM_LENGTH,
    CHECKSUM_TAG,
    ONION_SUFFIX,
    PUBLIC_KEY_LENGTH,
    RECORD_LENGTH,
    VERSION,
)
from .exceptions import (
    AddressError,
    ChecksumMismatchError,
    InvalidKeyError,
    MalformedAddressError,
)

logger = logging.getLogger(__name__)

BASE32_CHARS = frozenset(BASE32_ALPHABET)


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of verify_address(); truthy only for a valid address"""
    valid: bool
    public_key: Optional[bytes] = None

    def __bool__(self) -> bool:
        return self.valid


def checksum(public_key: bytes, version: int = VERSION) -> bytes:
    """
    Calculate the address checksum

    Process:
    1. Start a SHA3-256 hash
    2. Feed the ".onion checksum" domain separation tag
    3. Feed the public key bytes
    4. Feed the single version byte
    5. Keep the first 2 bytes of the digest

    Args:
    - public_key: 32-byte raw Ed25519 public key
    - version: Version byte (always 3 for addresses this package produces)

    Returns:
    - 2-byte checksum
    """
    h = hashlib.sha3_256()
    h.update(CHECKSUM_TAG)
    h.update(public_key)
    h.update(bytes([version]))
    return h.digest()[:CHECKSUM_LENGTH]


def encode_address(public_key: bytes) -> str:
    """
    Encode a public key as an onion v3 address

    Process:
    1. Calculate the checksum for version 3
    2. Concatenate public key + checksum + version
    3. Base32 encode and lower-case the 35-byte record
    4. Append the ".onion" suffix

    Args:
    - public_key: 32-byte raw Ed25519 public key

    Returns:
    - 62 character address string

    Raises:
    - InvalidKeyError: If the public key is not 32 bytes
    """
    if not isinstance(public_key, (bytes, bytearray)) or len(public_key) != PUBLIC_KEY_LENGTH:
        raise InvalidKeyError(f"public key must be {PUBLIC_KEY_LENGTH} bytes")

    public_key = bytes(public_key)
    record = public_key + checksum(public_key, VERSION) + bytes([VERSION])
    return base64.b32encode(record).decode("ascii").lower() + ONION_SUFFIX


def decode_address(address: str) -> bytes:
    """
    Decode an onion v3 address back to its public key

    Validation runs in stages and stops at the first failure; each stage
    relies on the ones before it:
    1. Suffix and length check
    2. ASCII base32 characters only, decoding to exactly 35 bytes
    3. Version byte must be 3 (0 is rejected like any other value)
    4. Recalculate the checksum and compare it with the stored one

    Args:
    - address: Candidate address string

    Returns:
    - The 32-byte public key embedded in the address

    Raises:
    - MalformedAddressError: If stages 1-3 fail
    - ChecksumMismatchError: If the checksum does not match
    """
    if not isinstance(address, str):
        raise MalformedAddressError("address must be a string")

    if len(address) != ADDRESS_LENGTH or not address.lower().endswith(ONION_SUFFIX):
        raise MalformedAddressError(
            f"address must be {ADDRESS_LENGTH} characters ending with {ONION_SUFFIX}"
        )

    encoded = address[:-len(ONION_SUFFIX)]
    if not address.isascii() or not set(encoded.lower()) <= BASE32_CHARS:
        raise MalformedAddressError("address contains characters outside the base32 alphabet")

    encoded = encoded.upper()
    try:
        record = base64.b32decode(encoded)
    except (binascii.Error, ValueError) as e:
        raise MalformedAddressError(f"invalid base32 data: {e}") from e

    if len(record) != RECORD_LENGTH:
        raise MalformedAddressError(
            f"decoded record is {len(record)} bytes, expected {RECORD_LENGTH}"
        )

    version = record[-1]
    if version != VERSION:
        raise MalformedAddressError(f"unsupported address version {version}")

    public_key = record[:PUBLIC_KEY_LENGTH]
    declared = record[PUBLIC_KEY_LENGTH:PUBLIC_KEY_LENGTH + CHECKSUM_LENGTH]

    if checksum(public_key, version) != declared:
        raise ChecksumMismatchError("address checksum does not match")

    return public_key


def verify_address(address: str) -> VerificationResult:
    """
    Verify an onion v3 address

    Never raises: malformed input and checksum failures are both reported
    as an invalid result. The failing stage is logged at DEBUG level.

    Note: a valid result only proves the address is well formed. Callers
    checking their own address must also compare the returned public key
    with the key they encoded.

    Args:
    - address: Candidate address string

    Returns:
    - VerificationResult(valid=True, public_key=...) on success
    - VerificationResult(valid=False) otherwise
    """
    try:
        public_key = decode_address(address)
    except AddressError as e:
        logger.debug("Rejected address %r: %s: %s", address, type(e).__name__, e)
        return VerificationResult(False)
    return VerificationResult(True, public_key)


def validate_address(address: str) -> bool:
    """Return True if the address is a valid onion v3 address"""
    return verify_address(address).valid
