#!/usr/bin/env python3
"""
Identity Module - Onion v3 identities
====================================

This module ties keys and addresses together:
- Generate (or derive) a key pair and its onion v3 address
- Verify the address against the key pair that produced it
- Save identities to / load identities from JSON files
- Manage every identity saved in a directory

File format:
{
    "private_key": "hex_encoded_64_byte_secret_key",
    "public_key": "hex_encoded_32_byte_public_key",
    "address": "56_base32_characters.onion"
}

Security note: identity files contain private keys and should be
protected with appropriate file permissions.
"""

import json
import logging
import os
from typing import Dict, List, Optional

from .config import ONION_SUFFIX
from .crypto import encode_address, verify_address
from .exceptions import IdentityFileError, InvalidKeyError
from .keys import KeyPair, generate_keys

logger = logging.getLogger(__name__)

FILE_PREFIX = "onion_"
FILE_EXTENSION = ".json"


class OnionIdentity:
    """
    Onion v3 Identity - A key pair together with its address

    Attributes:
    - keys: Ed25519 key pair
    - address: 62 character onion v3 address
    - verified: True only if the address verified AND decoded back to
      this identity's own public key
    """

    def __init__(self, keys: KeyPair):
        self.keys = keys
        self.address = encode_address(keys.public_key)
        result = verify_address(self.address)
        self.verified = result.valid and result.public_key == keys.public_key

    @property
    def public_key(self) -> bytes:
        return self.keys.public_key

    @property
    def private_key(self) -> bytes:
        return self.keys.private_key

    @property
    def hostname(self) -> str:
        """Address without the ".onion" suffix"""
        return self.address[:-len(ONION_SUFFIX)]

    def default_filename(self) -> str:
        return f"{FILE_PREFIX}{self.hostname}{FILE_EXTENSION}"

    def to_dict(self) -> Dict[str, str]:
        return {
            'private_key': self.private_key.hex(),
            'public_key': self.public_key.hex(),
            'address': self.address,
        }

    def save_to_file(self, filename: Optional[str] = None) -> str:
        """
        Save identity to a JSON file

        Args:
        - filename: Optional custom filename, defaults to onion_HOSTNAME.json

        Returns:
        - The path written to
        """
        if not filename:
            filename = self.default_filename()

        with open(filename, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

        logger.info("Saved identity %s to %s", self.address, filename)
        return filename

    @classmethod
    def from_file(cls, filename: str) -> 'OnionIdentity':
        """
        Load identity from a JSON file, raising on any problem

        The stored address and public key must match the ones derived
        from the stored private key.

        Raises:
        - IdentityFileError: If the file is missing, unreadable or inconsistent
        """
        try:
            with open(filename, 'r') as f:
                data = json.load(f)
            identity = cls(generate_keys(bytes.fromhex(data['private_key'])))
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError, InvalidKeyError) as e:
            raise IdentityFileError(f"cannot load identity from {filename}: {e}") from e

        if data.get('address') != identity.address or data.get('public_key') != identity.public_key.hex():
            raise IdentityFileError(f"identity in {filename} does not match its private key")
        return identity

    @classmethod
    def load_from_file(cls, filename: str) -> Optional['OnionIdentity']:
        """
        Load identity from a JSON file

        Returns:
        - OnionIdentity if the file exists and is consistent, None otherwise
        """
        try:
            return cls.from_file(filename)
        except IdentityFileError as e:
            logger.warning("%s", e)
            return None

    def __repr__(self) -> str:
        return f"OnionIdentity(address={self.address!r}, verified={self.verified})"


def generate_onion_v3(private_key: Optional[bytes] = None) -> OnionIdentity:
    """
    Generate an onion v3 identity

    Args:
    - private_key: Optional existing private key (32-byte seed or 64-byte
      secret key). A new key pair is generated when omitted.

    Returns:
    - OnionIdentity with keys, address and verification flag

    Raises:
    - InvalidKeyError: If the provided private key cannot be used
    """
    identity = OnionIdentity(generate_keys(private_key))
    if not identity.verified:
        logger.error("Generated address %s failed self-verification", identity.address)
    return identity


class Identities:
    """
    Identity Manager - Manages the identities saved in one directory

    Identity files are named: onion_HOSTNAME.json
    """

    def __init__(self, directory: str = '.'):
        self.directory = directory
        self.identities: Dict[str, OnionIdentity] = {}  # address -> identity
        self.load_from_directory()

    def create_identity(self, private_key: Optional[bytes] = None) -> str:
        """Create a new identity, save it and return its address"""
        identity = generate_onion_v3(private_key)
        self.add_identity(identity)
        return identity.address

    def add_identity(self, identity: OnionIdentity):
        os.makedirs(self.directory, exist_ok=True)
        self.identities[identity.address] = identity
        identity.save_to_file(os.path.join(self.directory, identity.default_filename()))

    def get_addresses(self) -> List[str]:
        return list(self.identities.keys())

    def get_identity(self, address: str) -> Optional[OnionIdentity]:
        return self.identities.get(address.lower())

    def load_from_directory(self):
        """Load every onion_*.json identity file in the directory"""
        if not os.path.isdir(self.directory):
            return
        for filename in sorted(os.listdir(self.directory)):
            if filename.startswith(FILE_PREFIX) and filename.endswith(FILE_EXTENSION):
                identity = OnionIdentity.load_from_file(os.path.join(self.directory, filename))
                if identity:
                    self.identities[identity.address] = identity
