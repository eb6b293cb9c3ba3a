#!/usr/bin/env python3
"""
Exception Module - Custom onion address exceptions
=================================================

This module defines all custom exceptions used throughout the package.
Using specific exceptions keeps the verification stages apart for logging
and gives callers of the key and search helpers clear error types.

Exception hierarchy:
- OnionError: Base exception for all package operations
- AddressError: A textual address failed verification
  - MalformedAddressError: Wrong length, suffix, alphabet, size or version
  - ChecksumMismatchError: Well formed, but the checksum does not recompute
- InvalidKeyError: A key has the wrong size or cannot be used
- VanityPrefixError: A vanity prefix can never appear in an address
- IdentityFileError: An identity file cannot be read back
"""

class OnionError(Exception):
    """
    Base exception for onion address operations

    Parent class for all errors raised by this package.
    """
    pass

class AddressError(OnionError):
    """
    Raised when a textual address fails verification

    Only raised by decode_address(). verify_address() turns every
    AddressError into an invalid result instead of propagating it.
    """
    pass

class MalformedAddressError(AddressError):
    """
    Raised when an address is structurally invalid

    Occurs when the address:
    - Is not a string
    - Does not end with ".onion" or is not 62 characters long
    - Contains characters outside the base32 alphabet
    - Does not decode to exactly 35 bytes
    - Carries a version byte other than 3
    """
    pass

class ChecksumMismatchError(AddressError):
    """
    Raised when a well formed address carries the wrong checksum

    Example:
    - A single character of a valid address was mistyped
    """
    pass

class InvalidKeyError(OnionError):
    """
    Raised when a key cannot be used

    Example:
    - Public key handed to the encoder is not 32 bytes
    - Private key is neither a 32 byte seed nor a 64 byte secret key
    - Secret key whose public half does not match its seed
    """
    pass

class VanityPrefixError(OnionError):
    """Raised when a vanity prefix can never match an address"""
    pass

class IdentityFileError(OnionError):
    """Raised when a saved identity cannot be loaded"""
    pass
