#!/usr/bin/env python3
"""
Configuration Module - Global constants and settings
==================================================

This module contains all onion address constants used throughout the package.
Centralizing configuration keeps the encoder and the verifier byte-identical
and makes the search and web defaults easy to adjust.

Constants defined here:
- Address format (version byte, checksum tag, field lengths)
- Vanity search defaults
- Web API settings
- Logging defaults
"""

import os

# Address Format
# ==============
VERSION = 3                          # The only supported address version
CHECKSUM_TAG = b".onion checksum"    # Domain separation tag for the checksum hash
ONION_SUFFIX = ".onion"              # Literal suffix of every textual address

PUBLIC_KEY_LENGTH = 32               # Raw Ed25519 public key
CHECKSUM_LENGTH = 2                  # Truncated SHA3-256 digest
VERSION_LENGTH = 1
RECORD_LENGTH = PUBLIC_KEY_LENGTH + CHECKSUM_LENGTH + VERSION_LENGTH   # 35 bytes
ENCODED_LENGTH = 56                  # base32 characters for a 35 byte record
ADDRESS_LENGTH = ENCODED_LENGTH + len(ONION_SUFFIX)                    # 62 characters

# Key Configuration
# =================
SEED_LENGTH = 32                     # Ed25519 seed
PRIVATE_KEY_LENGTH = SEED_LENGTH + PUBLIC_KEY_LENGTH                   # seed || public key

# Vanity Search Configuration
# ===========================
BASE32_ALPHABET = "abcdefghijklmnopqrstuvwxyz234567"
VANITY_WORKERS = os.cpu_count() or 1 # Worker threads used by default
PROGRESS_INTERVAL = 10000            # Log progress every N attempts

# Web API Configuration
# =====================
WEB_HOST = "127.0.0.1"
WEB_PORT = 5000

# Logging Configuration
# =====================
LOG_LEVEL = os.environ.get("ONIONV3_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
