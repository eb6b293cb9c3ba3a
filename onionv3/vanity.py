#!/usr/bin/env python3
"""
Vanity Module - Brute force search for addresses with a chosen prefix
====================================================================

An onion v3 address is derived from a random key, so the only way to get
an address starting with a chosen prefix is to keep generating keys until
one matches. Each attempt is independent, so the search runs in several
worker threads that share:
- An attempt counter (protected by a lock)
- A stop event for cooperative cancellation
- A slot for the first match

Search Process:
1. Generate a fresh key pair
2. Encode its address
3. Check if the address starts with the prefix
4. If yes: stop every worker and return the identity
5. If no: try again unless stopped or out of attempts

Expected cost: 32^len(prefix) attempts
Example: A 4 character prefix takes ~1 million attempts on average
"""

import logging
import threading
from typing import List, Optional

from .config import BASE32_ALPHABET, ENCODED_LENGTH, PROGRESS_INTERVAL, VANITY_WORKERS
from .crypto import encode_address
from .exceptions import VanityPrefixError
from .identity import OnionIdentity
from .keys import generate_keys

logger = logging.getLogger(__name__)


def normalize_prefix(prefix: str) -> str:
    """
    Lower-case a prefix and check it can occur in an address

    Raises:
    - VanityPrefixError: If the prefix has non base32 characters or is too long
    """
    prefix = prefix.lower()
    if len(prefix) > ENCODED_LENGTH:
        raise VanityPrefixError(f"prefix longer than {ENCODED_LENGTH} characters")
    invalid = sorted(set(prefix) - set(BASE32_ALPHABET))
    if invalid:
        raise VanityPrefixError(f"prefix contains non base32 characters: {''.join(invalid)}")
    return prefix


def expected_attempts(prefix: str) -> int:
    """Average number of attempts needed to find the prefix"""
    return len(BASE32_ALPHABET) ** len(prefix)


class VanitySearch:
    """
    Vanity Search - Finds an identity whose address starts with a prefix

    Args:
    - prefix: Wanted address prefix (case-insensitive, base32 characters)
    - workers: Number of worker threads
    - max_attempts: Optional total attempt budget shared by all workers
    """

    def __init__(self, prefix: str, workers: int = VANITY_WORKERS,
                 max_attempts: Optional[int] = None):
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.prefix = normalize_prefix(prefix)
        self.workers = workers
        self.max_attempts = max_attempts
        self.attempts = 0
        self.result: Optional[OnionIdentity] = None
        self._lock = threading.Lock()
        self._stop = threading.Event()

    def stop(self):
        """Ask every worker to stop after its current attempt"""
        self._stop.set()

    def _claim_attempt(self) -> bool:
        with self._lock:
            if self.max_attempts is not None and self.attempts >= self.max_attempts:
                return False
            self.attempts += 1
            if self.attempts % PROGRESS_INTERVAL == 0:
                logger.info("Vanity search for %r: %d attempts", self.prefix, self.attempts)
            return True

    def _worker(self, stop_event: threading.Event):
        while not self._stop.is_set() and not stop_event.is_set():
            if not self._claim_attempt():
                return
            keys = generate_keys()
            if not encode_address(keys.public_key).startswith(self.prefix):
                continue
            with self._lock:
                if self.result is None:
                    self.result = OnionIdentity(keys)
            self._stop.set()

    def run(self, stop_event: Optional[threading.Event] = None) -> Optional[OnionIdentity]:
        """
        Run the search until a match, the attempt budget or cancellation

        Args:
        - stop_event: Optional external event; setting it cancels the search

        Returns:
        - The first matching OnionIdentity, or None if none was found
        """
        if stop_event is None:
            stop_event = threading.Event()

        logger.info("Searching for prefix %r with %d workers (~%d attempts expected)",
                    self.prefix, self.workers, expected_attempts(self.prefix))

        threads: List[threading.Thread] = [
            threading.Thread(target=self._worker, args=(stop_event,),
                             name=f"vanity-{i}", daemon=True)
            for i in range(self.workers)
        ]
        for thread in threads:
            thread.start()
        try:
            for thread in threads:
                thread.join()
        finally:
            self._stop.set()

        if self.result:
            logger.info("Found %s after %d attempts", self.result.address, self.attempts)
        else:
            logger.info("No match for %r after %d attempts", self.prefix, self.attempts)
        return self.result
