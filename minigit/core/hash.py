"""Digest utilities for MiniGit."""

import hashlib
import string

DIGEST_LENGTH = 40


def hash_object(data: bytes) -> str:
    """
    Compute the digest of raw content.
    
    Args:
        data: Bytes to hash
        
    Returns:
        40-character lowercase hex string
    """
    return hashlib.sha1(data).hexdigest()


def is_digest(value: str) -> bool:
    """Check whether a string looks like a full object digest."""
    return (
        len(value) == DIGEST_LENGTH
        and all(c in string.hexdigits.lower() for c in value)
    )
