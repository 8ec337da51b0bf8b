"""
Hash functions
"""
import hashlib

__all__ = ["sha256", "hash256"]


# HASHLIB
def sha256(encoded_data: bytes) -> bytes:
    return hashlib.sha256(encoded_data).digest()


def hash256(encoded_data: bytes) -> bytes:
    return sha256(sha256(encoded_data))
