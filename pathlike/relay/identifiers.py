"""Mapping of graph node IDs onto the ledger's checksum256 identifier shape."""

import hashlib
import re
from typing import Callable

Digest = Callable[[bytes], bytes]

LEDGER_ID_PATTERN = re.compile(r"^[a-fA-F0-9]{64}$")


def sha256_digest(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def is_ledger_id(node_id: str) -> bool:
    return LEDGER_ID_PATTERN.fullmatch(node_id) is not None


def digest_ledger_id(node_id: str, digest: Digest) -> str:
    return digest(node_id.encode("utf-8")).hex()


def fallback_ledger_id(node_id: str) -> str:
    """Hash a node ID without a cryptographic digest.

    Deterministic 32-bit string hash over UTF-16 code units, padded to 64 hex characters.
    Collisions are easy to produce, so these IDs must never be relied on for uniqueness on
    the ledger.
    """
    encoded = node_id.encode("utf-16-le")
    value = 0
    for i in range(0, len(encoded), 2):
        code_unit = int.from_bytes(encoded[i : i + 2], "little")
        value = (value * 31 + code_unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return format(abs(value), "x").rjust(64, "0")
