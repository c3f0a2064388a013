"""Deterministic content addressing for blocks and documents.

cyrb53 is a fast non-cryptographic 53-bit hash. Identifiers written by
earlier releases were produced in a JavaScript runtime, so the mixing
below reproduces ``Math.imul`` 32-bit wraparound multiplication and
iterates UTF-16 code units (``charCodeAt``), not Python code points.
Any deviation changes every stored block and document id.
"""
from __future__ import annotations

from collections.abc import Iterable

_MASK32 = 0xFFFFFFFF

HASH_WIDTH = 14


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


def _utf16_units(text: str) -> list[int]:
    raw = text.encode("utf-16-le", "surrogatepass")
    return [raw[i] | (raw[i + 1] << 8) for i in range(0, len(raw), 2)]


def cyrb53(text: str, seed: int = 0) -> int:
    """Return the 53-bit cyrb53 hash of *text*.

    Two 32-bit accumulators are mixed per UTF-16 code unit, avalanched
    against each other, then packed as ``2**32 * (h2 & 0x1FFFFF) + h1``.
    """
    h1 = (0xDEADBEEF ^ seed) & _MASK32
    h2 = (0x41C6CE57 ^ seed) & _MASK32
    for ch in _utf16_units(text):
        h1 = _imul(h1 ^ ch, 2654435761)
        h2 = _imul(h2 ^ ch, 1597334677)
    h1 = _imul(h1 ^ (h1 >> 16), 2246822507) ^ _imul(h2 ^ (h2 >> 13), 3266489909)
    h2 = _imul(h2 ^ (h2 >> 16), 2246822507) ^ _imul(h1 ^ (h1 >> 13), 3266489909)
    return 4294967296 * (0x1FFFFF & h2) + h1


def generate_hash(text: str) -> str:
    """Lowercase hex cyrb53 digest, left-zero-padded to 14 characters."""
    return format(cyrb53(text), "x").rjust(HASH_WIDTH, "0")


def compute_block_id(line: str, line_index: int) -> str:
    """Block id: hash of the trimmed line concatenated with its 0-based index."""
    return generate_hash(f"{line}{line_index}")


def compute_document_id(block_ids: Iterable[str]) -> str:
    """Document id: hash of all block ids concatenated in order."""
    return generate_hash("".join(block_ids))
