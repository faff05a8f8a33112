"""Integers as elements of the scalar field of the Ristretto/Ed25519 group."""

ORDER = 2**252 + 27742317777372353535851937790883648493


def from_i64(x: int) -> int:
    """Map a signed integer to its canonical field element."""
    return x % ORDER


def to_bytes(x: int) -> bytes:
    """Encode a field element as 32 little-endian bytes."""
    return (x % ORDER).to_bytes(32, "little")