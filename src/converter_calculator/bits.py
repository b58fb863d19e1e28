from __future__ import annotations


def normalize_bits(binary_input: str, resolution: int) -> str:
    """Left-pad with zeros to ``resolution`` and keep the first ``resolution`` characters (MSB first)."""
    return binary_input.rjust(resolution, "0")[:resolution]


def decimal_value(bits: str) -> int:
    if not bits:
        return 0
    return int(bits, 2)


def max_code(resolution: int) -> int:
    return 2**resolution - 1


def set_bit_indices(bits: str) -> list[int]:
    """Indices (0 = MSB) of the bits that are set."""
    return [i for i, bit in enumerate(bits) if bit == "1"]
