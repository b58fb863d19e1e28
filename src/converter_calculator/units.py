from __future__ import annotations

_FREQUENCY_UNITS = ((1e9, "GHz"), (1e6, "MHz"), (1e3, "kHz"))
_TIME_UNITS = ((1e6, "ms"), (1e3, "μs"))


def format_frequency(hz: float) -> str:
    for scale, unit in _FREQUENCY_UNITS:
        if hz >= scale:
            return f"{hz / scale:.2f} {unit}"
    return f"{hz:.2f} Hz"


def format_time(ns: float) -> str:
    """Format a duration given in nanoseconds."""
    for scale, unit in _TIME_UNITS:
        if ns >= scale:
            return f"{ns / scale:.2f} {unit}"
    return f"{ns:.2f} ns"


def format_ohms(ohms: float) -> str:
    if ohms >= 1e6:
        return f"{ohms / 1e6:g} MΩ"
    if ohms >= 1e3:
        return f"{ohms / 1e3:g} kΩ"
    return f"{ohms:g} Ω"
