from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal, Union

import yaml
from pydantic import ValidationError
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Smallest values the input controls accept.
MIN_V_REF = 0.1
MIN_RESISTANCE = 100.0
MIN_DELAY_NS = 1.0


def _validate_binary_input(v: Any) -> str:
    if not isinstance(v, str):
        raise ValueError(
            f"binary_input must be a string of '0' and '1' (got {v!r}); "
            "quote bit strings in YAML, e.g. binary_input: \"1010\""
        )
    bad = sorted(set(v) - {"0", "1"})
    if bad:
        raise ValueError(f"binary_input must contain only '0' and '1' (got {''.join(bad)!r})")
    return v


class WeightedResistorDacConfig(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    architecture: Literal["weighted_resistor_dac"] = "weighted_resistor_dac"
    resolution: int = Field(4, ge=2, le=12)
    binary_input: str = "1010"
    v_ref: float = Field(5.0, ge=MIN_V_REF)
    r_base: float = Field(1000.0, ge=MIN_RESISTANCE)
    r_feedback: float = Field(1000.0, ge=MIN_RESISTANCE)

    @field_validator("binary_input", mode="before")
    @classmethod
    def _validate_bits(cls, v: Any) -> str:
        return _validate_binary_input(v)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "WeightedResistorDacConfig":
        return _model_from_yaml(cls, path)


class R2RLadderDacConfig(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    architecture: Literal["r2r_ladder_dac"] = "r2r_ladder_dac"
    resolution: int = Field(4, ge=2, le=16)
    binary_input: str = "1010"
    v_ref: float = Field(5.0, ge=MIN_V_REF)
    # Only reported back; the ladder output does not depend on it.
    r_value: float = Field(10000.0, ge=MIN_RESISTANCE)

    @field_validator("binary_input", mode="before")
    @classmethod
    def _validate_bits(cls, v: Any) -> str:
        return _validate_binary_input(v)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "R2RLadderDacConfig":
        return _model_from_yaml(cls, path)


class CounterTypeAdcConfig(BaseModel):
    """Delays are in nanoseconds."""

    model_config = ConfigDict(allow_inf_nan=False)

    architecture: Literal["counter_type_adc"] = "counter_type_adc"
    resolution: int = Field(8, ge=4, le=16)
    comparator_response: float = Field(50.0, ge=MIN_DELAY_NS)
    comparator_propagation: float = Field(20.0, ge=MIN_DELAY_NS)
    dac_settling: float = Field(100.0, ge=MIN_DELAY_NS)
    and_gate_propagation: float = Field(10.0, ge=MIN_DELAY_NS)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "CounterTypeAdcConfig":
        return _model_from_yaml(cls, path)


class FlashAdcConfig(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    architecture: Literal["flash_adc"] = "flash_adc"
    resolution: int = Field(4, ge=2, le=10)
    comparator_delay: float = Field(5.0, ge=MIN_DELAY_NS)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "FlashAdcConfig":
        return _model_from_yaml(cls, path)


ConverterConfig = Annotated[
    Union[WeightedResistorDacConfig, R2RLadderDacConfig, CounterTypeAdcConfig, FlashAdcConfig],
    Field(discriminator="architecture"),
]


class ConverterSet(BaseModel):
    name: str | None = None
    converters: list[ConverterConfig] = Field(..., min_length=1)


def _model_from_yaml(cls: type[BaseModel], path: str | Path) -> Any:
    data = _load_yaml(path)
    try:
        return cls.model_validate(data)
    except ValidationError as exc:
        label = cls.model_fields["architecture"].default
        raise ValueError(f"Invalid {label} config: {path}\n{exc}") from exc


def _load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(path))
    try:
        return yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:  # pragma: no cover
        raise ValueError(f"Failed to parse YAML: {p}") from exc
