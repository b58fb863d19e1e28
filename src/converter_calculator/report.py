from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .config import ConverterConfig


class WeightedResistorDacResult(BaseModel):
    architecture: Literal["weighted_resistor_dac"] = "weighted_resistor_dac"
    bits: str
    decimal_value: int = Field(..., ge=0)
    max_value: int = Field(..., ge=0)
    resistor_values: list[float]
    total_current: float = Field(..., ge=0.0)
    output_voltage: float
    output_voltage_magnitude: float = Field(..., ge=0.0)
    resistor_range: float
    range_ratio: float
    high_ratio: bool


class R2RLadderDacResult(BaseModel):
    architecture: Literal["r2r_ladder_dac"] = "r2r_ladder_dac"
    bits: str
    decimal_value: int = Field(..., ge=0)
    max_value: int = Field(..., ge=0)
    output_voltage: float = Field(..., ge=0.0)
    resistor_values: dict[str, float]


class CounterTypeAdcResult(BaseModel):
    architecture: Literal["counter_type_adc"] = "counter_type_adc"
    total_delay_per_step: float
    max_steps: int = Field(..., ge=1)
    avg_steps: float
    max_conversion_time: float
    avg_conversion_time: float
    max_frequency: float
    avg_frequency: float


class FlashAdcResult(BaseModel):
    architecture: Literal["flash_adc"] = "flash_adc"
    num_comparators: int = Field(..., ge=1)
    num_resistors: int = Field(..., ge=1)
    encoder_outputs: int
    conversion_time: float
    max_frequency: float
    high_component_count: bool


CalculationResult = Annotated[
    Union[WeightedResistorDacResult, R2RLadderDacResult, CounterTypeAdcResult, FlashAdcResult],
    Field(discriminator="architecture"),
]


class ConverterResult(BaseModel):
    architecture: str
    config: ConverterConfig
    result: CalculationResult


class Report(BaseModel):
    generated_at: str
    name: str | None = None
    path: str | None = None
    results: list[ConverterResult]
    notes: list[str] = Field(default_factory=list)
