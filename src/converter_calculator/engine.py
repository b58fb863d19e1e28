from __future__ import annotations

import logging
from datetime import datetime, timezone

from .bits import decimal_value, max_code, normalize_bits, set_bit_indices
from .config import (
    ConverterSet,
    CounterTypeAdcConfig,
    FlashAdcConfig,
    R2RLadderDacConfig,
    WeightedResistorDacConfig,
)
from .report import (
    CalculationResult,
    ConverterResult,
    CounterTypeAdcResult,
    FlashAdcResult,
    R2RLadderDacResult,
    Report,
    WeightedResistorDacResult,
)

logger = logging.getLogger(__name__)

NS = 1e-9
HIGH_RATIO_THRESHOLD = 1000
HIGH_COMPONENT_COUNT_THRESHOLD = 100


def _nyquist_frequency(conversion_time_ns: float) -> float:
    return 1 / (2 * conversion_time_ns * NS)


def weighted_resistor_dac(config: WeightedResistorDacConfig) -> WeightedResistorDacResult:
    bits = normalize_bits(config.binary_input, config.resolution)
    resistor_values = [config.r_base * 2**i for i in range(config.resolution)]

    total_current = 0.0
    for i in set_bit_indices(bits):
        total_current += config.v_ref / resistor_values[i]
    # Inverting summing amplifier.
    output_voltage = -config.r_feedback * total_current

    resistor_range = config.r_base * 2 ** (config.resolution - 1)
    range_ratio = resistor_range / config.r_base

    logger.debug("weighted_resistor_dac bits=%s vout=%g", bits, output_voltage)
    return WeightedResistorDacResult(
        bits=bits,
        decimal_value=decimal_value(bits),
        max_value=max_code(config.resolution),
        resistor_values=resistor_values,
        total_current=total_current,
        output_voltage=output_voltage,
        output_voltage_magnitude=abs(output_voltage),
        resistor_range=resistor_range,
        range_ratio=range_ratio,
        high_ratio=range_ratio > HIGH_RATIO_THRESHOLD,
    )


def r2r_ladder_dac(config: R2RLadderDacConfig) -> R2RLadderDacResult:
    bits = normalize_bits(config.binary_input, config.resolution)
    code = decimal_value(bits)
    output_voltage = config.v_ref * code / 2**config.resolution

    logger.debug("r2r_ladder_dac bits=%s vout=%g", bits, output_voltage)
    return R2RLadderDacResult(
        bits=bits,
        decimal_value=code,
        max_value=max_code(config.resolution),
        output_voltage=output_voltage,
        resistor_values={"r": config.r_value, "2r": 2 * config.r_value},
    )


def counter_type_adc(config: CounterTypeAdcConfig) -> CounterTypeAdcResult:
    total_delay_per_step = (
        config.comparator_response
        + config.comparator_propagation
        + config.dac_settling
        + config.and_gate_propagation
    )
    max_steps = 2**config.resolution
    max_conversion_time = total_delay_per_step * max_steps
    # Expected step count for a uniformly distributed input, not a bound.
    avg_conversion_time = total_delay_per_step * max_steps / 2

    logger.debug("counter_type_adc step=%gns t_max=%gns", total_delay_per_step, max_conversion_time)
    return CounterTypeAdcResult(
        total_delay_per_step=total_delay_per_step,
        max_steps=max_steps,
        avg_steps=max_steps / 2,
        max_conversion_time=max_conversion_time,
        avg_conversion_time=avg_conversion_time,
        max_frequency=_nyquist_frequency(max_conversion_time),
        avg_frequency=_nyquist_frequency(avg_conversion_time),
    )


def flash_adc(config: FlashAdcConfig) -> FlashAdcResult:
    num_comparators = 2**config.resolution - 1
    # Single parallel comparison regardless of resolution.
    conversion_time = config.comparator_delay

    logger.debug("flash_adc comparators=%d t=%gns", num_comparators, conversion_time)
    return FlashAdcResult(
        num_comparators=num_comparators,
        num_resistors=2**config.resolution,
        encoder_outputs=config.resolution,
        conversion_time=conversion_time,
        max_frequency=_nyquist_frequency(conversion_time),
        high_component_count=num_comparators > HIGH_COMPONENT_COUNT_THRESHOLD,
    )


_CALCULATORS = {
    WeightedResistorDacConfig: weighted_resistor_dac,
    R2RLadderDacConfig: r2r_ladder_dac,
    CounterTypeAdcConfig: counter_type_adc,
    FlashAdcConfig: flash_adc,
}


def calculate(
    config: WeightedResistorDacConfig | R2RLadderDacConfig | CounterTypeAdcConfig | FlashAdcConfig,
) -> CalculationResult:
    try:
        fn = _CALCULATORS[type(config)]
    except KeyError:
        raise TypeError(f"Unsupported converter config: {type(config).__name__}") from None
    return fn(config)


def evaluate_all(converter_set: ConverterSet, path: str | None = None) -> Report:
    results = [
        ConverterResult(architecture=config.architecture, config=config, result=calculate(config))
        for config in converter_set.converters
    ]
    logger.info("evaluated %d converter(s)", len(results))

    return Report(
        generated_at=datetime.now(timezone.utc).isoformat(),
        name=converter_set.name,
        path=path,
        results=results,
        notes=[
            "Closed-form calculator (no circuit transient simulation).",
            "Frequencies apply the Nyquist criterion: f = 1 / (2 * T_conv).",
            "Counter-type average assumes a uniformly distributed input (half the full-scale steps).",
        ],
    )
