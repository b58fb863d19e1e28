import math
from pathlib import Path

import pytest
from pydantic import ValidationError

from converter_calculator.config import (
    CounterTypeAdcConfig,
    FlashAdcConfig,
    R2RLadderDacConfig,
    WeightedResistorDacConfig,
)
from converter_calculator.engine import calculate
from converter_calculator.io import load_converter_set


def test_weighted_resistor_yaml_resolution_out_of_range(tmp_path: Path) -> None:
    path = tmp_path / "weighted.yaml"
    path.write_text("resolution: 13\nbinary_input: '1010'\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid weighted_resistor_dac config"):
        WeightedResistorDacConfig.from_yaml(path)


def test_flash_yaml_loads_with_defaults(tmp_path: Path) -> None:
    path = tmp_path / "flash.yaml"
    path.write_text("resolution: 6\n", encoding="utf-8")
    config = FlashAdcConfig.from_yaml(path)
    assert config.resolution == 6
    assert config.comparator_delay == 5.0


def test_binary_input_rejects_non_binary_characters() -> None:
    with pytest.raises(ValidationError, match="only '0' and '1'"):
        R2RLadderDacConfig(resolution=4, binary_input="10a2")


@pytest.mark.parametrize("resolution", [3, 17])
def test_counter_type_resolution_bounds(resolution: int) -> None:
    with pytest.raises(ValidationError):
        CounterTypeAdcConfig(resolution=resolution)


def test_non_positive_delay_rejected() -> None:
    with pytest.raises(ValidationError):
        CounterTypeAdcConfig(dac_settling=0)


def test_converter_file_unknown_architecture(tmp_path: Path) -> None:
    path = tmp_path / "converters.yaml"
    path.write_text(
        """
converters:
  - architecture: sigma_delta_adc
    resolution: 16
""".lstrip(),
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="Invalid converter file"):
        load_converter_set(path)


def test_converter_file_unsupported_suffix(tmp_path: Path) -> None:
    path = tmp_path / "converters.toml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported converter file format"):
        load_converter_set(path)


def test_converter_file_accepts_bare_json_list(tmp_path: Path) -> None:
    path = tmp_path / "converters.json"
    path.write_text(
        '[{"architecture": "flash_adc", "resolution": 3}, {"architecture": "r2r_ladder_dac"}]',
        encoding="utf-8",
    )
    converter_set = load_converter_set(path)
    assert converter_set.name is None
    assert [c.architecture for c in converter_set.converters] == ["flash_adc", "r2r_ladder_dac"]
    assert isinstance(converter_set.converters[0], FlashAdcConfig)


def test_converter_file_must_not_be_empty(tmp_path: Path) -> None:
    path = tmp_path / "converters.yaml"
    path.write_text("converters: []\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid converter file"):
        load_converter_set(path)


@pytest.mark.parametrize(
    ("config_cls", "low", "high"),
    [
        (WeightedResistorDacConfig, 2, 12),
        (R2RLadderDacConfig, 2, 16),
        (CounterTypeAdcConfig, 4, 16),
        (FlashAdcConfig, 2, 10),
    ],
)
def test_resolution_bounds_are_inclusive(config_cls, low: int, high: int) -> None:  # noqa: ANN001
    assert config_cls(resolution=low).resolution == low
    assert config_cls(resolution=high).resolution == high
    for resolution in (low - 1, high + 1):
        with pytest.raises(ValidationError):
            config_cls(resolution=resolution)


@pytest.mark.parametrize(
    ("config_cls", "field", "minimum"),
    [
        (WeightedResistorDacConfig, "v_ref", 0.1),
        (WeightedResistorDacConfig, "r_base", 100.0),
        (WeightedResistorDacConfig, "r_feedback", 100.0),
        (R2RLadderDacConfig, "v_ref", 0.1),
        (R2RLadderDacConfig, "r_value", 100.0),
        (CounterTypeAdcConfig, "comparator_response", 1.0),
        (CounterTypeAdcConfig, "comparator_propagation", 1.0),
        (CounterTypeAdcConfig, "dac_settling", 1.0),
        (CounterTypeAdcConfig, "and_gate_propagation", 1.0),
        (FlashAdcConfig, "comparator_delay", 1.0),
    ],
)
def test_inputs_below_control_minimum_rejected(config_cls, field: str, minimum: float) -> None:  # noqa: ANN001
    with pytest.raises(ValidationError):
        config_cls(**{field: minimum / 2})

    payload = calculate(config_cls(**{field: minimum})).model_dump()
    for value in payload.values():
        if isinstance(value, float):
            assert math.isfinite(value)


def test_subnormal_delays_rejected_before_calculation() -> None:
    with pytest.raises(ValidationError):
        FlashAdcConfig(resolution=4, comparator_delay=1e-316)
    with pytest.raises(ValidationError):
        CounterTypeAdcConfig(
            resolution=4,
            comparator_response=1e-320,
            comparator_propagation=1e-320,
            dac_settling=1e-320,
            and_gate_propagation=1e-320,
        )


@pytest.mark.parametrize(
    ("config_cls", "field", "value"),
    [
        (WeightedResistorDacConfig, "r_base", float("inf")),
        (WeightedResistorDacConfig, "v_ref", float("nan")),
        (R2RLadderDacConfig, "v_ref", float("inf")),
        (CounterTypeAdcConfig, "dac_settling", float("inf")),
        (FlashAdcConfig, "comparator_delay", float("nan")),
    ],
)
def test_non_finite_inputs_rejected(config_cls, field: str, value: float) -> None:  # noqa: ANN001
    with pytest.raises(ValidationError):
        config_cls(**{field: value})


def test_yaml_infinity_rejected(tmp_path: Path) -> None:
    path = tmp_path / "weighted.yaml"
    path.write_text("r_base: .inf\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid weighted_resistor_dac config"):
        WeightedResistorDacConfig.from_yaml(path)


@pytest.mark.parametrize("raw", ["1010", "0011"])
def test_unquoted_yaml_bit_string_asks_for_quotes(tmp_path: Path, raw: str) -> None:
    path = tmp_path / "r2r.yaml"
    path.write_text(f"resolution: 4\nbinary_input: {raw}\n", encoding="utf-8")
    with pytest.raises(ValueError, match="quote bit strings in YAML"):
        R2RLadderDacConfig.from_yaml(path)


def test_quoted_yaml_bit_string_keeps_leading_zeros(tmp_path: Path) -> None:
    path = tmp_path / "r2r.yaml"
    path.write_text('resolution: 4\nbinary_input: "0011"\n', encoding="utf-8")
    assert R2RLadderDacConfig.from_yaml(path).binary_input == "0011"
