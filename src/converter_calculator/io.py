from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .config import ConverterSet

logger = logging.getLogger(__name__)


def load_converter_set(path: str | Path) -> ConverterSet:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(path))

    suffix = p.suffix.lower()
    raw: Any
    if suffix in {".yaml", ".yml"}:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    elif suffix == ".json":
        raw = json.loads(p.read_text(encoding="utf-8"))
    else:
        raise ValueError(f"Unsupported converter file format: {p.suffix} (expected .json/.yaml/.yml)")

    if isinstance(raw, list):
        raw = {"converters": raw}

    logger.debug("loading converter set from %s", p)
    try:
        return ConverterSet.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid converter file: {p}\n{exc}") from exc
