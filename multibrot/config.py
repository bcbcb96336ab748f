"""JSON save and load of :class:`RenderConfig` documents."""

from __future__ import annotations

import json
from dataclasses import fields, replace
from pathlib import Path
from typing import Union

from .renderer import RenderConfig

PathLike = Union[str, Path]

# document key -> RenderConfig field
DOCUMENT_KEYS = {
    "MaxIter": "max_iterations",
    "PixelWidth": "pixel_width",
    "PixelHeight": "pixel_height",
    "Exponent": "exponent",
    "CenterReal": "center_real",
    "CenterImag": "center_imag",
    "Height": "height",
    "ColorFreq": "color_freq",
    "HueOffset": "hue_offset",
    "AlphaDecay": "alpha_decay",
    "Workers": "workers",
}


class ConfigError(ValueError):
    """Raised when a configuration document cannot be applied."""


def to_document(config: RenderConfig) -> dict:
    return {key: getattr(config, name) for key, name in DOCUMENT_KEYS.items()}


def from_document(document: dict, base: RenderConfig = RenderConfig()) -> RenderConfig:
    """Overlay the keys present in ``document`` onto ``base``.

    Unknown keys are ignored.
    """

    if not isinstance(document, dict):
        raise ConfigError(f"expected a JSON object, got {type(document).__name__}")
    types = {f.name: f.type for f in fields(RenderConfig)}
    changes = {}
    for key, name in DOCUMENT_KEYS.items():
        if key not in document:
            continue
        value = document[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{key} must be a number, got {value!r}")
        if types[name] in ("int", int):
            if isinstance(value, float) and not value.is_integer():
                raise ConfigError(f"{key} must be an integer, got {value!r}")
            value = int(value)
        else:
            value = float(value)
        changes[name] = value
    return replace(base, **changes)


def dump_config(config: RenderConfig, path: PathLike) -> int:
    """Write ``config`` to ``path`` and return the number of bytes written."""

    payload = json.dumps(to_document(config), indent=2).encode("utf-8")
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(payload)
    return len(payload)


def load_config(path: PathLike, base: RenderConfig = RenderConfig()) -> RenderConfig:
    text = Path(path).read_text(encoding="utf-8")
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    return from_document(document, base)
