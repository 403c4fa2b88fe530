import logging
import math
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional

import yaml

from gladest_segments.errors import ConfigurationError

logger = logging.getLogger(__name__)

FONT_SLOTS = {
    'body_font': 'body_font',
    'bodyFont': 'body_font',
    'math_font': 'math_font',
    'mathFont': 'math_font',
}


class RenderFormat(Enum):
    SVG = 'svg'
    PNG = 'png'

    @property
    def mime_type(self):
        return 'image/svg+xml' if self is RenderFormat.SVG else 'image/png'


@dataclass(frozen=True)
class FontSource:
    kind: str
    value: str

    @classmethod
    def system(cls, name):
        return cls('system', name)

    @classmethod
    def file(cls, path):
        return cls('file', os.path.expanduser(path))

    @property
    def is_system(self):
        return self.kind == 'system'

    @property
    def is_file(self):
        return self.kind == 'file'


@dataclass(frozen=True)
class FontConfig:
    body_font: Optional[FontSource] = None
    math_font: Optional[FontSource] = None

    @property
    def is_empty(self):
        return self.body_font is None and self.math_font is None


@dataclass(frozen=True)
class RenderOptions:
    format: RenderFormat = RenderFormat.SVG
    ppi: Optional[int] = None
    fonts: FontConfig = field(default_factory=FontConfig)

    @property
    def effective_ppi(self):
        """Resolution the engine should honour, None for vector output or the engine default"""
        if self.format is RenderFormat.SVG:
            return None
        return self.ppi


def normalize_format(value):
    if isinstance(value, RenderFormat):
        return value
    if isinstance(value, str):
        for fmt in RenderFormat:
            if value.strip().lower() == fmt.value:
                return fmt
    if value is not None:
        logger.debug("Unrecognized output format %r, using svg", value)
    return RenderFormat.SVG


def normalize_ppi(value):
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        logger.warning("Ignoring non-numeric ppi %r, using the engine default", value)
        return None
    if not math.isfinite(value):
        logger.warning("Ignoring non-finite ppi %r, using the engine default", value)
        return None
    ppi = int(round(value))
    if ppi <= 0:
        logger.debug("Ignoring non-positive ppi %r, using the engine default", value)
        return None
    return ppi


def normalize_font_source(slot, spec):
    label = slot.replace('_', ' ')
    if isinstance(spec, FontSource):
        return spec
    if isinstance(spec, str):
        if not spec.strip():
            raise ConfigurationError(f"Empty {label} name")
        return FontSource.system(spec.strip())
    if not isinstance(spec, Mapping):
        raise ConfigurationError(f"Invalid {label} specification: {spec!r}")

    system = spec.get('system')
    path = spec.get('file')
    font_type = spec.get('type')
    if font_type is not None:
        font_type = str(font_type).lower()
        if font_type == 'system':
            system = spec.get('value') if system is None else system
        elif font_type == 'file':
            path = spec.get('value') if path is None else path
        else:
            raise ConfigurationError(f"Invalid {label} type: {spec.get('type')}")

    if system is not None and path is not None:
        raise ConfigurationError(f"The {label} sets both a system font and a font file; use exactly one")
    if system is not None:
        if not str(system).strip():
            raise ConfigurationError(f"Empty {label} name")
        return FontSource.system(str(system).strip())
    if path is not None:
        if not str(path).strip():
            raise ConfigurationError(f"Empty {label} path")
        return FontSource.file(str(path).strip())
    raise ConfigurationError(f"The {label} needs either a system font or a font file")


def normalize_fonts(fonts):
    if fonts is None:
        return FontConfig()
    if isinstance(fonts, FontConfig):
        return fonts
    if not isinstance(fonts, Mapping):
        raise ConfigurationError(f"Font configuration must be a mapping, got {type(fonts).__name__}")

    slots = {}
    for key, spec in fonts.items():
        if key not in FONT_SLOTS:
            raise ConfigurationError(f"Unknown font slot: {key}")
        if spec is None:
            continue
        slot = FONT_SLOTS[key]
        source = normalize_font_source(slot, spec)
        if slot in slots and slots[slot] != source:
            raise ConfigurationError(f"The {slot.replace('_', ' ')} is configured twice")
        slots[slot] = source
    return FontConfig(**slots)


def normalize(config: Any = None) -> RenderOptions:
    """Turn user configuration into a frozen RenderOptions value.

    Only contradictory or malformed font settings raise; an unknown format
    falls back to svg and an unusable resolution to the engine default.
    """
    if isinstance(config, RenderOptions):
        return config
    if config is None:
        config = {}
    if not isinstance(config, Mapping):
        raise ConfigurationError(f"Render configuration must be a mapping, got {type(config).__name__}")

    ppi = config.get('ppi')
    if ppi is None:
        ppi = config.get('resolution')

    return RenderOptions(
        format=normalize_format(config.get('format')),
        ppi=normalize_ppi(ppi),
        fonts=normalize_fonts(config.get('fonts')),
    )


def load_config(path) -> dict:
    try:
        with open(os.path.expanduser(path), 'r', encoding='utf-8') as f:
            data = yaml.load(f.read(), Loader=yaml.FullLoader)
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")
    return data
