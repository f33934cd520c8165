from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..exceptions import UnknownPresetError
from ..schema import Preset, ResolvedOptions
from ..shard import constants as C
from ..shard.presets import PRESETS


def resolve_options(
    preset_name: str | None,
    overrides: Mapping[str, Any] | None = None,
    presets: Mapping[str, Preset] = PRESETS,
) -> ResolvedOptions:
    """Merge a named preset with explicit field overrides.

    The preset (or an empty base when no name is given) supplies the starting
    values; every override present in ``overrides`` replaces the corresponding
    field, whether or not the preset defined it. ``None`` values in
    ``overrides`` count as absent.

    Raises:
        UnknownPresetError: ``preset_name`` is not in ``presets``. The error
            lists every valid name so callers can correct themselves.
    """
    base: dict[str, Any] = {}
    if preset_name is not None:
        preset = presets.get(preset_name)
        if preset is None:
            raise UnknownPresetError(preset_name, presets.keys())
        base = {field: getattr(preset, field) for field in C.PRESET_COLOR_FIELDS if getattr(preset, field) is not None}

    for field, value in (overrides or {}).items():
        if field not in C.ENGINE_OPTION_KEYS:
            raise ValueError(f"'{field}' is not a render option")
        if value is not None:
            base[field] = value

    return ResolvedOptions(preset_name=preset_name, **base)


def summarize_options(options: ResolvedOptions, overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Preset label and applied overrides, for reports."""
    return {
        "preset": options.preset_name or C.DEFAULT_PRESET_LABEL,
        "overrides": {k: v for k, v in overrides.items() if v is not None},
    }


__all__ = ["resolve_options", "summarize_options"]
