"""Built-in colour presets shipped with the rendering engine.

Keys are the public preset names; each entry defines only the colour fields
the palette sets. Insertion order is the order ``list-presets`` reports.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from ..schema import Preset


def _preset(name: str, **colors: str) -> tuple[str, Preset]:
    return name, Preset(name=name, **colors)


PRESETS: Mapping[str, Preset] = MappingProxyType(
    dict(
        [
            _preset("zinc-light", background="#FFFFFF", foreground="#27272A"),
            _preset("zinc-dark", background="#18181B", foreground="#FAFAFA"),
            _preset("tokyo-night", background="#1a1b26", foreground="#a9b1d6", line="#3d59a1", accent="#7aa2f7", muted="#565f89"),
            _preset("tokyo-night-storm", background="#24283b", foreground="#a9b1d6", line="#3d59a1", accent="#7aa2f7", muted="#565f89"),
            _preset("tokyo-night-light", background="#d5d6db", foreground="#343b58", line="#34548a", accent="#34548a", muted="#9699a3"),
            _preset("catppuccin-mocha", background="#1e1e2e", foreground="#cdd6f4", line="#585b70", accent="#cba6f7", muted="#6c7086"),
            _preset("catppuccin-latte", background="#eff1f5", foreground="#4c4f69", line="#9ca0b0", accent="#8839ef", muted="#9ca0b0"),
            _preset("nord", background="#2e3440", foreground="#d8dee9", line="#4c566a", accent="#88c0d0", muted="#616e88"),
            _preset("nord-light", background="#eceff4", foreground="#2e3440", line="#aab1c0", accent="#5e81ac", muted="#7b88a1"),
            _preset("dracula", background="#282a36", foreground="#f8f8f2", line="#6272a4", accent="#bd93f9", muted="#6272a4"),
            _preset("github-light", background="#ffffff", foreground="#1f2328", line="#d1d9e0", accent="#0969da", muted="#59636e"),
            _preset("github-dark", background="#0d1117", foreground="#e6edf3", line="#3d444d", accent="#4493f8", muted="#9198a1"),
            _preset("solarized-light", background="#fdf6e3", foreground="#657b83", line="#93a1a1", accent="#268bd2", muted="#93a1a1"),
            _preset("solarized-dark", background="#002b36", foreground="#839496", line="#586e75", accent="#268bd2", muted="#586e75"),
            _preset("one-dark", background="#282c34", foreground="#abb2bf", line="#4b5263", accent="#c678dd", muted="#5c6370"),
        ]
    )
)


def preset_names(presets: Mapping[str, Preset] = PRESETS) -> list[str]:
    return list(presets.keys())


__all__ = ["PRESETS", "preset_names"]
