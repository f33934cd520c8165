from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import jinja2

from ..schema import PersistedOutput, Preset

_ENV = jinja2.Environment(
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=False,
)

# Markdown listing for list-presets. One section per preset; undefined colour
# fields never appear.
_PRESETS_TEMPLATE = _ENV.from_string(
    """
# Available Mermaid Themes

{% for preset in presets %}
## {{ preset.name }}
{% for key, value in preset.colors().items() %}
- **{{ key }}**: {{ value }}
{% endfor %}

{% endfor %}
""".lstrip()
)

_VECTOR_REPORT_TEMPLATE = _ENV.from_string(
    """
SVG rendered successfully.
File: {{ output.path }}
Theme: {{ preset }}
{% if overrides %}
Overrides: {% for key, value in overrides.items() %}{{ key }}={{ value }}{% if not loop.last %}, {% endif %}{% endfor %}

{% endif %}
Size: {{ output.size_bytes }} bytes
""".strip()
)


def render_presets_markdown(presets: Iterable[Preset]) -> str:
    return _PRESETS_TEMPLATE.render(presets=list(presets)).rstrip() + "\n"


def render_vector_report(output: PersistedOutput, summary: dict[str, Any]) -> str:
    """Text report for a persisted SVG: path, active preset, overrides, size."""
    return _VECTOR_REPORT_TEMPLATE.render(
        output=output,
        preset=summary.get("preset"),
        overrides=summary.get("overrides") or {},
    )


__all__ = ["render_presets_markdown", "render_vector_report"]
