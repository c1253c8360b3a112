"""Render an ``ExportDocument`` into the HTML fragment published on the website.

Sections are emitted as block-editor paragraphs so the output can be pasted
into a page as-is. Header and footer fragments are copied verbatim; every
catalog value is escaped.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from jinja2 import Environment, StrictUndefined, select_autoescape

from shelfsync.domain.export import LetterMarker

if TYPE_CHECKING:
    from pathlib import Path

    from jinja2 import Template

    from shelfsync.domain.export import ExportDocument

log = getLogger(__name__)

_TEMPLATE = """\
{%- macro link(entry) -%}
{%- if entry.url %}<a href="{{ entry.url }}">{{ entry.title }}</a>
{%- else %}{{ entry.title }}{% endif -%}
{{ entry.suffix }}
{%- endmacro -%}
{%- if header %}{{ header | safe }}
{% endif -%}
{%- for section in document.sections -%}
<!-- wp:paragraph -->
<p><strong>{{ section.category }}</strong><br>
{%- for item in section.items %}
{%- if item is letter_marker %}
<strong>{{ item.letter }}</strong><br>
{%- else %}
{{ link(item) }}<br>
{%- for child in item.expansions %}
&emsp;– {{ link(child) }}<br>
{%- endfor %}
{%- endif %}
{%- endfor %}
</p>
<!-- /wp:paragraph -->
{% endfor -%}
{%- if footer %}{{ footer | safe }}
{% endif -%}
"""


def _is_letter_marker(item: object) -> bool:
    return isinstance(item, LetterMarker)


def _build_environment() -> Environment:
    env = Environment(
        undefined=StrictUndefined,
        autoescape=select_autoescape(default_for_string=True),
        keep_trailing_newline=True,
    )
    env.tests["letter_marker"] = _is_letter_marker
    return env


_ENV = _build_environment()
_TEMPLATE_OBJ: Template = _ENV.from_string(_TEMPLATE)


def load_fragment(path: Path | None) -> str | None:
    """Return the content of a header/footer fragment, or ``None`` if unavailable."""

    if path is None:
        return None
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        log.info("Template fragment %s not found, leaving it out", path)
        return None
    except OSError as exc:
        log.warning("Could not read template fragment %s, leaving it out: %s", path, exc)
        return None


def render_document(
    document: ExportDocument,
    *,
    header: str | None = None,
    footer: str | None = None,
) -> str:
    return _TEMPLATE_OBJ.render(document=document, header=header, footer=footer)


def write_export(text: str, path: Path) -> bool:
    """Write the rendered export to ``path``; failures are logged, never raised."""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        log.warning("Could not write export to %s: %s", path, exc)
        return False
    log.info("Export written to %s", path)
    return True
