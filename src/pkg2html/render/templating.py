from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateError

from pkg2html.errors import OptionsError

_PAGES = {
    "overview.html": """{{ header|safe }}
<h1 class="tbdesc">{{ name }}</h1>

<div class="package_description">
  {{ description|safe }}
</div>

{% for category in categories -%}
<h2 class="category" id="{{ category.anchor }}">{{ category.label }}</h2>

{% for fn in category.functions -%}
{% if fn.implemented -%}
<div class="func"><a href="{{ fn.link }}">{{ fn.name }}</a></div>
<div class="ftext">&mdash; {{ fn.first_sentence }}</div>
{% else -%}
<div class="func">{{ fn.name }}</div>
<div class="ftext">No help text.</div>
{% endif %}
{% endfor -%}
{% endfor %}
{{ footer|safe }}
""",
    "textfile.html": """{{ header|safe }}
<h2 class="tbdesc">{{ heading }}</h2>

<p><a href="index.html">Return to the '{{ name }}' package</a></p>

<pre>{{ content }}</pre>

{{ footer|safe }}
""",
    "function.html": """{{ header|safe }}
<div class="function_help">
<h2 class="fname">{{ name }}</h2>
<pre>{{ help }}</pre>
<p><a href="{{ pkgroot }}index.html">Return to the package</a></p>
</div>
{{ footer|safe }}
""",
    "index.html": """{{ header|safe }}
<h2 class="tbdesc">{{ name }}</h2>

<table>
<tr><td rowspan="2" class="box_table">
<div class="package_box">
  <div class="package_box_header"></div>
  <div class="package_box_contents">
    <table>
      <tr><td class="package_table">Package Version:</td><td>{{ version }}</td></tr>
      <tr><td class="package_table">Last Release Date:</td><td>{{ date }}</td></tr>
      <tr><td class="package_table">Package Author:</td><td>{{ author }}</td></tr>
      <tr><td class="package_table">Package Maintainer:</td><td>{{ maintainer }}</td></tr>
      <tr><td class="package_table">License:</td><td><a href="COPYING.html">{{ license or "Read license" }}</a></td></tr>
    </table>
  </div>
</div>
</td>

<td>
{% if download_link -%}
<div class="download_package">
  <table><tr><td>
    <a href="{{ download_link }}" class="download_link">
      <img title="{{ attrib.download }}" src="../download.png" alt="Package download icon"/>
    </a>
  </td><td>
    <a href="{{ download_link }}" class="download_link">Download Package</a>
  </td></tr>
{% if repository_link %}
    <tr><td>
      <a href="{{ repository_link }}" class="repository_link">
        <img title="{{ attrib.repository }}" src="../repository.png" alt="Repository icon"/></a>
    </td><td><a href="{{ repository_link }}" class="repository_link">Repository</a></td></tr>
{% endif %}
{% if older_versions_download %}
    <tr><td /><td><a href="{{ older_versions_download }}" class="older_versions_download">Older versions</a></td></tr>
{% endif %}
  </table>
</div>
{% endif -%}
</td></tr>
<tr><td>
<div class="package_function_reference">
  <table><tr><td>
    <a href="{{ overview_file }}" class="function_reference_link">
      <img title="{{ attrib.doc }}" src="../doc.png" alt="Function reference icon"/>
    </a>
  </td><td>
    <a href="{{ overview_file }}" class="function_reference_link">Function Reference</a>
  </td></tr>
{% if manual_link %}
  <tr><td>
    <a href="{{ manual_link }}" class="package_doc">
      <img title="{{ attrib.manual }}" src="../manual.png" alt="Package doc icon"/>
    </a>
  </td><td>
    <a href="{{ manual_link }}" class="package_doc">Package Documentation</a>
  </td></tr>
{% endif %}
{% if news_link %}
  <tr><td>
    <a href="{{ news_link }}" class="news_file">
      <img title="{{ attrib.news }}" src="../news.png" alt="Package news icon"/>
    </a>
  </td><td>
    <a href="{{ news_link }}" class="news_file">NEWS</a>
  </td></tr>
{% endif %}
{% for url in homepages %}
  <tr><td>
    <a href="{{ url }}" class="homepage_link">
      <img src="../homepage.png" alt="Homepage icon"/>
    </a>
  </td><td>
    <a href="{{ url }}" class="homepage_link">Homepage</a>
  </td></tr>
{% endfor %}
  </table>
</div>
</td></tr>
</table>

<h3>Description</h3>
  <div id="description_box">
{{ description|safe }}
  </div>

<h3>Details</h3>
  <table id="extra_package_table">
{% if depends %}
    <tr><td>Dependencies: </td><td>
{% for dep in depends %}<a href="{{ dep.url or '../' ~ dep.package ~ '/index.html' }}">{{ dep.package }}</a> {{ dep.constraint }}
{% endfor %}</td></tr>
{% endif %}
{% if system_requirements %}
    <tr><td>Runtime system dependencies:</td><td>{{ system_requirements }}</td></tr>
{% endif %}
{% if build_requires %}
    <tr><td>Build dependencies:</td><td>{{ build_requires }}</td></tr>
{% endif %}
  </table>

{{ footer|safe }}
""",
}


@dataclass(frozen=True)
class Templates:
    env: Environment

    def render(self, template: str, context: Mapping[str, Any]) -> str:
        tpl = self.env.get_template(template)
        return str(tpl.render(**context))


def create_environment() -> Templates:
    env = Environment(
        loader=DictLoader(_PAGES),
        undefined=StrictUndefined,
        autoescape=True,
        keep_trailing_newline=True,
    )
    return Templates(env=env)


_STRING_ENV = Environment(undefined=StrictUndefined, autoescape=False)


def render_template_string(template: str, params: Mapping[str, Any]) -> str:
    """Substitute ``params`` into a header/footer/title template.

    Raises:
        OptionsError: if the template is malformed or uses an unknown parameter
    """
    try:
        return _STRING_ENV.from_string(template).render(**params)
    except TemplateError as exc:
        raise OptionsError(template[:40], f"cannot render template ({exc})") from exc


__all__ = ["Templates", "create_environment", "render_template_string"]
