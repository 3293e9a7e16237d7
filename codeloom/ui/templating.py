"""
Codeloom Backend - Template Environment
========================================

What:  The Jinja2 environment that renders every UI component and page.
How:   Templates live in codeloom/ui/templates and are loaded from the
       installed package. Autoescape is always on: plain strings passed to
       a template are escaped, while Markup and objects implementing
       __html__ (other components) are inserted as they are.
Who:   components.py and pages.py.
"""

from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined
from markupsafe import Markup

environment = Environment(
    loader=PackageLoader("codeloom.ui", "templates"),
    autoescape=True,
    # A missing context variable is a bug in the calling component
    undefined=StrictUndefined,
)


def render_template(name: str, **context: Any) -> Markup:
    """Render `name` with `context`; the result is safe to nest in other templates."""
    return Markup(environment.get_template(name).render(**context))
