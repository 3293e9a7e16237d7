"""
Codeloom Backend - Pages
=========================

What:  Page-level components and the HTML document wrapper used by
       routes/pages.py. Both render from codeloom/ui/templates.
"""

from typing import Any

from markupsafe import Markup

from codeloom.ui.components import Component, flatten_children, html_attributes
from codeloom.ui.templating import render_template

LANDING_HEADING = "Welcome to Codeloom"
LANDING_BODY = (
    "This is the MVP scaffold. Authentication, provider and biller workflows will be "
    "added in upcoming phases."
)


class LandingPage(Component):
    """The welcome section shown at the application root."""

    def render(self) -> Markup:
        return render_template("landing.html", heading=LANDING_HEADING, body=LANDING_BODY)


def render_document(body: Any, title: str = "Codeloom", lang: str = "en") -> Markup:
    """Wrap a rendered fragment in a minimal HTML5 document."""
    return render_template(
        "document.html",
        html_attributes=html_attributes({"lang": lang}),
        title=title,
        children=flatten_children(body),
    )
