# UI package init
"""
Codeloom Backend - Presentational UI Components
================================================

What:  Stateless components that map arguments to HTML markup.
How:   Each component renders a Jinja2 template to a Markup string and implements
       the __html__ protocol, so components nest inside one another and
       plain text children are escaped exactly once.

Inventory:
    - utils.cn:            class-name merge helper with Tailwind conflict resolution
    - theme:               color token table shared with the Tailwind build
    - components.Label:    form label
    - components.Tabs:     tab strip that forwards clicks to a caller callback
    - pages.LandingPage:   welcome section served at GET /
"""

from codeloom.ui.components import Label, TabDescriptor, Tabs
from codeloom.ui.pages import LandingPage, render_document
from codeloom.ui.utils import cn

__all__ = ["Label", "TabDescriptor", "Tabs", "LandingPage", "render_document", "cn"]
