"""
Codeloom Backend - Label and Tabs Components
=============================================

What:  Pure rendering components. Each holds only the arguments it was
       built with and turns them into markup on render().
How:   Class names are computed in Python with cn(); the markup comes from
       the Jinja2 templates in codeloom/ui/templates, which escape text
       children and attribute values. Components implement __html__ so they
       can be passed as children of each other.

Tabs and selection:
    Tabs keeps no selection state. The caller owns `active_tab` and the
    `on_change` callback; `click(tab_id)` forwards a selection to the
    callback exactly once and leaves `active_tab` as it was. The caller
    re-renders with a new `active_tab` if it wants the highlight to move.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from markupsafe import Markup

from codeloom.ui.templating import render_template
from codeloom.ui.utils import cn

LABEL_CLASSES = "text-sm font-medium text-slate-700"
TABS_CLASSES = "flex gap-2 rounded-lg bg-slate-100 p-1 text-sm font-medium"
TAB_BUTTON_CLASSES = "px-3 py-2 rounded-md transition-colors"
TAB_ACTIVE_CLASSES = "bg-white shadow-sm text-slate-900"
TAB_INACTIVE_CLASSES = "text-slate-600 hover:text-slate-900"

# Python keyword-safe names for HTML attributes. `class_` is not here:
# components merge it into their classes with cn()
_ATTRIBUTE_ALIASES = {"html_for": "for"}


def html_attributes(attrs: Mapping[str, Any]) -> Dict[str, str]:
    """
    Normalize keyword arguments into HTML attributes for the xmlattr filter.

    html_for → for, other underscores → hyphens (data_tab_id → data-tab-id).
    True renders as a boolean attribute (disabled="disabled"); None and
    False are omitted.
    """
    normalized: Dict[str, str] = {}
    for name, value in attrs.items():
        if value is None or value is False:
            continue
        html_name = _ATTRIBUTE_ALIASES.get(name, name.replace("_", "-"))
        normalized[html_name] = html_name if value is True else value
    return normalized


def flatten_children(children: Any) -> List[Any]:
    """Flatten children into the list the templates iterate over."""
    if children is None:
        return []
    if isinstance(children, (list, tuple)):
        flat: List[Any] = []
        for child in children:
            flat.extend(flatten_children(child))
        return flat
    return [children]


def _split_classes(attrs: Mapping[str, Any]):
    """Separate class/class_ from the other attributes so cn() can merge them."""
    rest = {name: value for name, value in attrs.items() if name not in ("class", "class_")}
    return [attrs.get("class_"), attrs.get("class")], rest


class Component:
    """Base for renderable components."""

    def render(self) -> Markup:
        raise NotImplementedError

    def __html__(self) -> str:
        return str(self.render())

    def __str__(self) -> str:
        return self.__html__()


class Label(Component):
    """A form label: `<label class="text-sm font-medium text-slate-700">`."""

    def __init__(self, children: Any = None, class_name: Optional[str] = None, **attrs: Any):
        self.children = children
        self.class_name = class_name
        self.attrs = attrs

    def render(self) -> Markup:
        extra_classes, rest = _split_classes(self.attrs)
        attributes = html_attributes(
            {"class": cn(LABEL_CLASSES, self.class_name, extra_classes), **rest}
        )
        return render_template(
            "label.html", attributes=attributes, children=flatten_children(self.children)
        )


@dataclass(frozen=True)
class TabDescriptor:
    """A caller-owned tab entry. `id` is expected to be unique within a Tabs."""
    id: str
    label: str


TabInput = Union[TabDescriptor, Mapping[str, str]]


def _as_descriptor(tab: TabInput) -> TabDescriptor:
    if isinstance(tab, TabDescriptor):
        return tab
    return TabDescriptor(id=str(tab["id"]), label=str(tab["label"]))


@dataclass
class Tabs(Component):
    """
    A horizontal tab strip.

    Attributes:
        tabs:        tab descriptors (or {"id", "label"} dicts), rendered in order
        active_tab:  id of the highlighted tab
        on_change:   called with the clicked tab id
        class_name:  extra classes merged into the container
    """

    tabs: Sequence[TabInput]
    active_tab: str
    on_change: Callable[[str], Any]
    class_name: Optional[str] = None
    _descriptors: List[TabDescriptor] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._descriptors = [_as_descriptor(tab) for tab in self.tabs]

    @property
    def descriptors(self) -> List[TabDescriptor]:
        return list(self._descriptors)

    def click(self, tab_id: str) -> Any:
        """
        Forward a click on `tab_id` to the callback.

        Raises:
            ValueError: `tab_id` is not one of the rendered tabs.
        """
        if not any(tab.id == tab_id for tab in self._descriptors):
            raise ValueError(f"Unknown tab id '{tab_id}'")
        return self.on_change(tab_id)

    def _button(self, tab: TabDescriptor) -> Dict[str, Any]:
        active = tab.id == self.active_tab
        return {
            "label": tab.label,
            "attributes": html_attributes(
                {
                    "type": "button",
                    "class": cn(
                        TAB_BUTTON_CLASSES,
                        TAB_ACTIVE_CLASSES if active else TAB_INACTIVE_CLASSES,
                    ),
                    "data_tab_id": tab.id,
                    "aria_selected": "true" if active else "false",
                    "role": "tab",
                }
            ),
        }

    def render(self) -> Markup:
        return render_template(
            "tabs.html",
            attributes=html_attributes(
                {"class": cn(TABS_CLASSES, self.class_name), "role": "tablist"}
            ),
            buttons=[self._button(tab) for tab in self._descriptors],
        )
