"""
Codeloom Backend - Class Name Helper
=====================================

What:  `cn()` joins CSS class inputs and resolves Tailwind utility conflicts.
Who:   Every UI component passes its base classes and the caller's
       `class_name` through `cn()`.

Behavior:
    cn("px-3 py-2", None, False, {"shadow-sm": active}, ["text-sm"], "px-4")
        → "py-2 text-sm px-4"            (when active is False)

    - None, False and empty strings are dropped.
    - Mappings contribute the keys whose values are truthy.
    - Lists and tuples are flattened recursively.
    - When two utilities belong to the same group (for the same variant
      prefix, e.g. "hover:"), the later one wins and the earlier is removed.
      Shorthands remove their longhands: a later "p-2" removes an earlier
      "px-3", a later "px-4" removes an earlier "pl-1".
    - Exact duplicates collapse to their last occurrence.
    - Classes outside the known groups are kept untouched.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

_FONT_SIZES = {
    "xs", "sm", "base", "lg", "xl", "2xl", "3xl", "4xl", "5xl", "6xl", "7xl", "8xl", "9xl",
}
_TEXT_ALIGN = {"left", "center", "right", "justify", "start", "end"}
_FONT_WEIGHTS = {
    "thin", "extralight", "light", "normal", "medium", "semibold", "bold", "extrabold", "black",
}
_FONT_FAMILIES = {"sans", "serif", "mono"}
_DISPLAY = {
    "block", "inline-block", "inline", "flex", "inline-flex", "grid", "inline-grid",
    "table", "contents", "hidden",
}
_POSITION = {"static", "fixed", "absolute", "relative", "sticky"}

# shorthand group -> longhand groups it replaces
_OVERRIDES: Dict[str, Tuple[str, ...]] = {
    "p": ("px", "py", "pt", "pr", "pb", "pl"),
    "px": ("pr", "pl"),
    "py": ("pt", "pb"),
    "m": ("mx", "my", "mt", "mr", "mb", "ml"),
    "mx": ("mr", "ml"),
    "my": ("mt", "mb"),
    "gap": ("gap-x", "gap-y"),
    "rounded": ("rounded-t", "rounded-r", "rounded-b", "rounded-l"),
}

_SPACING = re.compile(r"^(p|px|py|pt|pr|pb|pl|m|mx|my|mt|mr|mb|ml)-")
_SIMPLE_PREFIXES = (
    ("gap-x-", "gap-x"),
    ("gap-y-", "gap-y"),
    ("gap-", "gap"),
    ("w-", "w"),
    ("h-", "h"),
    ("min-w-", "min-w"),
    ("min-h-", "min-h"),
    ("max-w-", "max-w"),
    ("max-h-", "max-h"),
    ("bg-", "bg"),
    ("opacity-", "opacity"),
    ("leading-", "leading"),
    ("tracking-", "tracking"),
    ("z-", "z"),
    ("items-", "items"),
    ("justify-", "justify"),
)


def _group(utility: str) -> Optional[str]:
    """Returns the conflict group of a utility without variants, or None."""
    base = utility.lstrip("!").lstrip("-")

    if base in _DISPLAY:
        return "display"
    if base in _POSITION:
        return "position"
    if base == "shadow" or base.startswith("shadow-"):
        return "shadow"
    if base == "transition" or base.startswith("transition-"):
        return "transition"
    if base == "rounded" or re.match(r"^rounded-(none|sm|md|lg|xl|2xl|3xl|full)$", base):
        return "rounded"
    match = re.match(r"^rounded-([trbl])(-|$)", base)
    if match:
        return f"rounded-{match.group(1)}"
    if base == "border" or re.match(r"^border-\d+$", base):
        return "border-width"
    if base.startswith("border-"):
        return "border-color"

    if base.startswith("text-"):
        value = base[len("text-"):]
        if value in _FONT_SIZES:
            return "font-size"
        if value in _TEXT_ALIGN:
            return "text-align"
        return "text-color"
    if base.startswith("font-"):
        value = base[len("font-"):]
        if value in _FONT_WEIGHTS:
            return "font-weight"
        if value in _FONT_FAMILIES:
            return "font-family"
        return None

    match = _SPACING.match(base)
    if match:
        return match.group(1)
    for prefix, group in _SIMPLE_PREFIXES:
        if base.startswith(prefix):
            return group
    return None


def _split_variants(token: str) -> Tuple[str, str]:
    """'md:hover:px-2' -> ('md:hover:', 'px-2')"""
    head, sep, tail = token.rpartition(":")
    if not sep:
        return "", token
    return head + sep, tail


def _flatten(inputs: Iterable[Any]) -> List[str]:
    tokens: List[str] = []
    for item in inputs:
        if item is True or not item:
            continue
        if isinstance(item, str):
            tokens.extend(item.split())
        elif isinstance(item, dict):
            tokens.extend(
                part for key, enabled in item.items() if enabled for part in str(key).split()
            )
        elif isinstance(item, (list, tuple, set, frozenset)):
            tokens.extend(_flatten(item))
        else:
            tokens.extend(str(item).split())
    return tokens


def cn(*inputs: Any) -> str:
    """Merge class inputs into one class string; later Tailwind utilities win."""
    tokens = _flatten(inputs)

    kept: List[str] = []
    seen_tokens: Set[str] = set()
    seen_groups: Set[str] = set()

    # Walk right to left so the last utility in a group is the one kept
    for token in reversed(tokens):
        if token in seen_tokens:
            continue
        variants, utility = _split_variants(token)
        group = _group(utility)
        if group is not None:
            key = variants + group
            if key in seen_groups:
                continue
            seen_groups.add(key)
            for longhand in _OVERRIDES.get(group, ()):
                seen_groups.add(variants + longhand)
        seen_tokens.add(token)
        kept.append(token)

    return " ".join(reversed(kept))
