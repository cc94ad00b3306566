"""
Styling-content detectors.

Recognizes CSS declarations, utility-class lists (Tailwind and friends),
selectors and spreadsheet cell references.
"""

from __future__ import annotations

import re

CSS_PROPERTIES: frozenset[str] = frozenset(
    {
        # Layout
        "display", "position", "top", "right", "bottom", "left", "float", "clear",
        "z-index", "overflow", "overflow-x", "overflow-y", "visibility", "clip",
        # Flexbox
        "flex", "flex-direction", "flex-wrap", "flex-flow", "justify-content",
        "align-items", "align-content", "align-self", "flex-grow", "flex-shrink",
        "flex-basis", "order", "gap", "row-gap", "column-gap",
        # Grid
        "grid", "grid-template", "grid-template-columns", "grid-template-rows",
        "grid-template-areas", "grid-column", "grid-row", "grid-area", "grid-gap",
        "grid-auto-columns", "grid-auto-rows", "grid-auto-flow", "place-items",
        "place-content", "place-self",
        # Box model
        "width", "height", "min-width", "min-height", "max-width", "max-height",
        "margin", "margin-top", "margin-right", "margin-bottom", "margin-left",
        "padding", "padding-top", "padding-right", "padding-bottom", "padding-left",
        "border", "border-width", "border-style", "border-color", "border-radius",
        "border-top", "border-right", "border-bottom", "border-left",
        "box-sizing", "box-shadow", "outline", "outline-width", "outline-style",
        "outline-color", "outline-offset",
        # Typography
        "font", "font-family", "font-size", "font-weight", "font-style",
        "font-variant", "line-height", "letter-spacing", "word-spacing",
        "text-align", "text-decoration", "text-transform", "text-indent",
        "text-shadow", "white-space", "word-wrap", "word-break", "text-overflow",
        "vertical-align", "writing-mode",
        # Colors and backgrounds
        "color", "background", "background-color", "background-image",
        "background-repeat", "background-position", "background-size",
        "background-attachment", "background-clip", "background-origin",
        "opacity", "filter", "backdrop-filter",
        # Transforms and animations
        "transform", "transform-origin", "transition", "transition-property",
        "transition-duration", "transition-timing-function", "transition-delay",
        "animation", "animation-name", "animation-duration",
        "animation-timing-function", "animation-delay",
        "animation-iteration-count", "animation-direction", "animation-fill-mode",
        "animation-play-state",
        # Other
        "cursor", "pointer-events", "user-select", "resize", "content", "quotes",
        "list-style", "list-style-type", "list-style-position",
        "list-style-image", "table-layout", "border-collapse", "border-spacing",
        "caption-side", "empty-cells", "object-fit", "object-position",
        "aspect-ratio", "scroll-behavior", "scroll-snap-type", "scroll-snap-align",
    }
)

CSS_VALUE_KEYWORDS: frozenset[str] = frozenset(
    {
        "none", "block", "inline", "inline-block", "flex", "inline-flex", "grid",
        "inline-grid", "table", "table-row", "table-cell", "contents", "flow-root",
        "static", "relative", "absolute", "fixed", "sticky",
        "row", "column", "row-reverse", "column-reverse", "wrap", "nowrap",
        "wrap-reverse", "start", "end", "center", "space-between", "space-around",
        "space-evenly", "stretch", "baseline", "auto", "initial", "inherit", "unset",
        "left", "right", "justify", "uppercase", "lowercase", "capitalize",
        "underline", "overline", "line-through", "blink",
        "visible", "hidden", "scroll", "clip",
        "normal", "bold", "bolder", "lighter", "italic", "oblique",
        "serif", "sans-serif", "monospace", "cursive", "fantasy", "system-ui",
        "solid", "dashed", "dotted", "double", "groove", "ridge", "inset", "outset",
        "pointer", "default", "text", "move", "not-allowed", "grab", "grabbing",
        "transparent", "currentcolor", "cover", "contain", "fill", "scale-down",
    }
)

_UNIT_VALUE = re.compile(
    r"^-?\d+(\.\d+)?(px|em|rem|%|vh|vw|vmin|vmax|ch|ex|cm|mm|in|pt|pc|fr|deg|rad|turn|s|ms)$",
    re.IGNORECASE,
)
_COLOR_VALUE = re.compile(
    r"^(#[0-9a-f]{3,8}|rgba?\s*\([^)]+\)|hsla?\s*\([^)]+\)|transparent|currentColor)$",
    re.IGNORECASE,
)
_FUNCTION_VALUE = re.compile(
    r"^(url|linear-gradient|radial-gradient|conic-gradient|repeating-linear-gradient|"
    r"repeating-radial-gradient|calc|var|min|max|clamp|rgb|rgba|hsl|hsla|translate|"
    r"translateX|translateY|translateZ|translate3d|rotate|rotateX|rotateY|rotateZ|"
    r"rotate3d|scale|scaleX|scaleY|scaleZ|scale3d|skew|skewX|skewY|matrix|matrix3d|"
    r"perspective|cubic-bezier|steps|attr|counter|counters|env|minmax|repeat|"
    r"fit-content)\s*\(",
    re.IGNORECASE,
)
_DECLARATION = re.compile(r"^([a-z-]+)\s*:\s*(.+?);?$", re.IGNORECASE)
_PLACEHOLDER = re.compile(r"\{[a-zA-Z_][a-zA-Z0-9_]*\}")
_UNIT_SUFFIX = re.compile(r"(?:px|em|rem|%|vh|vw|deg|s|ms);?$")

_UTILITY_CLASS_SHAPES: tuple[re.Pattern[str], ...] = (
    re.compile(r"^!?[a-z]+-[a-z0-9-]+$", re.IGNORECASE),  # text-gray-500, !mt-4
    re.compile(r"^[a-z]+:[a-z0-9-]+$", re.IGNORECASE),  # dark:text-white
    re.compile(r"^-?[a-z]+-\[.+\]$", re.IGNORECASE),  # w-[100px]
)

_SELECTOR_START = re.compile(r"^[.#\[*]")
_COMBINATOR = re.compile(r"^[a-z]+\s*[>+~]")
_ATTRIBUTE_SELECTOR = re.compile(r"\[[a-z-]+(?:=|~=|\|=|\^=|\$=|\*=)?")
_RULE_BODY = re.compile(r"\{[^}]*:[^;]+;[^}]*\}")
_INLINE_STYLE = re.compile(r"^([a-z-]+\s*:\s*[^;]+;\s*)+$", re.IGNORECASE)
_PLACEHOLDER_DECLARATION = re.compile(
    r"^[a-z-]+\s*:\s*\{[a-zA-Z_][a-zA-Z0-9_]*\}[a-z%]*;?$", re.IGNORECASE
)

_R1C1_REFERENCE = re.compile(r"^R\{?[a-zA-Z0-9_]+\}?C\{?[a-zA-Z0-9_]+\}?$", re.IGNORECASE)
_A1_REFERENCE = re.compile(r"^[A-Z]+\d+(?::[A-Z]+\d+)?$", re.IGNORECASE)


def is_css_property_declaration(text: str) -> bool:
    """Check for ``property: value`` declarations such as ``width: 100px;``."""
    match = _DECLARATION.match(text)
    if not match:
        return False

    prop = match.group(1).lower()
    value = match.group(2).strip()
    if prop in CSS_PROPERTIES:
        return True
    if (
        _UNIT_VALUE.match(value)
        or _COLOR_VALUE.match(value)
        or value.lower() in CSS_VALUE_KEYWORDS
        or _FUNCTION_VALUE.match(value)
    ):
        return True
    # Placeholder-driven values like "{rowHeight}px"
    return bool(_PLACEHOLDER.search(value) and _UNIT_SUFFIX.search(value))


def is_css_class_list(text: str) -> bool:
    """
    Check for whitespace-separated utility classes.

    At least two tokens, covering at least half the list, must match a
    utility-class shape.
    """
    parts = text.split()
    if not parts:
        return False
    class_like = sum(
        1 for part in parts if any(shape.match(part) for shape in _UTILITY_CLASS_SHAPES)
    )
    return class_like >= len(parts) * 0.5 and class_like >= 2


def is_css_selector(text: str) -> bool:
    """Check for selectors such as ``.card``, ``#id`` or ``div > span``."""
    if not text:
        return False
    return bool(
        _SELECTOR_START.match(text)
        or _COMBINATOR.match(text)
        or _ATTRIBUTE_SELECTOR.search(text)
    )


def is_css_content(text: str) -> bool:
    """Entry point for styling detection."""
    if not text:
        return False
    return (
        is_css_property_declaration(text)
        or is_css_class_list(text)
        or is_css_selector(text)
        or bool(_RULE_BODY.search(text))
        or bool(_INLINE_STYLE.match(text))
        or bool(_PLACEHOLDER_DECLARATION.match(text))
    )


def is_spreadsheet_reference(text: str) -> bool:
    """Check for cell references such as ``R{row}C{col}``, ``R1C1`` or ``A1:B10``."""
    if not text:
        return False
    return bool(_R1C1_REFERENCE.match(text) or _A1_REFERENCE.match(text))
