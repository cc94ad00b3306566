"""
Markup and template-fragment detectors plus the attribute policy.

The attribute sets decide which attribute values the extractors hand to
the classifier at all; the detectors reject strings that are fragments of
markup or template syntax rather than prose.
"""

from __future__ import annotations

import re

NON_TRANSLATABLE_ATTRIBUTES: frozenset[str] = frozenset(
    {
        # Core
        "id", "class", "style", "name", "type", "value", "href", "src", "action",
        "method", "target", "rel", "for", "form", "formaction", "formmethod",
        "formtarget", "formenctype", "formnovalidate",
        # Event handlers
        "onclick", "onchange", "onsubmit", "onload", "onerror", "onfocus",
        "onblur", "onkeydown", "onkeyup", "onkeypress", "onmousedown",
        "onmouseup", "onmouseover", "onmouseout", "onmousemove", "ondrag",
        "ondrop", "onscroll", "onresize",
        # Directives
        "v-if", "v-else", "v-else-if", "v-show", "v-for", "v-on", "v-bind",
        "v-model", "v-slot", "v-pre", "v-cloak", "v-once", "v-memo", "v-html",
        "v-text",
        # Framework internals
        "key", "ref", "dangerouslysetinnerhtml", "ngif", "ngfor", "ngswitch",
        "ngmodel", "ngclass", "ngstyle",
        # Technical
        "autocomplete", "autofocus", "disabled", "readonly", "required",
        "checked", "selected", "multiple", "hidden", "draggable",
        "contenteditable", "spellcheck", "tabindex", "accesskey", "dir", "lang",
        "translate",
        # Media
        "width", "height", "autoplay", "controls", "loop", "muted", "preload",
        "poster", "crossorigin", "loading", "decoding", "fetchpriority",
        # Forms
        "accept", "accept-charset", "enctype", "max", "maxlength", "min",
        "minlength", "pattern", "size", "step", "cols", "rows", "wrap",
        # ARIA state and relationships
        "role", "aria-hidden", "aria-expanded", "aria-selected", "aria-checked",
        "aria-disabled", "aria-readonly", "aria-required", "aria-invalid",
        "aria-busy", "aria-live", "aria-atomic", "aria-relevant",
        "aria-haspopup", "aria-controls", "aria-describedby", "aria-labelledby",
        "aria-owns", "aria-flowto", "aria-posinset", "aria-setsize",
        "aria-level", "aria-colcount", "aria-colindex", "aria-colspan",
        "aria-rowcount", "aria-rowindex", "aria-rowspan",
        "aria-activedescendant", "aria-errormessage", "aria-details",
        "aria-keyshortcuts", "aria-roledescription", "aria-orientation",
        "aria-sort", "aria-valuemax", "aria-valuemin", "aria-valuenow",
        "aria-autocomplete", "aria-multiline", "aria-multiselectable",
        "aria-pressed", "aria-current", "aria-dropeffect", "aria-grabbed",
        "aria-modal",
    }
)

TRANSLATABLE_ATTRIBUTES: frozenset[str] = frozenset(
    {
        "title", "alt", "placeholder", "label", "aria-label", "aria-description",
        "aria-placeholder", "aria-valuetext",
    }
)

_DIRECTIVE_ATTRIBUTE = re.compile(r"^(v-[a-z]+|@[a-z]+|:[a-z]+|#[a-z]+|v-bind:)")
_HANDLER_ATTRIBUTE = re.compile(r"^on[A-Z]")

_ATTRIBUTE_FRAGMENT = re.compile(r"""^[a-zA-Z@:#][a-zA-Z0-9_:-]*\s*=\s*["'][^"']*["']""")
_TAG_TAIL_FRAGMENT = re.compile(r"""^[^"']*["']\s*/?>""")
_QUOTE_TAG_END = re.compile(r"""["']\s*/?>$""")
_WHITESPACE = re.compile(r"\s")

_MUSTACHE_ONLY = re.compile(r"^\{\{[^}]+\}\}$")
_MUSTACHE = re.compile(r"\{\{[^}]+\}\}")
_ASCII_LETTER = re.compile(r"[a-zA-Z]")

_BINDING_SYNTAX: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?:v-bind)?:[a-zA-Z][a-zA-Z0-9_:-]*\s*="),
    re.compile(r"(?:v-on)?@[a-zA-Z][a-zA-Z0-9_:-]*\s*="),
    re.compile(r"v-model(?::[a-zA-Z]+)?\s*="),
    re.compile(r"v-(?:if|else-if|show|for|slot|html|text)\s*="),
    # Angular and Alpine conventions
    re.compile(r"\[\(?[a-zA-Z][a-zA-Z0-9.]*\)?\]\s*="),
    re.compile(r"\*ng[A-Z][a-zA-Z]*\s*="),
    re.compile(r"x-(?:data|show|if|for|bind|on|model|text|html)(?::[a-z-]+)?\s*="),
)

_TAG_OPEN = re.compile(r"^<[a-zA-Z][^>]*>")
_TAG_CLOSE = re.compile(r"</[a-zA-Z][^>]*>$")
_ENTITY_REFERENCE = re.compile(r"&(?:[a-zA-Z][a-zA-Z0-9]{1,31}|#\d{1,7}|#x[0-9a-fA-F]{1,6});")


def is_non_translatable_attribute(attribute_name: str) -> bool:
    """Check whether an attribute's value is never user-facing text."""
    name = attribute_name.strip()
    lowered = name.lower()
    if not lowered:
        return True
    if lowered in NON_TRANSLATABLE_ATTRIBUTES or lowered.startswith("data-"):
        return True
    if _DIRECTIVE_ATTRIBUTE.match(lowered):
        return True
    return bool(_HANDLER_ATTRIBUTE.match(name) or name.startswith(("@", ":")))


def is_translatable_attribute(attribute_name: str) -> bool:
    """Check whether an attribute carries user-facing text."""
    return attribute_name.strip().lower() in TRANSLATABLE_ATTRIBUTES


def is_html_attribute_fragment(text: str) -> bool:
    """Check for ``name="value"`` fragments and quoted tag tails like ``foo()">``."""
    if not text:
        return False
    if _ATTRIBUTE_FRAGMENT.match(text) or _TAG_TAIL_FRAGMENT.match(text):
        return True
    if _QUOTE_TAG_END.search(text):
        return not _WHITESPACE.search(_QUOTE_TAG_END.sub("", text))
    return False


def is_template_expression(text: str) -> bool:
    """Check for text made only of ``{{ ... }}`` expressions."""
    if not text:
        return False
    if _MUSTACHE_ONLY.match(text):
        return True
    remainder = _MUSTACHE.sub("", text).strip()
    return not remainder or not _ASCII_LETTER.search(remainder)


def contains_binding_syntax(text: str) -> bool:
    """Check for directive or binding syntax of a templating convention."""
    if not text:
        return False
    return any(pattern.search(text) for pattern in _BINDING_SYNTAX)


def contains_entity_reference(text: str) -> bool:
    """Check for an undecoded character entity such as ``&nbsp;``."""
    return bool(_ENTITY_REFERENCE.search(text))


def is_html_content(text: str) -> bool:
    """Entry point for markup detection."""
    if not text:
        return False
    if is_html_attribute_fragment(text) or is_template_expression(text):
        return True
    if contains_entity_reference(text):
        return True
    return bool(_TAG_OPEN.match(text) or _TAG_CLOSE.search(text))
