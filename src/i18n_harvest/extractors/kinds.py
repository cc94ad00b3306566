"""Side tables mapping structural context to a candidate kind."""

from __future__ import annotations

import re

from .base import CandidateKind

HEADING_TAGS: frozenset[str] = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
LINK_TAGS: frozenset[str] = frozenset(
    {
        "a", "link", "nuxt-link", "nuxtlink", "router-link", "routerlink",
        "inertia-link", "inertialink", "gatsby-link",
    }
)
FIELD_TAGS: frozenset[str] = frozenset({"input", "textarea", "select"})

# Inline elements that pass their parent's kind through to their text
TRANSPARENT_TAGS: frozenset[str] = frozenset(
    {
        "span", "strong", "em", "b", "i", "u", "small", "mark", "abbr", "sup",
        "sub", "kbd", "bdi", "bdo", "s", "q", "cite", "font", "template",
    }
)

LIVE_REGION_ROLES: frozenset[str] = frozenset({"alert", "status", "log", "alertdialog"})

ATTRIBUTE_KINDS: dict[str, CandidateKind] = {
    "placeholder": CandidateKind.PLACEHOLDER,
    "aria-placeholder": CandidateKind.PLACEHOLDER,
    "title": CandidateKind.TITLE,
    "alt": CandidateKind.ALT,
    "aria-label": CandidateKind.ARIA_LABEL,
    "arialabel": CandidateKind.ARIA_LABEL,
    "aria-description": CandidateKind.ARIA_LABEL,
    "aria-valuetext": CandidateKind.ARIA_LABEL,
    "label": CandidateKind.LABEL,
}

TOAST_CALLEES: frozenset[str] = frozenset(
    {"notify", "notification", "alert", "showmessage", "snackbar", "toast"}
)
TOAST_RECEIVERS: frozenset[str] = frozenset(
    {"toast", "notify", "notification", "notifications", "snackbar", "message", "$q", "$toast", "$notify"}
)

_IDENTIFIER_RULES: tuple[tuple[re.Pattern[str], CandidateKind], ...] = (
    (re.compile(r"placeholder", re.IGNORECASE), CandidateKind.PLACEHOLDER),
    (re.compile(r"aria_?label", re.IGNORECASE), CandidateKind.ARIA_LABEL),
    (re.compile(r"tooltip", re.IGNORECASE), CandidateKind.TITLE),
    (re.compile(r"title|heading|header", re.IGNORECASE), CandidateKind.HEADING),
    (re.compile(r"label", re.IGNORECASE), CandidateKind.LABEL),
    (re.compile(r"button|btn|cta", re.IGNORECASE), CandidateKind.BUTTON),
    (re.compile(r"toast|notification|snackbar", re.IGNORECASE), CandidateKind.TOAST),
    (re.compile(r"^alt(_?text)?$", re.IGNORECASE), CandidateKind.ALT),
    (re.compile(r"link", re.IGNORECASE), CandidateKind.LINK),
)


def infer_kind_from_tag(tag: str | None) -> CandidateKind:
    """
    Map an element or component name to a kind.

    Framework component names are matched by shape, so ``q-btn``,
    ``el-button`` and ``SubmitButton`` are all buttons.
    """
    if not tag:
        return CandidateKind.TEXT

    lowered = tag.lower()
    if lowered in HEADING_TAGS:
        return CandidateKind.HEADING
    if lowered == "label":
        return CandidateKind.LABEL
    if lowered.endswith(("button", "btn")) or "-button" in lowered or "-btn" in lowered:
        return CandidateKind.BUTTON
    if lowered in LINK_TAGS:
        return CandidateKind.LINK
    if lowered in FIELD_TAGS:
        return CandidateKind.PLACEHOLDER
    if lowered == "title":
        return CandidateKind.TITLE
    if any(marker in lowered for marker in ("toast", "notification", "alert", "snackbar")):
        return CandidateKind.TOAST
    if "modal" in lowered or "dialog" in lowered:
        return CandidateKind.HEADING
    return CandidateKind.TEXT


def infer_kind_from_attribute(attribute: str) -> CandidateKind:
    """Map an attribute name to a kind; unknown names yield TEXT."""
    return ATTRIBUTE_KINDS.get(attribute.strip().lower(), CandidateKind.TEXT)


def infer_kind_from_identifier(name: str) -> CandidateKind:
    """Map a declared variable, property or keyword-argument name to a kind."""
    for pattern, kind in _IDENTIFIER_RULES:
        if pattern.search(name):
            return kind
    return CandidateKind.TEXT


def infer_kind_from_callee(callee: str) -> CandidateKind | None:
    """
    Map a called function to a kind.

    Returns:
        CandidateKind | None: TOAST for notification calls such as
        ``toast.success`` or ``notify``; None when the call says nothing
    """
    parts = callee.split(".")
    if parts[-1].lstrip("$").lower() in TOAST_CALLEES:
        return CandidateKind.TOAST
    if len(parts) > 1 and parts[-2].lower() in TOAST_RECEIVERS:
        return CandidateKind.TOAST
    return None
