"""
Markup template extractors (HTML, Handlebars, Vue single-file components, Blade).

The template scanner produces structural events; this module turns text
runs and attribute values into candidates. String literals inside
embedded expressions are classified on their own first, so a ternary
carrying two phrases yields two candidates, and the remaining literal
text is classified with expressions rendered as ``{name}`` placeholders.
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass
from typing import ClassVar

from typing_extensions import override

from ..classifier import ContentClassifier
from ..classifier.markup import is_non_translatable_attribute, is_translatable_attribute
from ..tokenizer import (
    Attribute,
    ExpressionSpan,
    TagClose,
    TagOpen,
    TemplateScanner,
    TextRun,
    find_container,
    replace_expressions,
)
from ..tokenizer.scanner import VERBATIM_TAGS, VOID_ELEMENTS
from .base import (
    CandidateKind,
    ExtractionResult,
    Extractor,
    LineIndex,
    SourceLocation,
    placeholder_for,
    unescape_literal,
)
from .kinds import (
    LIVE_REGION_ROLES,
    TRANSPARENT_TAGS,
    infer_kind_from_attribute,
    infer_kind_from_tag,
)
from .script import ScriptExtractor

logger = logging.getLogger(__name__)

EXPRESSION_LITERAL = re.compile(r"""(['"`])((?:\\.|(?!\1)[^\\])*?)\1""")
TRANSLATION_CALL = re.compile(
    r"(?<![\w$.])(?:\$?tc?|\$?te|i18n\.t|\$i18n\.t|__|trans(?:_choice)?|_|gettext|ngettext|lang)\s*\("
)
# Handlebars block helpers, partials and comments carry no text of their own
CONTROL_EXPRESSION = re.compile(r"^(?:[#/!>^~]|else\b)")
SCRIPT_BLOCK = re.compile(r"<script\b([^>]*)>(.*?)</script\s*>", re.IGNORECASE | re.DOTALL)
_SCRIPT_LANG = re.compile(r"""\blang\s*=\s*["']?(\w+)""", re.IGNORECASE)
_BINDING_PREFIX = re.compile(r"^(?::|v-bind:|\[)([\w-]+)\]?$", re.IGNORECASE)
# Literals that are call arguments, subscripts or comparison operands are data
_DATA_LITERAL_BEFORE = re.compile(r"(?:[\w$\]]\s*[(\[]|[=!]==?)\s*$")


def expression_literals(source: str) -> list[str]:
    """Return the bodies of string literals in an expression that may hold prose."""
    return [
        unescape_literal(match.group(2))
        for match in EXPRESSION_LITERAL.finditer(source)
        if not _DATA_LITERAL_BEFORE.search(source[: match.start()])
    ]


@dataclass
class _ElementContext:
    name: str
    live_region: bool = False


class TemplateExtractor(Extractor):
    """Extractor for markup templates."""

    name: ClassVar[str] = "template"
    suffixes: ClassVar[tuple[str, ...]] = ("vue", "html", "htm", "hbs", "handlebars")

    def __init__(
        self,
        classifier: ContentClassifier,
        ignore_attributes: frozenset[str] = frozenset(),
        script_extractor: ScriptExtractor | None = None,
    ) -> None:
        super().__init__(classifier, ignore_attributes)
        self.script_extractor: ScriptExtractor = script_extractor or ScriptExtractor(
            classifier, ignore_attributes
        )

    @override
    def extract(self, source_text: str, file_hint: str = "") -> ExtractionResult:
        result = ExtractionResult()

        if not file_hint.lower().endswith(".vue"):
            self.extract_markup(result, source_text, file_hint)
            return result

        container = find_container(source_text, "template")
        if container is not None:
            first_line = source_text.count("\n", 0, container.start) + 1
            self.extract_markup(
                result, source_text[container.start : container.end], file_hint, first_line
            )
        else:
            logger.debug(f"No <template> container in {file_hint}")

        for match in SCRIPT_BLOCK.finditer(source_text):
            lang = _SCRIPT_LANG.search(match.group(1))
            result.merge(
                self.script_extractor.extract_block(
                    match.group(2),
                    file_hint,
                    source_text.count("\n", 0, match.start(2)) + 1,
                    jsx=bool(lang and lang.group(1).lower() in ("jsx", "tsx")),
                )
            )
        return result

    def extract_markup(
        self, result: ExtractionResult, markup: str, file_hint: str, first_line: int = 1
    ) -> None:
        """
        Scan markup and offer its text runs and attribute values.

        Args:
            result: Result to append to
            markup: Template text
            file_hint: File name used in source locations
            first_line: Line number of the first line of ``markup``
        """
        lines = LineIndex(markup, first_line)
        stack: list[_ElementContext] = []
        pending: list[Attribute] = []

        for event in TemplateScanner().scan(markup):
            if isinstance(event, Attribute):
                pending.append(event)
                self._offer_attribute(result, event, SourceLocation(file_hint, lines.line_of(event.position)))
            elif isinstance(event, TagOpen):
                live = any(self._is_live_region(attribute) for attribute in pending)
                pending = []
                lowered = event.name.lower()
                if not event.self_closing and lowered not in VOID_ELEMENTS | VERBATIM_TAGS:
                    stack.append(_ElementContext(event.name, live))
            elif isinstance(event, TagClose):
                closing = event.name.lower()
                if any(context.name.lower() == closing for context in stack):
                    while stack and stack.pop().name.lower() != closing:
                        pass
            elif isinstance(event, TextRun):
                leading = len(event.text) - len(event.text.lstrip())
                self.offer_text(
                    result,
                    event.text,
                    event.expressions,
                    self._text_kind(stack),
                    parent_context=event.parent,
                    location=SourceLocation(file_hint, lines.line_of(event.position + leading)),
                )

    def offer_text(
        self,
        result: ExtractionResult,
        raw: str,
        spans: tuple[ExpressionSpan, ...] | None,
        kind: CandidateKind,
        *,
        parent_context: str | None = None,
        attribute_name: str | None = None,
        location: SourceLocation | None = None,
    ) -> None:
        """
        Offer the literal sub-parts of embedded expressions, then the text itself.

        Expressions that are translation lookups vanish, as do expressions
        whose literals were accepted. Any other expression is rendered as a
        ``{name}`` placeholder.
        """

        def substitute(source: str) -> str:
            if not source or CONTROL_EXPRESSION.match(source) or TRANSLATION_CALL.search(source):
                return ""
            accepted = False
            for literal in expression_literals(source):
                if self.offer(
                    result,
                    literal,
                    kind,
                    parent_context=parent_context,
                    attribute_name=attribute_name,
                    location=location,
                ):
                    accepted = True
            return "" if accepted else placeholder_for(source)

        text = html.unescape(replace_expressions(raw, substitute, spans))
        _ = self.offer(
            result,
            text,
            kind,
            parent_context=parent_context,
            attribute_name=attribute_name,
            location=location,
        )

    def _offer_attribute(
        self, result: ExtractionResult, attribute: Attribute, location: SourceLocation
    ) -> None:
        value = attribute.value
        if value is None or not value.strip():
            return

        name = attribute.name
        bound = _BINDING_PREFIX.match(name)
        base_name = bound.group(1) if bound else name
        if name.lower() in self.ignore_attributes or base_name.lower() in self.ignore_attributes:
            return

        kind = infer_kind_from_attribute(base_name)
        if bound is not None:
            # Bound values are expressions; only their string literals can be prose
            if not is_translatable_attribute(base_name) or TRANSLATION_CALL.search(value):
                return
            for literal in expression_literals(html.unescape(value)):
                _ = self.offer(
                    result,
                    literal,
                    kind,
                    parent_context=attribute.tag,
                    attribute_name=base_name,
                    location=location,
                )
            return

        if is_non_translatable_attribute(name) or not is_translatable_attribute(name):
            return
        self.offer_text(
            result,
            value,
            None,
            kind,
            parent_context=attribute.tag,
            attribute_name=name,
            location=location,
        )

    def _is_live_region(self, attribute: Attribute) -> bool:
        name = attribute.name.lower()
        value = (attribute.value or "").strip().lower()
        if name == "role":
            return value in LIVE_REGION_ROLES
        return name == "aria-live" and value not in ("", "off")

    def _text_kind(self, stack: list[_ElementContext]) -> CandidateKind:
        for context in reversed(stack):
            if context.live_region:
                return CandidateKind.TOAST
            kind = infer_kind_from_tag(context.name)
            if kind is not CandidateKind.TEXT or context.name.lower() not in TRANSPARENT_TAGS:
                return kind
        return CandidateKind.TEXT


_BLADE_COMMENT = re.compile(r"\{\{--.*?--\}\}", re.DOTALL)
_BLADE_PHP_BLOCK = re.compile(r"@php\b.*?@endphp\b", re.DOTALL)
_PHP_TAG = re.compile(r"<\?(?:php|=)?.*?(?:\?>|$)", re.DOTALL)
_BLADE_DIRECTIVE = re.compile(
    r"(?<![\w.@:'\"=-])@(?!(?:click|submit|change|input|keyup|keydown)\b)\w+"
    r"(?![\w.:-]*\s*=)(?:\s*\((?:[^()]|\([^()]*\))*\))?"
)


def _blank(match: re.Match[str]) -> str:
    return re.sub(r"[^\n]", " ", match.group(0))


class BladeExtractor(TemplateExtractor):
    """
    Extractor for Laravel Blade views.

    Comments, ``@php`` blocks, raw PHP tags and directives (including
    ``@lang(...)`` lookups) are blanked first, keeping line breaks so line
    numbers stay accurate. Unescaped ``{!! !!}`` echoes are treated like
    ``{{ }}``.
    """

    name: ClassVar[str] = "blade"
    suffixes: ClassVar[tuple[str, ...]] = ("blade.php",)

    @override
    def extract(self, source_text: str, file_hint: str = "") -> ExtractionResult:
        result = ExtractionResult()
        self.extract_markup(result, self.preprocess(source_text), file_hint)
        return result

    @staticmethod
    def preprocess(source_text: str) -> str:
        """Blank Blade-only syntax so the template scanner sees plain markup."""
        text = _BLADE_COMMENT.sub(_blank, source_text)
        text = _BLADE_PHP_BLOCK.sub(_blank, text)
        text = _PHP_TAG.sub(_blank, text)
        text = text.replace("{!!", "{{ ").replace("!!}", " }}")
        return _BLADE_DIRECTIVE.sub(_blank, text)
