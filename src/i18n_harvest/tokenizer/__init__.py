"""Template tokenizer: FSM scanner plus quote-aware expression helpers."""

from .events import Attribute, Expression, TagClose, TagOpen, TemplateEvent, TextRun
from .expressions import (
    ContainerSpan,
    ExpressionSpan,
    expression_spans,
    extract_container,
    find_container,
    find_expression_end,
    replace_expressions,
)
from .scanner import ScanState, TemplateScanner, scan

__all__ = [
    "Attribute",
    "ContainerSpan",
    "Expression",
    "ExpressionSpan",
    "ScanState",
    "TagClose",
    "TagOpen",
    "TemplateEvent",
    "TemplateScanner",
    "TextRun",
    "expression_spans",
    "extract_container",
    "find_container",
    "find_expression_end",
    "replace_expressions",
    "scan",
]
