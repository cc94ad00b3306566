"""
Source-code detectors.

Recognizes expressions, directive values, identifiers, statements and
event-handler references. Short capitalized phrases followed by a
parenthetical ("Click (here)") are prose and never match.
"""

from __future__ import annotations

import re

JS_KEYWORDS: frozenset[str] = frozenset(
    {
        "async", "await", "break", "case", "catch", "class", "const", "continue",
        "debugger", "default", "delete", "do", "else", "enum", "export", "extends",
        "false", "finally", "for", "function", "if", "import", "in", "instanceof",
        "let", "new", "null", "return", "static", "super", "switch", "this",
        "throw", "true", "try", "typeof", "undefined", "var", "void", "while",
        "with", "yield", "implements", "interface", "package", "private",
        "protected", "public", "abstract", "as", "from", "get", "set", "of",
    }
)

PROGRAMMING_IDENTIFIERS: frozenset[str] = frozenset(
    {
        "console", "window", "document", "navigator", "location", "history",
        "localStorage", "sessionStorage", "fetch", "Promise", "Array", "Object",
        "String", "Number", "Boolean", "Date", "Math", "JSON", "RegExp", "Error",
        "Map", "Set", "WeakMap", "WeakSet", "Symbol", "Proxy", "Reflect",
        "parseInt", "parseFloat", "isNaN", "isFinite", "encodeURI", "decodeURI",
        "encodeURIComponent", "decodeURIComponent", "setTimeout", "setInterval",
        "clearTimeout", "clearInterval", "requestAnimationFrame",
        "addEventListener", "removeEventListener", "querySelector",
        "querySelectorAll", "getElementById", "getElementsByClassName",
        "getElementsByTagName", "createElement", "createTextNode", "appendChild",
        "removeChild", "insertBefore", "replaceChild", "cloneNode",
        "getAttribute", "setAttribute", "removeAttribute", "classList", "style",
        "innerHTML", "textContent", "value", "checked", "selected", "disabled",
        "readonly", "required", "length", "push", "pop", "shift", "unshift",
        "splice", "slice", "concat", "join", "reverse", "sort", "filter", "map",
        "reduce", "forEach", "find", "findIndex", "includes", "indexOf",
        "lastIndexOf", "every", "some", "keys", "values", "entries",
        "hasOwnProperty", "toString", "valueOf", "toUpperCase", "toLowerCase",
        "trim", "split", "replace", "match", "search", "substring", "substr",
        "charAt", "charCodeAt", "startsWith", "endsWith", "padStart", "padEnd",
        "repeat", "localeCompare",
    }
)

PROSE_PARENTHETICAL = re.compile(r"^[A-Z][a-z]+\s+\([^)]+\)$")

_IDENT = r"[a-zA-Z_$][a-zA-Z0-9_$]*"

_TERNARY = re.compile(r"\?\s*[^:]+\s*:")
_CALL = re.compile(r"^(!|await\s+|new\s+|void\s+)?[a-zA-Z_$][a-zA-Z0-9_$.]*\s*\([^)]*\)$")
_ARROW = re.compile(r"=>")
_OPERATOR_CHAR = re.compile(r"[<>=!]")
_CONTROL_KEYWORD = re.compile(r"\b(if|else|while|for|return|const|let|var|function)\b")
_COMPARISON = re.compile(_IDENT + r"\s*[<>=!]=")
_LOGICAL = re.compile(r"\s(&&|\|\|)\s")
_PROPERTY_CHAIN = re.compile(_IDENT + r"(?:\." + _IDENT + r"){2,}")
_INDEX_ACCESS = re.compile(r"\[[^\]]+\]")
_BRACKETED_WORD = re.compile(r"^\[[A-Z][a-z]+\]$")
_ASSIGNMENT = re.compile(_IDENT + r"\s*=\s*[^=]")
_WORD_EQUALS_WORD = re.compile(r"^[A-Z][a-z]+\s*=\s*[A-Z][a-z]+$")
_INTERPOLATION = re.compile(r"\$\{[^}]+\}")
_SPREAD = re.compile(r"\.{3}[a-zA-Z_$]")
_DESTRUCTURING = re.compile(r"^\s*\{[^}]+\}\s*$")
_KEY_VALUE = re.compile(r"[a-zA-Z_$]:\s*[a-zA-Z_$]")
_REGEX_LITERAL = re.compile(r"^/(?![\s*/])(?:\\.|[^/\\\n])+/[dgimsuy]*$")

_HANDLER_NAME = re.compile(r"^(handle|on)[A-Z][a-zA-Z0-9]*(\([^)]*\))?$")
_PROPERTY_PATH = re.compile(r"^!?" + _IDENT + r"(\." + _IDENT + r")*$")
_LABEL_WORD = re.compile(r"^[A-Z][a-z]+$")
_COMPUTED = re.compile(
    r"^" + _IDENT + r"\s*(?:===|!==|==|!=|<=|>=|&&|\|\||[<>]\s*[a-zA-Z0-9_$]|[&|]\s*"
    + _IDENT
    + r"\s*[(<>=!&|])"
)
# A lowercase operand glued to a single & or |, as in ``flags&mask``
_BITWISE = re.compile(r"^[a-z_$][a-zA-Z0-9_$]*[&|][a-zA-Z_$]")
_METHOD_CALL = re.compile(r"^" + _IDENT + r"\s*\(")
_LITERAL_OPEN = re.compile(r"^\s*[\[{]")
_LITERAL_CLOSE = re.compile(r"[\]}]\s*$")

_CAMEL_CASE = re.compile(r"^[a-z][a-zA-Z0-9]*[A-Z][a-zA-Z0-9]*$")
_SNAKE_CASE = re.compile(r"^[a-z][a-z0-9]*(_[a-z][a-z0-9]*)+$")
_SCREAMING_SNAKE_CASE = re.compile(r"^[A-Z][A-Z0-9]*(_[A-Z][A-Z0-9]*)+$")

_CONTROL_FLOW = re.compile(r"^(if|for|while|switch|catch)\s*\(")
_DECLARATION = re.compile(r"^(const|let|var|function|class|import|export|def)\s+[a-zA-Z_$]")
_BLOCK_KEYWORD = re.compile(r"^(try|else|do)\s*\{")
_RETURN = re.compile(r"^(return|throw)\s+[^A-Z]")
_STATEMENT_END = re.compile(r";\s*$")
_STATEMENT_BODY = re.compile(_IDENT + r"\s*[=(]")

_ARROW_HANDLER = re.compile(r"^[a-zA-Z_$][a-zA-Z0-9_$,\s]*\s*=>\s*.+$")
_HANDLER_PREFIX = re.compile(
    r"^(handle|on|do|emit|dispatch|trigger|fire|call|invoke|execute|run|process)",
    re.IGNORECASE,
)
_INLINE_CALL = re.compile(r"^" + _IDENT + r"\s*\([^)]*\)$")


def is_js_expression(text: str) -> bool:
    """Check for expression syntax such as ``items.length > 0`` or ``a ? b : c``."""
    if not text:
        return False
    if _TERNARY.search(text):
        return True
    if _CALL.match(text):
        return not PROSE_PARENTHETICAL.match(text)
    if _ARROW.search(text):
        return True
    if _OPERATOR_CHAR.search(text) and (
        _CONTROL_KEYWORD.search(text) or _COMPARISON.search(text)
    ):
        return True
    if _LOGICAL.search(text):
        return True
    if _PROPERTY_CHAIN.search(text):
        return True
    if _INDEX_ACCESS.search(text) and re.search(r"[a-zA-Z_$]", text):
        return not _BRACKETED_WORD.match(text)
    if _ASSIGNMENT.search(text) and not _WORD_EQUALS_WORD.match(text):
        return True
    if _INTERPOLATION.search(text) or _SPREAD.search(text):
        return True
    return bool(_DESTRUCTURING.match(text) and _KEY_VALUE.search(text))


def is_directive_expression(text: str) -> bool:
    """
    Check for values typical of template directives.

    Covers handler names, property paths used in conditionals, computed
    comparisons, method calls and object/array literals.
    """
    if not text:
        return False
    if _HANDLER_NAME.match(text):
        return True
    if _PROPERTY_PATH.match(text):
        # A lone capitalized word is more likely a label than a property
        return not _LABEL_WORD.match(text)
    if _COMPUTED.match(text) or _BITWISE.match(text) or _METHOD_CALL.match(text):
        return True
    return bool(_LITERAL_OPEN.match(text) and _LITERAL_CLOSE.search(text))


def is_programming_identifier(text: str) -> bool:
    """Check for camelCase, snake_case, SCREAMING_SNAKE_CASE and known runtime names."""
    if not text:
        return False
    return bool(
        _CAMEL_CASE.match(text)
        or _SNAKE_CASE.match(text)
        or _SCREAMING_SNAKE_CASE.match(text)
        or text in PROGRAMMING_IDENTIFIERS
        or text in JS_KEYWORDS
    )


def is_regex_literal(text: str) -> bool:
    """Check for a slash-delimited regular expression literal."""
    return bool(_REGEX_LITERAL.match(text))


def is_code_content(text: str) -> bool:
    """Entry point for source-code detection."""
    if not text or PROSE_PARENTHETICAL.match(text):
        return False
    if is_js_expression(text) or is_directive_expression(text):
        return True
    if is_programming_identifier(text) or is_regex_literal(text):
        return True
    if _CONTROL_FLOW.match(text) or _DECLARATION.match(text):
        return True
    if _BLOCK_KEYWORD.match(text) or _RETURN.match(text):
        return True
    return bool(_STATEMENT_END.search(text) and _STATEMENT_BODY.search(text))


def is_event_handler_value(text: str) -> bool:
    """Check for handler-shaped values such as ``onSave`` or ``v => close()``."""
    if not text or PROSE_PARENTHETICAL.match(text):
        return False
    if _ARROW_HANDLER.match(text):
        return True
    if _PROPERTY_PATH.match(text) and not text.startswith("!") and _HANDLER_PREFIX.match(text):
        return True
    return bool(_INLINE_CALL.match(text))
