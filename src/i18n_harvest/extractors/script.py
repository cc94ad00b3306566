"""
Extractors for plain-script source.

Python is walked as a syntax tree. JavaScript/TypeScript and the other
supported languages are scanned line by line for string literals, skipping
lines that already go through a translation lookup and lines that are
diagnostics or module plumbing.
"""

from __future__ import annotations

import ast
import logging
import re
from typing import ClassVar, NamedTuple

from typing_extensions import override

from ..classifier.markup import is_non_translatable_attribute, is_translatable_attribute
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
    infer_kind_from_attribute,
    infer_kind_from_callee,
    infer_kind_from_identifier,
    infer_kind_from_tag,
)

logger = logging.getLogger(__name__)

# Python translation function names
TRANSLATION_FUNCTIONS = {
    "_",
    "gettext",
    "translate",
    "t",
    "ngettext",
    "nt",
    "pgettext",
    "lazy_gettext",
}

LOGGER_NAMES = frozenset({"logger", "logging", "log", "LOGGER", "_logger", "_log"})

LITERAL = re.compile(r"""(['"`])((?:\\.|(?!\1)[^\\\n])*)\1""")

_TEMPLATE_INTERPOLATION = re.compile(r"\$\{([^}]*)\}")
_RUBY_INTERPOLATION = re.compile(r"#\{([^}]*)\}")
_SWIFT_INTERPOLATION = re.compile(r"\\\(([^)]*)\)")
_DOLLAR_INTERPOLATION = re.compile(r"\$([A-Za-z_]\w*)")

_CALLEE_PREFIX = re.compile(r"([\w$.]+)\s*\(\s*$")
_ASSIGNMENT_PREFIX = re.compile(r"([\w$-]+)['\"]?\s*(?::=|=>|[:=])\s*$")
_JSX_ATTRIBUTE_PREFIX = re.compile(r"\s([\w:-]+)=$")
_COMPARISON_BEFORE = re.compile(r"(?:[!=]==?|<=?|(?<!=)>=?|\bin|\bcase)\s*$")
_COMPARISON_AFTER = re.compile(r"^\s*(?:[!=]==?)")
_OBJECT_KEY_BEFORE = re.compile(r"(?:^|[{,])\s*$")
_OBJECT_KEY_AFTER = re.compile(r"^\s*:")
_SUBSCRIPT_BEFORE = re.compile(r"\[\s*$")
_SUBSCRIPT_AFTER = re.compile(r"^\s*\]")

JSX_TEXT = re.compile(r"<([A-Za-z][\w.:-]*)(?:\s[^<>]*?)?>([^<>{}=;]+)<")


class LinePatterns(NamedTuple):
    """Per-language line filters for the literal scan."""

    translated: re.Pattern[str]
    diagnostic: re.Pattern[str]
    comment: re.Pattern[str]
    plumbing: re.Pattern[str] | None = None


_C_COMMENT = re.compile(r"^\s*(?://|/\*|\*)")
_HASH_COMMENT = re.compile(r"^\s*#")

SCRIPT_LINES = LinePatterns(
    translated=re.compile(
        r"(?<![\w$])(?:\$?tc?|\$?te|i18n\.t|i18n\.global\.t|__|trans|trans_choice)\s*\("
        r"|\buseI18n\b|\bi18nKey\s*="
    ),
    diagnostic=re.compile(
        r"\bconsole\.(?:log|debug|info|warn|error|trace|table|group)\s*\("
        r"|\b(?:logger|log)\.\w+\s*\(|\bthrow\s+new\s+\w*Error\("
    ),
    comment=_C_COMMENT,
    plumbing=re.compile(
        r"^\s*import\b|^\s*export\s+(?:\*|\{[^}]*\})\s+from\b|\brequire\s*\(|\bimport\s*\("
    ),
)

PYTHON_LINES = LinePatterns(
    translated=re.compile(r"(?<![\w.])(?:_|gettext|ngettext|translate|t|nt|lazy_gettext)\s*\("),
    diagnostic=re.compile(r"\b(?:logger|logging|log)\.\w+\s*\(|\braise\s+\w+"),
    comment=_HASH_COMMENT,
    plumbing=re.compile(r"^\s*(?:import|from)\s+\S"),
)

GENERIC_LINES: dict[str, LinePatterns] = {
    "go": LinePatterns(
        translated=re.compile(r"\bi18n\.T\(|\blocalizer\.(?:Localize|MustLocalize)\(|\bT\(\s*\""),
        diagnostic=re.compile(
            r"\b(?:log|logger|slog|zap)\.\w+\(|\bfmt\.(?:Print|Fprint|Errorf)\w*\(|\berrors\.New\("
        ),
        comment=_C_COMMENT,
        plumbing=re.compile(r"^\s*(?:import|package)\b|^\s*\"[\w./-]+\"\s*$"),
    ),
    "rb": LinePatterns(
        translated=re.compile(r"\bI18n\.(?:t|translate)\b|(?<![\w.])t\(\s*['\":]"),
        diagnostic=re.compile(r"\b(?:Rails\.)?logger\.\w+|\braise\b"),
        comment=_HASH_COMMENT,
        plumbing=re.compile(r"^\s*(?:require|require_relative|include|extend)\b"),
    ),
    "php": LinePatterns(
        translated=re.compile(
            r"(?<![\w>$])(?:__|trans|trans_choice|_e|_x|esc_html__|esc_attr__)\s*\(|@lang\("
        ),
        diagnostic=re.compile(r"\bLog::\w+\(|\berror_log\(|\blogger\(\)|\bthrow\s+new\b"),
        comment=re.compile(r"^\s*(?://|#|/\*|\*)"),
        plumbing=re.compile(r"^\s*(?:use|namespace|require|require_once|include)\b"),
    ),
    "java": LinePatterns(
        translated=re.compile(
            r"\bgetString\(|\bMessageFormat\.format\(|\bResourceBundle\b|\bgetMessage\("
        ),
        diagnostic=re.compile(
            r"\bLog\.[vdiwe]\(|\b(?:log|logger|LOG|LOGGER)\.\w+\(|\bSystem\.(?:out|err)\.print"
            r"|\bthrow\s+new\b"
        ),
        comment=_C_COMMENT,
        plumbing=re.compile(r"^\s*(?:import|package)\b|^\s*@\w+"),
    ),
    "kt": LinePatterns(
        translated=re.compile(r"\bgetString\(|\bstringResource\(|\bR\.string\."),
        diagnostic=re.compile(
            r"\bLog\.[vdiwe]\(|\b(?:log|logger|Timber)\.\w+\(|\bprintln\(|\bthrow\s+\w+"
        ),
        comment=_C_COMMENT,
        plumbing=re.compile(r"^\s*(?:import|package)\b|^\s*@\w+"),
    ),
    "cs": LinePatterns(
        translated=re.compile(r"\.GetString\(|\b_?[Ll]ocalizer\[|\bResources\.\w+"),
        diagnostic=re.compile(
            r"\b_?logger\.Log\w*\(|\bConsole\.Write(?:Line)?\(|\b(?:Debug|Trace)\.\w+\(|\bthrow\s+new\b"
        ),
        comment=_C_COMMENT,
        plumbing=re.compile(r"^\s*(?:using|namespace)\b|^\s*\["),
    ),
    "rs": LinePatterns(
        translated=re.compile(r"\b(?:t|fl|tr)!\s*\("),
        diagnostic=re.compile(
            r"\b(?:e?println|e?print|debug|info|warn|error|trace|panic|unreachable)!\s*\("
            r"|\blog::\w+!|\.expect\("
        ),
        comment=_C_COMMENT,
        plumbing=re.compile(r"^\s*(?:use|mod|extern)\b|^\s*#\["),
    ),
    "swift": LinePatterns(
        translated=re.compile(
            r"\bNSLocalizedString\(|\bString\(localized:|\bLocalizedStringKey\(|\.localized\b"
        ),
        diagnostic=re.compile(
            r"\b(?:print|debugPrint|NSLog|os_log|fatalError)\(|\blogger\.\w+\("
        ),
        comment=_C_COMMENT,
        plumbing=re.compile(r"^\s*import\b"),
    ),
}


def _render_interpolations(content: str, quote: str, *, dollar_names: bool = False) -> str:
    """Replace interpolated expressions in a literal body with ``{name}`` tokens."""
    rendered = _TEMPLATE_INTERPOLATION.sub(lambda match: placeholder_for(match.group(1)), content)
    rendered = _RUBY_INTERPOLATION.sub(lambda match: placeholder_for(match.group(1)), rendered)
    rendered = _SWIFT_INTERPOLATION.sub(lambda match: placeholder_for(match.group(1)), rendered)
    if dollar_names and quote == '"':
        rendered = _DOLLAR_INTERPOLATION.sub(lambda match: "{" + match.group(1) + "}", rendered)
    return rendered


def blank_spans(text: str, spans: list[tuple[int, int]]) -> str:
    """Overwrite ranges with spaces, keeping line breaks so offsets stay valid."""
    if not spans:
        return text
    chars = list(text)
    for start, end in spans:
        for index in range(start, end):
            if chars[index] != "\n":
                chars[index] = " "
    return "".join(chars)


class LineScanExtractor(Extractor):
    """Shared literal scan for languages handled line by line."""

    patterns: ClassVar[LinePatterns] = SCRIPT_LINES
    dollar_interpolation: ClassVar[bool] = False

    def scan_lines(
        self,
        result: ExtractionResult,
        source_text: str,
        file_hint: str,
        *,
        patterns: LinePatterns | None = None,
        first_line: int = 1,
        attribute_policy: bool = False,
    ) -> None:
        """
        Scan every line for string literals and offer them to the classifier.

        Args:
            result: Result to append to
            source_text: Text to scan
            file_hint: File name used in source locations
            patterns: Line filters; defaults to the extractor's own
            first_line: Line number of the first line of ``source_text``
            attribute_policy: Apply the markup attribute policy to
                ``name="value"`` literals (JSX)
        """
        filters = patterns or self.patterns
        for offset, line in enumerate(source_text.split("\n")):
            if not line.strip() or filters.comment.match(line):
                continue
            if filters.translated.search(line) or filters.diagnostic.search(line):
                continue
            if filters.plumbing is not None and filters.plumbing.search(line):
                continue

            for match in LITERAL.finditer(line):
                self._offer_literal(
                    result,
                    line,
                    match,
                    SourceLocation(file_hint, first_line + offset),
                    attribute_policy,
                )

    def _offer_literal(
        self,
        result: ExtractionResult,
        line: str,
        match: re.Match[str],
        location: SourceLocation,
        attribute_policy: bool,
    ) -> None:
        quote, body = match.group(1), match.group(2)
        before, after = line[: match.start()], line[match.end() :]

        if _COMPARISON_BEFORE.search(before) or _COMPARISON_AFTER.match(after):
            return
        if _SUBSCRIPT_BEFORE.search(before) and _SUBSCRIPT_AFTER.match(after):
            return
        if _OBJECT_KEY_BEFORE.search(before) and _OBJECT_KEY_AFTER.match(after):
            return

        kind = CandidateKind.TEXT
        context: str | None = None
        attribute: str | None = None

        jsx_attribute = _JSX_ATTRIBUTE_PREFIX.search(before) if attribute_policy else None
        if jsx_attribute is not None:
            attribute = jsx_attribute.group(1)
            if attribute.lower() in self.ignore_attributes:
                return
            if not is_translatable_attribute(attribute) or is_non_translatable_attribute(attribute):
                return
            kind = infer_kind_from_attribute(attribute)
        elif callee := _CALLEE_PREFIX.search(before):
            context = callee.group(1)
            kind = infer_kind_from_callee(context) or CandidateKind.TEXT
        elif assignment := _ASSIGNMENT_PREFIX.search(before):
            context = assignment.group(1)
            kind = infer_kind_from_identifier(context)

        text = unescape_literal(
            _render_interpolations(body, quote, dollar_names=self.dollar_interpolation)
        )
        _ = self.offer(
            result,
            text,
            kind,
            parent_context=context,
            attribute_name=attribute,
            location=location,
        )


class ScriptExtractor(LineScanExtractor):
    """JavaScript/TypeScript extractor; JSX dialects also get a markup text pass."""

    name: ClassVar[str] = "script"
    suffixes: ClassVar[tuple[str, ...]] = ("js", "jsx", "ts", "tsx", "mjs", "cjs", "mts", "cts")

    @override
    def extract(self, source_text: str, file_hint: str = "") -> ExtractionResult:
        return self.extract_block(source_text, file_hint)

    def extract_block(
        self,
        source_text: str,
        file_hint: str = "",
        first_line: int = 1,
        jsx: bool | None = None,
    ) -> ExtractionResult:
        """
        Extract from a script body that may start part-way into a file.

        Args:
            source_text: Script text
            file_hint: File name used in source locations
            first_line: Line number of the first line of ``source_text``
            jsx: Enable the markup text pass; by default decided by a
                ``.jsx``/``.tsx`` file name

        Returns:
            ExtractionResult: Accepted candidates and rejection counts
        """
        result = ExtractionResult()
        if jsx is None:
            jsx = file_hint.lower().endswith((".jsx", ".tsx"))

        if jsx:
            consumed = self._extract_jsx_text(result, source_text, file_hint, first_line)
            source_text = blank_spans(source_text, consumed)

        self.scan_lines(
            result, source_text, file_hint, first_line=first_line, attribute_policy=jsx
        )
        return result

    def _extract_jsx_text(
        self, result: ExtractionResult, source_text: str, file_hint: str, first_line: int
    ) -> list[tuple[int, int]]:
        lines = LineIndex(source_text, first_line)
        consumed: list[tuple[int, int]] = []
        for match in JSX_TEXT.finditer(source_text):
            text = match.group(2)
            if not text.strip():
                continue
            consumed.append((match.start(2), match.end(2)))
            leading = len(text) - len(text.lstrip())
            tag = match.group(1)
            _ = self.offer(
                result,
                text,
                infer_kind_from_tag(tag),
                parent_context=tag,
                location=SourceLocation(file_hint, lines.line_of(match.start(2) + leading)),
            )
        return consumed


class GenericExtractor(LineScanExtractor):
    """Literal scan for back-end and mobile languages without a dedicated walker."""

    name: ClassVar[str] = "generic"
    suffixes: ClassVar[tuple[str, ...]] = tuple(GENERIC_LINES)
    dollar_interpolation: ClassVar[bool] = True

    @override
    def extract(self, source_text: str, file_hint: str = "") -> ExtractionResult:
        result = ExtractionResult()
        suffix = file_hint.lower().rsplit(".", 1)[-1]
        self.scan_lines(result, source_text, file_hint, patterns=GENERIC_LINES.get(suffix, SCRIPT_LINES))
        return result


class _PythonStringVisitor(ast.NodeVisitor):
    """AST visitor collecting user-facing string constants and f-strings."""

    def __init__(self, extractor: PythonExtractor, result: ExtractionResult, filename: str) -> None:
        self.extractor: PythonExtractor = extractor
        self.result: ExtractionResult = result
        self.filename: str = filename
        self.skipped: set[int] = set()
        self.contexts: dict[int, tuple[CandidateKind, str | None]] = {}

    def _skip(self, node: ast.AST | None) -> None:
        if node is None:
            return
        for child in ast.walk(node):
            self.skipped.add(id(child))

    def _tag(self, node: ast.AST | None, kind: CandidateKind, context: str | None) -> None:
        if node is None:
            return
        for child in ast.walk(node):
            if isinstance(child, (ast.Constant, ast.JoinedStr)):
                self.contexts[id(child)] = (kind, context)

    def _skip_docstring(self, node: ast.Module | ast.ClassDef | ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        if node.body and isinstance(node.body[0], ast.Expr):
            value = node.body[0].value
            if isinstance(value, ast.Constant) and isinstance(value.value, str):
                self.skipped.add(id(value))

    def _skip_signature(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        self._skip(node.returns)
        for argument in [*node.args.posonlyargs, *node.args.args, *node.args.kwonlyargs]:
            self._skip(argument.annotation)
        for decorator in node.decorator_list:
            self._skip(decorator)

    @override
    def visit_Module(self, node: ast.Module) -> None:
        self._skip_docstring(node)
        self.generic_visit(node)

    @override
    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        self._skip_docstring(node)
        for decorator in node.decorator_list:
            self._skip(decorator)
        self.generic_visit(node)

    @override
    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        self._skip_docstring(node)
        self._skip_signature(node)
        self.generic_visit(node)

    @override
    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        self._skip_docstring(node)
        self._skip_signature(node)
        self.generic_visit(node)

    @override
    def visit_Assign(self, node: ast.Assign) -> None:
        for target in node.targets:
            name = self._target_name(target)
            if name == "__all__":
                self._skip(node.value)
            elif name is not None:
                self._tag(node.value, infer_kind_from_identifier(name), name)
        self.generic_visit(node)

    @override
    def visit_AnnAssign(self, node: ast.AnnAssign) -> None:
        self._skip(node.annotation)
        name = self._target_name(node.target)
        if name is not None:
            self._tag(node.value, infer_kind_from_identifier(name), name)
        self.generic_visit(node)

    @override
    def visit_Call(self, node: ast.Call) -> None:
        func_name = self._get_function_name(node.func)

        if func_name in TRANSLATION_FUNCTIONS or self._is_logging_call(node.func):
            self._skip(node)
            return

        dotted = self._dotted_name(node.func)
        callee_kind = infer_kind_from_callee(dotted) if dotted else None
        if callee_kind is not None:
            for argument in node.args:
                self._tag(argument, callee_kind, dotted)
        for keyword in node.keywords:
            if keyword.arg is not None:
                self._tag(keyword.value, infer_kind_from_identifier(keyword.arg), keyword.arg)

        self.generic_visit(node)

    @override
    def visit_Dict(self, node: ast.Dict) -> None:
        for key, value in zip(node.keys, node.values, strict=True):
            self._skip(key)
            if isinstance(key, ast.Constant) and isinstance(key.value, str):
                self._tag(value, infer_kind_from_identifier(key.value), key.value)
        self.generic_visit(node)

    @override
    def visit_Subscript(self, node: ast.Subscript) -> None:
        self._skip(node.slice)
        self.generic_visit(node)

    @override
    def visit_Compare(self, node: ast.Compare) -> None:
        self._skip(node)

    @override
    def visit_JoinedStr(self, node: ast.JoinedStr) -> None:
        if id(node) in self.skipped:
            return

        parts: list[str] = []
        for value in node.values:
            if isinstance(value, ast.Constant) and isinstance(value.value, str):
                parts.append(value.value)
            elif isinstance(value, ast.FormattedValue):
                parts.append(placeholder_for(ast.unparse(value.value)))
        self._offer(node, "".join(parts))

    @override
    def visit_Constant(self, node: ast.Constant) -> None:
        if isinstance(node.value, str) and id(node) not in self.skipped:
            self._offer(node, node.value)

    def _offer(self, node: ast.Constant | ast.JoinedStr, text: str) -> None:
        kind, context = self.contexts.get(id(node), (CandidateKind.TEXT, None))
        _ = self.extractor.offer(
            self.result,
            text,
            kind,
            parent_context=context,
            location=SourceLocation(self.filename, node.lineno),
        )

    def _is_logging_call(self, func_node: ast.AST) -> bool:
        if isinstance(func_node, ast.Name):
            return func_node.id == "print"
        if isinstance(func_node, ast.Attribute):
            owner = func_node.value
            if isinstance(owner, ast.Name):
                return owner.id in LOGGER_NAMES
            if isinstance(owner, ast.Attribute):
                return owner.attr in LOGGER_NAMES
        return False

    def _target_name(self, target: ast.AST) -> str | None:
        if isinstance(target, ast.Name):
            return target.id
        if isinstance(target, ast.Attribute):
            return target.attr
        return None

    def _get_function_name(self, func_node: ast.AST) -> str | None:
        """
        Extract function name from various AST node types.

        Args:
            func_node: AST node representing the function being called

        Returns:
            Function name if extractable, None otherwise
        """
        if isinstance(func_node, ast.Name):
            return func_node.id
        elif isinstance(func_node, ast.Attribute):
            return func_node.attr
        return None

    def _dotted_name(self, func_node: ast.AST) -> str | None:
        if isinstance(func_node, ast.Name):
            return func_node.id
        if isinstance(func_node, ast.Attribute):
            owner = self._dotted_name(func_node.value)
            return f"{owner}.{func_node.attr}" if owner else func_node.attr
        return None


class PythonExtractor(LineScanExtractor):
    """
    Python extractor driven by the ``ast`` module.

    Docstrings, type annotations, dictionary keys, subscripts, comparisons
    and the arguments of translation and logging calls are skipped.
    f-strings are rendered with ``{name}`` placeholders. Source that does
    not parse falls back to the line scan.
    """

    name: ClassVar[str] = "python"
    suffixes: ClassVar[tuple[str, ...]] = ("py", "pyi")
    patterns: ClassVar[LinePatterns] = PYTHON_LINES

    @override
    def extract(self, source_text: str, file_hint: str = "") -> ExtractionResult:
        result = ExtractionResult()
        try:
            tree = ast.parse(source_text, filename=file_hint or "<unknown>")
        except SyntaxError as e:
            logger.debug(f"Falling back to line scan for {file_hint}: {e}")
            self.scan_lines(result, source_text, file_hint)
            return result

        _PythonStringVisitor(self, result, file_hint).visit(tree)
        return result
