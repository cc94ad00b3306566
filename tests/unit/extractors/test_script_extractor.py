"""
Tests for the plain-script extractors.

This module covers the JavaScript/TypeScript line scan with its JSX text
pass, the Python syntax-tree walk and the generic line scan used for
back-end and mobile languages.
"""

from __future__ import annotations

import pytest

from i18n_harvest.classifier import ContentClassifier
from i18n_harvest.extractors import CandidateKind, ExtractedCandidate
from i18n_harvest.extractors.base import placeholder_for, unescape_literal
from i18n_harvest.extractors.script import GenericExtractor, PythonExtractor, ScriptExtractor


def _pairs(candidates: list[ExtractedCandidate]) -> list[tuple[str, CandidateKind]]:
    return [(candidate.text, candidate.kind) for candidate in candidates]


@pytest.fixture
def script_extractor(classifier: ContentClassifier) -> ScriptExtractor:
    return ScriptExtractor(classifier)


@pytest.fixture
def python_extractor(classifier: ContentClassifier) -> PythonExtractor:
    return PythonExtractor(classifier)


@pytest.fixture
def generic_extractor(classifier: ContentClassifier) -> GenericExtractor:
    return GenericExtractor(classifier)


class TestHelpers:
    """Placeholder rendering and literal unescaping."""

    @pytest.mark.parametrize(
        ("expression", "expected"),
        [
            ("count", "{count}"),
            ("user.name", "{name}"),
            ("order?.total", "{total}"),
            ("$user->email", "{email}"),
            ("items.length + 1", "{value}"),
            ("formatDate(created)", "{value}"),
        ],
    )
    def test_placeholder_for(self, expression: str, expected: str) -> None:
        """Test that simple paths keep their last segment and the rest become value."""
        assert placeholder_for(expression) == expected

    def test_unescape_literal(self) -> None:
        """Test that escapes resolve and line breaks become spaces."""
        assert unescape_literal(r"It\'s done\nfor today") == "It's done for today"


class TestScriptExtractor:
    """JavaScript and TypeScript."""

    def test_assignment_kinds(self, script_extractor: ScriptExtractor) -> None:
        """Test that declared names drive the kind."""
        source = (
            "const pageTitle = 'Manage your subscription';\n"
            "const submitButtonText = \"Get started\";\n"
            "const emailPlaceholder = `Enter your email`;\n"
        )

        result = script_extractor.extract(source, "settings.ts")

        assert _pairs(result.candidates) == [
            ("Manage your subscription", CandidateKind.HEADING),
            ("Get started", CandidateKind.BUTTON),
            ("Enter your email", CandidateKind.PLACEHOLDER),
        ]

    def test_skips_translated_and_diagnostic_lines(self, script_extractor: ScriptExtractor) -> None:
        """Test that lookups, logging, imports and comments are skipped."""
        source = (
            "import { useI18n } from 'vue-i18n'\n"
            "// Show the welcome message here\n"
            "const label = t('Common.label.welcome')\n"
            "console.warn('Something went wrong here')\n"
            "throw new Error('Invalid state reached')\n"
        )

        result = script_extractor.extract(source, "app.js")

        assert result.candidates == []

    def test_comparisons_and_keys_skipped(self, script_extractor: ScriptExtractor) -> None:
        """Test that comparison operands, object keys and subscripts are data."""
        source = (
            "if (status === 'Payment failed') {}\n"
            "const map = { 'Display name': value }\n"
            "const x = row['Full name']\n"
            "const message = 'Payment received'\n"
        )

        result = script_extractor.extract(source, "billing.js")

        assert [candidate.text for candidate in result.candidates] == ["Payment received"]

    def test_template_literal_interpolation(self, script_extractor: ScriptExtractor) -> None:
        """Test that template literal expressions become placeholders."""
        result = script_extractor.extract(
            "toast.success(`Saved ${user.name} successfully`)\n", "notify.ts"
        )

        assert _pairs(result.candidates) == [
            ("Saved {name} successfully", CandidateKind.TOAST)
        ]

    def test_instance_notification_calls(self, script_extractor: ScriptExtractor) -> None:
        """Test that Vue instance helpers like ``this.$notify`` tag toasts."""
        result = script_extractor.extract(
            "this.$notify('Profile saved')\nthis.$toast('Upload finished')\n", "notify.js"
        )

        assert _pairs(result.candidates) == [
            ("Profile saved", CandidateKind.TOAST),
            ("Upload finished", CandidateKind.TOAST),
        ]

    def test_jsx_text_and_attributes(self, script_extractor: ScriptExtractor) -> None:
        """Test the markup text pass and the attribute policy for JSX."""
        source = (
            "export function Banner({ user }: Props) {\n"
            "  if (user.role === \"admin\") {\n"
            "    return <h1 className=\"text-xl font-bold\">Welcome back, admin</h1>;\n"
            "  }\n"
            "  return <img alt=\"Company logo\" src=\"/logo.png\" />;\n"
            "}\n"
        )

        result = script_extractor.extract(source, "Banner.tsx")

        assert _pairs(result.candidates) == [
            ("Welcome back, admin", CandidateKind.HEADING),
            ("Company logo", CandidateKind.ALT),
        ]
        locations = [candidate.source_location for candidate in result.candidates]
        assert [location.line for location in locations if location] == [3, 5]

    def test_jsx_pass_only_for_jsx_files(self, script_extractor: ScriptExtractor) -> None:
        """Test that plain script files do not get the markup pass."""
        result = script_extractor.extract("const a = b < c ? d : e > f\n", "math.js")

        assert result.candidates == []

    def test_extract_block_offsets_lines(self, script_extractor: ScriptExtractor) -> None:
        """Test that a block starting mid-file reports file line numbers."""
        result = script_extractor.extract_block(
            "\nconst heading = 'Team settings'\n", "Team.vue", first_line=10
        )

        location = result.candidates[0].source_location
        assert location is not None
        assert (location.file, location.line) == ("Team.vue", 11)


class TestPythonExtractor:
    """Syntax-tree walk over Python source."""

    SOURCE = (
        '"""Module docstring that should be skipped."""\n'
        "import logging\n"
        "\n"
        "logger = logging.getLogger(__name__)\n"
        "\n"
        'WELCOME_TITLE = "Welcome to the dashboard"\n'
        "\n"
        "\n"
        'def notify(user: "User", status: str) -> str:\n'
        '    """Send a notification to the user."""\n'
        '    logger.info("Notifying user about the update")\n'
        '    print("Debug output for developers")\n'
        '    if status == "Ready to ship":\n'
        '        return _("Already translated text")\n'
        '    message = f"Hello {user.name}, your order shipped"\n'
        '    labels = {"primary_label": "Track your package"}\n'
        "    return message\n"
    )

    def test_extracts_user_facing_strings(self, python_extractor: PythonExtractor) -> None:
        """Test that only user-facing constants and f-strings are extracted."""
        result = python_extractor.extract(self.SOURCE, "app/notify.py")

        assert _pairs(result.candidates) == [
            ("Welcome to the dashboard", CandidateKind.HEADING),
            ("Hello {name}, your order shipped", CandidateKind.TEXT),
            ("Track your package", CandidateKind.LABEL),
        ]

    def test_line_numbers(self, python_extractor: PythonExtractor) -> None:
        """Test that candidates carry the line of their literal."""
        result = python_extractor.extract(self.SOURCE, "app/notify.py")

        assert [
            candidate.source_location.line
            for candidate in result.candidates
            if candidate.source_location
        ] == [6, 15, 16]

    def test_keyword_argument_kind(self, python_extractor: PythonExtractor) -> None:
        """Test that keyword names drive the kind of their values."""
        result = python_extractor.extract(
            'render(button_text="Continue shopping", tooltip="Opens in a new tab")\n',
            "views.py",
        )

        assert _pairs(result.candidates) == [
            ("Continue shopping", CandidateKind.BUTTON),
            ("Opens in a new tab", CandidateKind.TITLE),
        ]

    def test_syntax_error_falls_back_to_line_scan(self, python_extractor: PythonExtractor) -> None:
        """Test that unparsable source is still scanned line by line."""
        source = "def broken(:\n    title = 'Broken page title'\n"

        result = python_extractor.extract(source, "broken.py")

        assert _pairs(result.candidates) == [("Broken page title", CandidateKind.HEADING)]


class TestGenericExtractor:
    """Line scan for other languages."""

    def test_go_source(self, generic_extractor: GenericExtractor) -> None:
        """Test that Go diagnostics and imports are skipped."""
        source = (
            "package main\n"
            "\n"
            'import "fmt"\n'
            "\n"
            "func main() {\n"
            '    fmt.Println("Starting server now")\n'
            '    title := "Welcome to the store"\n'
            "}\n"
        )

        result = generic_extractor.extract(source, "cmd/main.go")

        assert _pairs(result.candidates) == [("Welcome to the store", CandidateKind.HEADING)]

    def test_php_dollar_interpolation(self, generic_extractor: GenericExtractor) -> None:
        """Test that PHP variables in double quotes become placeholders."""
        source = (
            "<?php\n"
            "use App\\Models\\User;\n"
            "echo __('Already translated');\n"
            '$greeting = "Hello $name, welcome back";\n'
            "$raw = 'Price in $dollars today';\n"
        )

        result = generic_extractor.extract(source, "app/Greeting.php")

        assert [candidate.text for candidate in result.candidates] == [
            "Hello {name}, welcome back",
            "Price in $dollars today",
        ]
