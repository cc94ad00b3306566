"""Tests for extractor selection, kind side tables and the module-level extract()."""

from __future__ import annotations

import pytest

from i18n_harvest.config.schema import IgnorePatternSet
from i18n_harvest.extractors import CandidateKind, ExtractorRegistry, extract
from i18n_harvest.extractors.kinds import (
    infer_kind_from_attribute,
    infer_kind_from_callee,
    infer_kind_from_identifier,
    infer_kind_from_tag,
)
from i18n_harvest.extractors.script import GenericExtractor, PythonExtractor, ScriptExtractor
from i18n_harvest.extractors.template import BladeExtractor, TemplateExtractor


class TestExtractorRegistry:
    """First-match selection in priority order."""

    @pytest.mark.parametrize(
        ("file_hint", "expected"),
        [
            ("resources/views/home.blade.php", BladeExtractor),
            ("app/Http/Controller.php", GenericExtractor),
            ("src/components/App.vue", TemplateExtractor),
            ("templates/card.hbs", TemplateExtractor),
            ("app/views.py", PythonExtractor),
            ("src/Banner.tsx", ScriptExtractor),
            ("src/util.mjs", ScriptExtractor),
            ("cmd/main.go", GenericExtractor),
        ],
    )
    def test_extractor_for(
        self, registry: ExtractorRegistry, file_hint: str, expected: type
    ) -> None:
        """Test that each file is handled by the expected extractor."""
        assert type(registry.extractor_for(file_hint)) is expected

    def test_unhandled_file(self, registry: ExtractorRegistry) -> None:
        """Test that unknown files are not handled and extract to nothing."""
        assert registry.can_handle("README.md") is False
        result = registry.extract("# Welcome to the project", "README.md")
        assert result.candidates == []
        assert result.rejected_count == 0

    def test_suffixes(self, registry: ExtractorRegistry) -> None:
        """Test that the registry reports every handled suffix."""
        assert {"vue", "blade.php", "py", "tsx", "go"} <= registry.suffixes

    def test_ignore_attributes_shared(self) -> None:
        """Test that ignored attributes reach every markup extractor."""
        registry = ExtractorRegistry.default(IgnorePatternSet(ignore_attributes=["title"]))

        result = registry.extract(
            '<button title="Close the dialog">Close window</button>', "page.html"
        )

        assert [candidate.text for candidate in result.candidates] == ["Close window"]


class TestModuleExtract:
    """The convenience function taking a dialect hint."""

    def test_dialect_name(self) -> None:
        """Test a bare dialect name."""
        candidates = extract("<template><h1>Team settings</h1></template>", "vue")

        assert [(c.text, c.kind) for c in candidates] == [
            ("Team settings", CandidateKind.HEADING)
        ]

    def test_suffix_hint(self) -> None:
        """Test a dotted suffix."""
        candidates = extract('const buttonLabel = "Get started"\n', ".tsx")

        assert [c.text for c in candidates] == ["Get started"]

    def test_ignore_patterns_applied(self) -> None:
        """Test that the ignore set reaches the classifier."""
        candidates = extract(
            "<p>Acme Corporation</p><p>Contact our team</p>",
            "html",
            IgnorePatternSet(exact_insensitive=["acme corporation"]),
        )

        assert [c.text for c in candidates] == ["Contact our team"]


class TestKindTables:
    """Side-table lookups."""

    @pytest.mark.parametrize(
        ("tag", "kind"),
        [
            ("h3", CandidateKind.HEADING),
            ("button", CandidateKind.BUTTON),
            ("el-button", CandidateKind.BUTTON),
            ("SubmitButton", CandidateKind.BUTTON),
            ("router-link", CandidateKind.LINK),
            ("label", CandidateKind.LABEL),
            ("textarea", CandidateKind.PLACEHOLDER),
            ("ToastMessage", CandidateKind.TOAST),
            ("ConfirmDialog", CandidateKind.HEADING),
            ("div", CandidateKind.TEXT),
            (None, CandidateKind.TEXT),
        ],
    )
    def test_tags(self, tag: str | None, kind: CandidateKind) -> None:
        """Test tag and component names."""
        assert infer_kind_from_tag(tag) is kind

    @pytest.mark.parametrize(
        ("attribute", "kind"),
        [
            ("placeholder", CandidateKind.PLACEHOLDER),
            ("ALT", CandidateKind.ALT),
            ("aria-label", CandidateKind.ARIA_LABEL),
            ("title", CandidateKind.TITLE),
            ("label", CandidateKind.LABEL),
            ("value", CandidateKind.TEXT),
        ],
    )
    def test_attributes(self, attribute: str, kind: CandidateKind) -> None:
        """Test attribute names."""
        assert infer_kind_from_attribute(attribute) is kind

    @pytest.mark.parametrize(
        ("identifier", "kind"),
        [
            ("searchPlaceholder", CandidateKind.PLACEHOLDER),
            ("ariaLabel", CandidateKind.ARIA_LABEL),
            ("tooltipText", CandidateKind.TITLE),
            ("PAGE_HEADER", CandidateKind.HEADING),
            ("fieldLabel", CandidateKind.LABEL),
            ("ctaText", CandidateKind.BUTTON),
            ("notificationBody", CandidateKind.TOAST),
            ("alt_text", CandidateKind.ALT),
            ("footerLink", CandidateKind.LINK),
            ("description", CandidateKind.TEXT),
        ],
    )
    def test_identifiers(self, identifier: str, kind: CandidateKind) -> None:
        """Test declared names."""
        assert infer_kind_from_identifier(identifier) is kind

    @pytest.mark.parametrize(
        ("callee", "kind"),
        [
            ("toast", CandidateKind.TOAST),
            ("toast.error", CandidateKind.TOAST),
            ("this.$notify", CandidateKind.TOAST),
            ("$toast", CandidateKind.TOAST),
            ("this.$toast", CandidateKind.TOAST),
            ("$q.notify", CandidateKind.TOAST),
            ("console.log", None),
            ("render", None),
        ],
    )
    def test_callees(self, callee: str, kind: CandidateKind | None) -> None:
        """Test called functions."""
        assert infer_kind_from_callee(callee) is kind
