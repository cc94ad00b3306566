"""
Integration tests for complete harvest runs.

These tests build small projects on disk and run extraction end to end:
source discovery, extraction, key assignment, target synchronization and
locale file writes, including the failure and idempotence guarantees.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from i18n_harvest.config.schema import HarvestConfig
from i18n_harvest.pipeline.runner import HarvestRunner
from i18n_harvest.utils.exceptions import SourceReadError, StructuralParseError
from tests.utils.test_helpers import (
    create_test_config,
    read_json,
    snapshot_directory,
    write_files,
    write_locale,
)

PROJECT_FILES: dict[str, str] = {
    "src/components/settings/ProfileForm.vue": (
        "<template>\n"
        "  <section>\n"
        "    <h2>Profile settings</h2>\n"
        '    <input placeholder="Enter your name">\n'
        "    <button>{{ $t('Settings.button.save_profile') }}</button>\n"
        "  </section>\n"
        "</template>\n"
        "\n"
        '<script setup lang="ts">\n'
        "const pageTitle = 'Edit your profile'\n"
        "</script>\n"
    ),
    "src/pages/dashboard.ts": "const emptyMessage = 'No reports yet'\n",
    "src/node_modules/widget/index.js": "const title = 'Vendored heading text'\n",
}

EXPECTED_BASE: dict[str, object] = {
    "Dashboard": {"text": {"no_reports_yet": "No reports yet"}},
    "Settings": {
        "button": {"save_profile": "Save profile"},
        "heading": {
            "edit_your_profile": "Edit your profile",
            "profile_settings": "Profile settings",
        },
        "placeholder": {"enter_your_name": "Enter your name"},
    },
}


@pytest.fixture
def project(project_root: Path) -> Path:
    _ = write_files(project_root, PROJECT_FILES)
    return project_root


@pytest.fixture
def locale_dir(project: Path) -> Path:
    return project / "i18n" / "locales"


class TestHarvestRun:
    """Full extraction runs in the single-file layout."""

    @pytest.mark.asyncio
    async def test_extract_writes_base_and_targets(
        self, project: Path, locale_dir: Path, harvest_config: HarvestConfig
    ) -> None:
        """Test that the base store gets new keys and the target is filled."""
        report = await HarvestRunner(project, harvest_config).extract()

        assert read_json(locale_dir / "en.json") == EXPECTED_BASE
        assert read_json(locale_dir / "de.json") == EXPECTED_BASE
        assert sorted(path.name for path in report.written) == ["de.json", "en.json"]

        statistics = report.statistics
        assert statistics.files_processed == 2
        assert statistics.files_skipped == 0
        assert statistics.new_keys == 4
        assert statistics.fallback_keys == 1
        assert statistics.files_written == 2

    @pytest.mark.asyncio
    async def test_assignments_carry_files(
        self, project: Path, harvest_config: HarvestConfig
    ) -> None:
        """Test that every assignment records its key and source file."""
        report = await HarvestRunner(project, harvest_config).extract(dry_run=True)

        assert [(a.file, a.full_key) for a in report.assignments] == [
            ("src/components/settings/ProfileForm.vue", "Settings.heading.profile_settings"),
            ("src/components/settings/ProfileForm.vue", "Settings.placeholder.enter_your_name"),
            ("src/components/settings/ProfileForm.vue", "Settings.heading.edit_your_profile"),
            ("src/pages/dashboard.ts", "Dashboard.text.no_reports_yet"),
        ]

    @pytest.mark.asyncio
    async def test_second_run_is_byte_identical(
        self, project: Path, locale_dir: Path, harvest_config: HarvestConfig
    ) -> None:
        """Test that re-running on unchanged sources changes nothing."""
        runner = HarvestRunner(project, harvest_config)
        _ = await runner.extract()
        before = snapshot_directory(locale_dir)

        report = await runner.extract()

        assert snapshot_directory(locale_dir) == before
        assert report.written == []
        assert report.statistics.new_keys == 0
        assert report.statistics.fallback_keys == 0

    @pytest.mark.asyncio
    async def test_existing_translations_preserved(
        self, project: Path, locale_dir: Path, harvest_config: HarvestConfig
    ) -> None:
        """Test that target values and extra target keys survive a run."""
        _ = write_locale(
            locale_dir / "de.json",
            {
                "Settings": {"heading": {"profile_settings": "Profileinstellungen"}},
                "Legacy": {"text": {"old": ""}},
            },
        )

        _ = await HarvestRunner(project, harvest_config).extract()

        german = read_json(locale_dir / "de.json")
        settings = german["Settings"]
        assert isinstance(settings, dict)
        assert settings["heading"] == {
            "edit_your_profile": "Edit your profile",
            "profile_settings": "Profileinstellungen",
        }
        assert german["Legacy"] == {"text": {"old": ""}}

    @pytest.mark.asyncio
    async def test_existing_key_reused(
        self, project: Path, locale_dir: Path, harvest_config: HarvestConfig
    ) -> None:
        """Test that a text already stored under a custom slug keeps that key."""
        _ = write_locale(
            locale_dir / "en.json", {"Dashboard": {"text": {"empty_state": "No reports yet"}}}
        )

        report = await HarvestRunner(project, harvest_config).extract()

        assert read_json(locale_dir / "en.json")["Dashboard"] == {
            "text": {"empty_state": "No reports yet"}
        }
        assert "Dashboard.text.empty_state" in [a.full_key for a in report.assignments]

    @pytest.mark.asyncio
    async def test_malformed_base_aborts_without_writes(
        self, project: Path, locale_dir: Path, harvest_config: HarvestConfig
    ) -> None:
        """Test that a structural parse error stops the run before any write."""
        broken = locale_dir / "en.json"
        _ = broken.write_text('{"Settings": [', encoding="utf-8")

        with pytest.raises(StructuralParseError):
            _ = await HarvestRunner(project, harvest_config).extract()

        assert broken.read_text(encoding="utf-8") == '{"Settings": ['
        assert not (locale_dir / "de.json").exists()

    @pytest.mark.asyncio
    async def test_malformed_target_aborts_without_writes(
        self, project: Path, locale_dir: Path, harvest_config: HarvestConfig
    ) -> None:
        """Test that a broken target store also prevents writing the base store."""
        _ = (locale_dir / "de.json").write_text('{"a": 1}', encoding="utf-8")

        with pytest.raises(StructuralParseError):
            _ = await HarvestRunner(project, harvest_config).extract()

        assert not (locale_dir / "en.json").exists()

    @pytest.mark.asyncio
    async def test_check_mode_writes_nothing(
        self, project: Path, locale_dir: Path, harvest_config: HarvestConfig
    ) -> None:
        """Test that check mode reports pending files without touching disk."""
        report = await HarvestRunner(project, harvest_config).extract(check=True)

        assert report.has_pending_changes is True
        assert sorted(path.name for path in report.pending) == ["de.json", "en.json"]
        assert report.written == []
        assert list(locale_dir.iterdir()) == []


class TestSkippedFiles:
    """Per-file failures are recoverable."""

    @pytest.mark.asyncio
    async def test_oversized_and_non_utf8_files_skipped(self, project: Path) -> None:
        """Test that unreadable files are counted and the rest still processed."""
        config = create_test_config(
            locales={"base": "en", "layout": "single"},
            extraction={"max_file_size_bytes": 400},
        )
        big = "<template><p>Far too long to process</p></template>\n" + "<!-- pad -->\n" * 60
        _ = write_files(project, {"src/components/Huge.vue": big})
        binary = project / "src" / "components" / "Broken.vue"
        _ = binary.write_bytes(b"<template><p>Caf\xe9 menu</p></template>")

        report = await HarvestRunner(project, config).extract()

        assert report.statistics.files_skipped == 2
        assert report.statistics.files_processed == 2
        assert read_json(project / "i18n" / "locales" / "en.json") == EXPECTED_BASE

    def test_read_source_errors(self, project: Path, harvest_config: HarvestConfig) -> None:
        """Test that read failures surface as source read errors."""
        runner = HarvestRunner(project, harvest_config)

        with pytest.raises(SourceReadError):
            _ = runner.read_source(project / "src" / "missing.vue")


class TestDiscovery:
    """Source discovery."""

    def test_excluded_dirs_and_unknown_files(
        self, project: Path, harvest_config: HarvestConfig
    ) -> None:
        """Test that excluded directories and unhandled suffixes are not listed."""
        _ = write_files(project, {"src/README.md": "# Notes", "src/dist/bundle.js": "x"})

        files = HarvestRunner(project, harvest_config).discover_files()

        assert [path.relative_to(project).as_posix() for path in files] == [
            "src/components/settings/ProfileForm.vue",
            "src/pages/dashboard.ts",
        ]


class TestDeterminism:
    """Key assignment does not depend on worker scheduling."""

    @pytest.mark.asyncio
    async def test_collisions_follow_path_order(self, project_root: Path) -> None:
        """Test that colliding slugs are numbered in sorted file order."""
        _ = write_files(
            project_root,
            {
                "src/components/home/Zeta.vue": "<template><h2>Welcome aboard</h2></template>",
                "src/components/home/Alpha.vue": "<template><h2>Welcome back</h2></template>",
            },
        )
        config = create_test_config(
            locales={"base": "en", "layout": "single"},
            extraction={"concurrency": 8, "slug_max_words": 1},
        )

        _ = await HarvestRunner(project_root, config).extract()

        assert read_json(project_root / "i18n" / "locales" / "en.json") == {
            "Home": {"heading": {"welcome": "Welcome back", "welcome_2": "Welcome aboard"}}
        }


class TestGroupedLayout:
    """Runs against a per-namespace directory layout."""

    @pytest.mark.asyncio
    async def test_grouped_files(self, project: Path, locale_dir: Path) -> None:
        """Test that each namespace group gets its own file per locale."""
        config = create_test_config(
            locales={"base": "en", "targets": ["de"], "layout": "grouped"},
        )

        _ = await HarvestRunner(project, config).extract()

        assert read_json(locale_dir / "en" / "dashboard.json") == {
            "Dashboard": EXPECTED_BASE["Dashboard"]
        }
        assert read_json(locale_dir / "de" / "settings.json") == {
            "Settings": EXPECTED_BASE["Settings"]
        }

    @pytest.mark.asyncio
    async def test_legacy_file_seeds_target(self, project: Path, locale_dir: Path) -> None:
        """Test that a legacy single file next to a grouped directory seeds translations."""
        (locale_dir / "en").mkdir()
        _ = write_locale(
            locale_dir / "de.json",
            {"Dashboard": {"text": {"no_reports_yet": "Noch keine Berichte"}}},
        )
        config = create_test_config(locales={"base": "en", "targets": ["de"]})

        _ = await HarvestRunner(project, config).extract()

        assert read_json(locale_dir / "de" / "dashboard.json") == {
            "Dashboard": {"text": {"no_reports_yet": "Noch keine Berichte"}}
        }

    @pytest.mark.asyncio
    async def test_sync_only(self, project_root: Path) -> None:
        """Test that sync completes targets from the stored base tree."""
        locale_dir = project_root / "i18n" / "locales"
        _ = write_locale(locale_dir / "en" / "common.json", {"Common": {"text": {"hi": "Hi"}}})
        (locale_dir / "fr").mkdir()
        config = create_test_config(locales={"base": "en"})

        report = await HarvestRunner(project_root, config).sync()

        assert read_json(locale_dir / "fr" / "common.json") == {"Common": {"text": {"hi": "Hi"}}}
        assert [path.relative_to(locale_dir).as_posix() for path in report.written] == [
            "fr/common.json"
        ]
