"""
Harvest run orchestration.

A run reads every locale store, extracts candidates from all source files,
assigns keys, synchronizes the target locales and finally commits all
locale files as one batch. File reading and extraction are independent
per file and run concurrently in worker threads via asyncio.to_thread();
key registration is funnelled through this coordinator in sorted file
order, so the key store sees a single writer and key assignment does not
depend on thread scheduling.

Steps:
1. Read base, target and legacy locale trees (a parse failure aborts here)
2. Discover and extract source files concurrently
3. Register candidates and referenced keys in the key store
4. Synchronize target locales from the new base tree
5. Plan every locale file, then write, compare (check mode) or do nothing (dry run)
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from ..config.schema import HarvestConfig, IgnorePatternSet
from ..extractors.base import ExtractedCandidate, ExtractionResult
from ..extractors.registry import ExtractorRegistry
from ..store.key_store import KeyStore
from ..store.locale_io import Layout, LocaleStorage
from ..store.namespaces import NamespaceResolver
from ..store.synchronizer import Synchronizer
from ..store.tree import LocaleTree
from ..utils.exceptions import KeyPathConflictError, SourceReadError
from .stats import RunStatistics

logger = logging.getLogger(__name__)

# Lookups such as t('Settings.button.save') that name a full key
KEY_REFERENCE = re.compile(
    r"""(?<![\w$.])(?:\$?tc?|\$?te|i18n\.t|i18n\.global\.t|__|trans|trans_choice|@lang)\s*\(\s*"""
    r"""(['"`])([A-Z][\w-]*(?:\.[\w-]+){2,})\1"""
)


@dataclass(frozen=True)
class KeyAssignment:
    """A candidate and the key it was registered under."""

    full_key: str
    candidate: ExtractedCandidate
    file: str


@dataclass
class FileOutcome:
    """Result of reading and extracting one source file."""

    path: Path
    relative_path: str
    result: ExtractionResult | None = None
    referenced_keys: list[str] = field(default_factory=list)
    error: SourceReadError | None = None


@dataclass
class LocaleSnapshot:
    """Every locale tree as read at the start of a run."""

    layout: Layout
    base: LocaleTree
    targets: dict[str, LocaleTree]
    seeds: dict[str, LocaleTree]


@dataclass
class RunReport:
    """Outcome of a run."""

    statistics: RunStatistics
    assignments: list[KeyAssignment] = field(default_factory=list)
    planned_writes: dict[Path, str] = field(default_factory=dict)
    pending: list[Path] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)

    @property
    def has_pending_changes(self) -> bool:
        return bool(self.pending)


class HarvestRunner:
    """
    Runs extraction and synchronization for one project.

    Args:
        project_root: Directory that source roots and the locale directory
            are relative to
        config: Validated configuration
        ignore_patterns: Merged ignore-pattern set
        registry: Extractor registry; the default registry when omitted
    """

    def __init__(
        self,
        project_root: Path,
        config: HarvestConfig,
        ignore_patterns: IgnorePatternSet | None = None,
        registry: ExtractorRegistry | None = None,
    ) -> None:
        self.project_root: Path = project_root
        self.config: HarvestConfig = config
        self.ignore_patterns: IgnorePatternSet = ignore_patterns or IgnorePatternSet()
        self.registry: ExtractorRegistry = registry or ExtractorRegistry.default(
            self.ignore_patterns
        )
        self.storage: LocaleStorage = LocaleStorage(
            project_root / config.paths.locale_dir,
            layout=config.locales.layout,
            group_split_threshold=config.locales.group_split_threshold,
        )
        self.synchronizer: Synchronizer = Synchronizer()

    def load_locales(self) -> LocaleSnapshot:
        """
        Read every locale store before anything is written.

        Raises:
            StructuralParseError: If any locale file fails to parse
        """
        base_locale = self.config.locales.base
        layout = self.storage.layout_for(base_locale)
        targets = self.config.locales.targets or [
            locale for locale in self.storage.discover_locales() if locale != base_locale
        ]

        base = self.storage.read(base_locale, layout)
        target_trees: dict[str, LocaleTree] = {}
        seeds: dict[str, LocaleTree] = {}
        for locale in targets:
            if locale == base_locale:
                continue
            target_trees[locale] = self.storage.read(locale, layout)
            legacy = self.storage.read_legacy(locale, layout)
            if legacy is not None:
                seeds[locale] = legacy

        logger.info(
            f"Loaded base locale '{base_locale}' ({layout} layout) "
            + f"and {len(target_trees)} target locales"
        )
        return LocaleSnapshot(layout, base, target_trees, seeds)

    def discover_files(self) -> list[Path]:
        """
        List every source file an extractor handles, in sorted order.

        Excluded directories are pruned during the walk.
        """
        excluded = set(self.config.extraction.exclude_dirs)
        locale_dir = (self.project_root / self.config.paths.locale_dir).resolve()
        found: set[Path] = set()

        for source_root in self.config.paths.source_roots:
            root = self.project_root / source_root
            if not root.is_dir():
                logger.warning(f"Source root does not exist: {root}")
                continue

            for dirpath, dirnames, filenames in os.walk(root):
                current = Path(dirpath)
                dirnames[:] = sorted(
                    name
                    for name in dirnames
                    if name not in excluded and (current / name).resolve() != locale_dir
                )
                for filename in filenames:
                    if self.registry.can_handle(filename):
                        found.add(current / filename)

        return sorted(found)

    def relative_name(self, path: Path) -> str:
        try:
            return path.relative_to(self.project_root).as_posix()
        except ValueError:
            return path.as_posix()

    def read_source(self, path: Path) -> str:
        """
        Read one source file.

        Raises:
            SourceReadError: If the file is too large, unreadable or not UTF-8
        """
        limit = self.config.extraction.max_file_size_bytes
        try:
            size = path.stat().st_size
            if size > limit:
                raise SourceReadError(
                    f"File exceeds {limit} bytes ({size} bytes): {path}", path=path
                )
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f"Cannot read {path}: {e}", path=path) from e

    def extract_file(self, path: Path) -> FileOutcome:
        """Read and extract one file; recoverable errors are captured, not raised."""
        relative = self.relative_name(path)
        try:
            source_text = self.read_source(path)
        except SourceReadError as e:
            return FileOutcome(path, relative, error=e)

        result = self.registry.extract(source_text, relative)
        references = sorted({match.group(2) for match in KEY_REFERENCE.finditer(source_text)})
        return FileOutcome(path, relative, result=result, referenced_keys=references)

    async def extract_all(self, files: list[Path]) -> list[FileOutcome]:
        """
        Extract files concurrently with a bounded number of worker threads.

        Returns:
            list[FileOutcome]: Outcomes in the order of ``files``
        """
        semaphore = asyncio.Semaphore(self.config.extraction.concurrency)

        async def worker(path: Path) -> FileOutcome:
            async with semaphore:
                return await asyncio.to_thread(self.extract_file, path)

        return list(await asyncio.gather(*(worker(path) for path in files)))

    def register_outcomes(
        self,
        outcomes: list[FileOutcome],
        store: KeyStore,
        resolver: NamespaceResolver,
        statistics: RunStatistics,
    ) -> list[KeyAssignment]:
        """Feed extraction outcomes into the key store, one file at a time."""
        assignments: list[KeyAssignment] = []
        referenced: set[str] = set()

        for outcome in sorted(outcomes, key=lambda item: item.relative_path):
            if outcome.error is not None or outcome.result is None:
                logger.warning(f"Skipping {outcome.relative_path}: {outcome.error}")
                statistics.record_skip()
                continue

            name = PurePosixPath(outcome.relative_path).name.lower()
            extension = ".blade.php" if name.endswith(".blade.php") else PurePosixPath(name).suffix
            statistics.record_file(extension, outcome.result)
            referenced.update(outcome.referenced_keys)

            if not outcome.result.candidates:
                continue

            namespace = resolver.resolve(outcome.relative_path)
            for candidate in outcome.result.candidates:
                try:
                    full_key = store.register(namespace, candidate.kind, candidate.text)
                except KeyPathConflictError as e:
                    logger.warning(f"Key conflict in {outcome.relative_path}: {e}")
                    statistics.key_conflicts += 1
                    continue
                assignments.append(KeyAssignment(full_key, candidate, outcome.relative_path))

            logger.debug(
                f"{outcome.relative_path}: {outcome.result.accepted_count} accepted, "
                + f"{outcome.result.rejected_count} rejected -> {namespace}"
            )

        for full_key in sorted(referenced):
            try:
                _ = store.ensure_key(full_key)
            except KeyPathConflictError as e:
                logger.warning(f"Cannot add fallback for referenced key: {e}")
                statistics.key_conflicts += 1

        return assignments

    def plan_writes(self, snapshot: LocaleSnapshot, base_tree: LocaleTree) -> dict[Path, str]:
        """Plan the files of the base locale and every synchronized target."""
        planned = self.storage.plan(self.config.locales.base, base_tree, snapshot.layout)
        completed = self.synchronizer.synchronize_all(base_tree, snapshot.targets, snapshot.seeds)
        for locale, tree in completed.items():
            planned.update(self.storage.plan(locale, tree, snapshot.layout))
        return planned

    def finish(self, report: RunReport, *, dry_run: bool, check: bool) -> RunReport:
        """Compare or commit the planned writes, then log the summary."""
        report.pending = self.storage.pending_changes(report.planned_writes)

        if check:
            for path in report.pending:
                logger.info(f"Would update {self.relative_name(path)}")
        elif dry_run:
            logger.info(f"Dry run: {len(report.pending)} locale files would change")
        else:
            report.written = self.storage.commit(report.planned_writes)
            report.statistics.files_written = len(report.written)
            logger.info(f"Wrote {len(report.written)} locale files")

        return report

    async def extract(self, *, dry_run: bool = False, check: bool = False) -> RunReport:
        """
        Run a full extraction.

        Args:
            dry_run: Compute everything but write nothing
            check: Like dry run, and report which files would change

        Returns:
            RunReport: Statistics, key assignments and planned or written files

        Raises:
            StructuralParseError: If a locale store fails to parse; nothing is written
        """
        statistics = RunStatistics()
        snapshot = self.load_locales()

        store = KeyStore(
            snapshot.base,
            max_slug_words=self.config.extraction.slug_max_words,
            max_slug_length=self.config.extraction.slug_max_length,
        )
        resolver = NamespaceResolver(snapshot.base, self.config.extraction.namespace_roots)

        files = self.discover_files()
        logger.info(f"Extracting {len(files)} source files")
        outcomes = await self.extract_all(files)

        assignments = self.register_outcomes(outcomes, store, resolver, statistics)
        statistics.new_keys = len(store.created_keys)
        statistics.fallback_keys = len(store.fallback_keys)

        report = RunReport(
            statistics=statistics,
            assignments=assignments,
            planned_writes=self.plan_writes(snapshot, store.tree()),
        )
        report = self.finish(report, dry_run=dry_run, check=check)

        logger.info(str(statistics))
        logger.info(f"Rejections by reason: {statistics.rejection_summary()}")
        if statistics.files_skipped:
            logger.warning(f"{statistics.files_skipped} files were skipped")
        return report

    async def sync(self, *, dry_run: bool = False, check: bool = False) -> RunReport:
        """
        Synchronize target locales from the current base store only.

        Raises:
            StructuralParseError: If a locale store fails to parse; nothing is written
        """
        snapshot = self.load_locales()
        report = RunReport(
            statistics=RunStatistics(),
            planned_writes=self.plan_writes(snapshot, snapshot.base),
        )
        return self.finish(report, dry_run=dry_run, check=check)
