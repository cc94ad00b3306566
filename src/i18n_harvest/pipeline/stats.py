"""Aggregate counters for one harvest run."""

from __future__ import annotations

from collections import Counter
from typing_extensions import override

from ..classifier import RejectionReason
from ..extractors.base import ExtractionResult


class RunStatistics:
    """Statistics of an extraction or synchronization run."""

    def __init__(self) -> None:
        self.files_processed: int = 0
        self.files_skipped: int = 0
        self.candidates_accepted: int = 0
        self.candidates_rejected: int = 0
        self.rejection_reasons: Counter[RejectionReason] = Counter()
        self.files_by_extension: Counter[str] = Counter()
        self.new_keys: int = 0
        self.fallback_keys: int = 0
        self.key_conflicts: int = 0
        self.files_written: int = 0

    @property
    def total_files(self) -> int:
        return self.files_processed + self.files_skipped

    @property
    def acceptance_rate(self) -> float:
        """Accepted candidates as a percentage of all classified candidates."""
        total = self.candidates_accepted + self.candidates_rejected
        if total == 0:
            return 0.0
        return (self.candidates_accepted / total) * 100.0

    def record_file(self, extension: str, result: ExtractionResult) -> None:
        """Count one successfully extracted file."""
        self.files_processed += 1
        self.files_by_extension[extension] += 1
        self.candidates_accepted += result.accepted_count
        self.candidates_rejected += result.rejected_count
        self.rejection_reasons.update(result.rejections)

    def record_skip(self) -> None:
        self.files_skipped += 1

    def rejection_summary(self) -> str:
        """Rejection counts by reason, most frequent first."""
        if not self.rejection_reasons:
            return "none"
        return ", ".join(
            f"{reason.value}={count}" for reason, count in self.rejection_reasons.most_common()
        )

    def as_dict(self) -> dict[str, object]:
        """Plain-data view for reports."""
        return {
            "files_processed": self.files_processed,
            "files_skipped": self.files_skipped,
            "candidates_accepted": self.candidates_accepted,
            "candidates_rejected": self.candidates_rejected,
            "rejection_reasons": {
                reason.value: count for reason, count in sorted(
                    self.rejection_reasons.items(), key=lambda item: item[0].value
                )
            },
            "files_by_extension": dict(sorted(self.files_by_extension.items())),
            "new_keys": self.new_keys,
            "fallback_keys": self.fallback_keys,
            "key_conflicts": self.key_conflicts,
            "files_written": self.files_written,
        }

    @override
    def __str__(self) -> str:
        """String representation of run statistics."""
        return (
            f"Harvest Results: "
            f"{self.files_processed} files processed, "
            f"{self.files_skipped} skipped, "
            f"{self.candidates_accepted} accepted, "
            f"{self.candidates_rejected} rejected "
            f"({self.acceptance_rate:.1f}% accepted), "
            f"{self.new_keys} new keys"
        )
