"""Source/target comparison: missing, stale and current translations."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from .history import AnnotatedEntry


class TranslationStatus(Enum):
    """Audit status of one source key in one locale."""
    MISSING = "MISSING"   # No translation for the key
    STALE = "STALE"       # Source changed after the translation was last edited
    CURRENT = "CURRENT"   # Translation is at least as recent as the source


@dataclass(frozen=True)
class ComparisonRecord:
    """Outcome for one source key."""
    source: AnnotatedEntry
    target: Optional[AnnotatedEntry]
    status: TranslationStatus

    @property
    def full_id(self) -> str:
        return self.source.full_id


class TranslationComparator:
    """
    Classifies source keys against a target locale.

    Only source keys are reported; keys present only in the target are
    ignored. A key is STALE only when the target's last change is strictly
    older than the source's, so simultaneous commits count as CURRENT.
    """

    def compare(
        self,
        source_entries: Sequence[AnnotatedEntry],
        target_entries: Sequence[AnnotatedEntry],
    ) -> List[ComparisonRecord]:
        """
        Compare two annotated entry sets for the same namespace.

        Args:
            source_entries: Entries of the source-language document
            target_entries: Entries of the target-language document

        Returns:
            One ComparisonRecord per source entry, in source order
        """
        targets: Dict[str, AnnotatedEntry] = {entry.full_id: entry for entry in target_entries}

        records = []
        for source in source_entries:
            target = targets.get(source.full_id)
            records.append(ComparisonRecord(
                source=source,
                target=target,
                status=self.classify(source, target),
            ))
        return records

    @staticmethod
    def classify(source: AnnotatedEntry, target: Optional[AnnotatedEntry]) -> TranslationStatus:
        """Status of a single source/target pair."""
        if target is None:
            return TranslationStatus.MISSING

        # Without history on either side staleness cannot be judged.
        if not source.has_history or not target.has_history:
            return TranslationStatus.CURRENT

        if target.last_change_timestamp < source.last_change_timestamp:
            return TranslationStatus.STALE
        return TranslationStatus.CURRENT
