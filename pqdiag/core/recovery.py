# pqdiag/core/recovery.py
from dataclasses import dataclass
from enum import Enum

# Checked in order against the lowercased disabled-reason text.
RECOVERABLE_PHRASES = ("out of paper", "media-empty", "media empty")


class RecoveryOutcome(Enum):
    ELIGIBLE = "eligible"
    SKIPPED_JOBS_PRESENT = "skipped_jobs_present"
    SKIPPED_REASON_UNRECOGNIZED = "skipped_reason_unrecognized"


@dataclass(frozen=True)
class RecoveryAdvice:
    outcome: RecoveryOutcome
    matched_phrase: str | None = None

    @property
    def eligible(self) -> bool:
        return self.outcome is RecoveryOutcome.ELIGIBLE

    @property
    def message(self) -> str:
        if self.outcome is RecoveryOutcome.ELIGIBLE:
            return ("Auto-Recovery eligible: queue is empty and reason looks "
                    f"recoverable ({self.matched_phrase}).")
        if self.outcome is RecoveryOutcome.SKIPPED_JOBS_PRESENT:
            return "Auto-Recovery skipped: queue is not empty (active/pending jobs present)."
        return "Auto-Recovery skipped: reason not recognized as safely recoverable."

    @property
    def hint(self) -> str:
        if self.outcome is RecoveryOutcome.ELIGIBLE:
            return "Would run: cupsenable + cupsaccept for this queue (not auto-executed)."
        if self.outcome is RecoveryOutcome.SKIPPED_REASON_UNRECOGNIZED:
            return "Tip: If this is truly stale (e.g., you added paper), manually re-enable via CUPS."
        return "Cancel or let the pending jobs finish before re-enabling the queue."


def match_recoverable_phrase(detail_text: str) -> str | None:
    lowered = detail_text.lower()
    for phrase in RECOVERABLE_PHRASES:
        if phrase in lowered:
            return phrase
    return None


def assess_recovery(queue_empty: bool, detail_text: str) -> RecoveryAdvice:
    """Decide whether re-enabling a disabled queue is safe to recommend.

    Only advises; nothing is executed here.
    """
    if not queue_empty:
        return RecoveryAdvice(RecoveryOutcome.SKIPPED_JOBS_PRESENT)
    if phrase := match_recoverable_phrase(detail_text):
        return RecoveryAdvice(RecoveryOutcome.ELIGIBLE, phrase)
    return RecoveryAdvice(RecoveryOutcome.SKIPPED_REASON_UNRECOGNIZED)
