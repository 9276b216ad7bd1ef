"""
Scrape run model.

Per-call record of a scrape: the states it went through, what it found, and
the per-item / per-record failures it absorbed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ScrapeState(str, Enum):
    INIT = "init"
    PAGE_LOADED = "page_loaded"
    CONSENT_RESOLVED = "consent_resolved"
    REVIEWS_TAB_ENSURED = "reviews_tab_ensured"
    ITEMS_LOCATED = "items_located"
    ITERATING = "iterating"
    PERSISTED = "persisted"
    FAILED = "failed"
    CLOSED = "closed"


@dataclass
class ScrapeDiagnostic:
    """One absorbed failure."""
    kind: str  # "extraction_skip", "extraction_error" or "persistence_failure"
    index: int  # 1-based position of the item / record
    message: str


@dataclass
class ScrapeReport:
    """
    Outcome of one scrape call.

    inserted is the authoritative work-done count: records actually
    persisted, not records parsed.
    """
    competitor_id: str
    target_url: str
    states: List[ScrapeState] = field(default_factory=lambda: [ScrapeState.INIT])
    consent_dismissed: bool = False
    reviews_tab_clicked: bool = False
    items_found: int = 0
    parsed: int = 0
    inserted: int = 0
    diagnostics: List[ScrapeDiagnostic] = field(default_factory=list)

    @property
    def state(self) -> ScrapeState:
        return self.states[-1]

    def transition(self, state: ScrapeState) -> None:
        self.states.append(state)

    def add_diagnostic(self, kind: str, index: int, message: str) -> None:
        self.diagnostics.append(ScrapeDiagnostic(kind=kind, index=index, message=message))

    def diagnostics_of(self, kind: Optional[str] = None) -> List[ScrapeDiagnostic]:
        return [d for d in self.diagnostics if kind is None or d.kind == kind]
