from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .models import ColumnProfile, DatasetOverview, Table
from .profile import profile_columns, summarize_overview

logger = logging.getLogger(__name__)


@dataclass
class AnalysisSession:
    """
    The single active dataset.

    A new upload replaces the previous table outright and profiles are
    recomputed from scratch; nothing is merged or persisted. The insight
    text starts empty and is filled in separately, so loading never waits
    on the LLM.
    """

    table: Table = field(default_factory=list)
    profiles: list[ColumnProfile] = field(default_factory=list)
    source_name: Optional[str] = None
    # Identifies one particular upload; two different files may share a name.
    source_id: Optional[str] = None
    insight: str = ""

    @property
    def is_loaded(self) -> bool:
        return len(self.table) > 0

    @property
    def row_count(self) -> int:
        return len(self.table)

    def is_current(self, source_id: Optional[str]) -> bool:
        """True if ``source_id`` names the upload that is already loaded."""
        return self.is_loaded and source_id is not None and source_id == self.source_id

    def load(
        self,
        table: Table,
        source_name: Optional[str] = None,
        source_id: Optional[str] = None,
    ) -> list[ColumnProfile]:
        self.table = table
        self.profiles = profile_columns(table)
        self.source_name = source_name
        self.source_id = source_id
        self.insight = ""
        logger.info("Loaded %s: %d rows, %d columns", source_name or "table", len(table), len(self.profiles))
        return self.profiles

    def reset(self) -> None:
        self.table = []
        self.profiles = []
        self.source_name = None
        self.source_id = None
        self.insight = ""

    def overview(self) -> DatasetOverview:
        return summarize_overview(self.profiles, self.row_count)
