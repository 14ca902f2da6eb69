"""Result models for copy/paste transfers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional


TransferStatus = Literal["success", "failed", "skipped"]


@dataclass(slots=True)
class TransferResult:
    """Result for a single file of a cp/pst operation."""

    source: str
    destination: Optional[str]
    status: TransferStatus

    error_type: Optional[str] = None
    error_message: Optional[str] = None
    error_details: Optional[dict[str, Any]] = None
    error: Optional[BaseException] = field(default=None, repr=False, compare=False)

    # Local files left behind by a failed store (kept for recovery).
    leftover_paths: list[str] = field(default_factory=list)


@dataclass(slots=True)
class PasteResult:
    """Aggregate result for pst: every item attempted, in clip order."""

    clip_name: str
    destination_drive: str
    results: list[TransferResult] = field(default_factory=list)

    @property
    def errors(self) -> list[TransferResult]:
        return [r for r in self.results if r.status == "failed"]

    @property
    def summary(self) -> dict[str, int]:
        summary: dict[str, int] = {"success": 0, "failed": 0, "skipped": 0}
        for r in self.results:
            summary[r.status] = summary.get(r.status, 0) + 1
        return summary
