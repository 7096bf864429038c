"""Outcome of a single save operation."""
from dataclasses import dataclass
from enum import Enum

from ..config import SaveAs
from ..errors import SnapshotStage
from .html import InlineStats


class SaveStatus(str, Enum):
    SAVED = "saved"       # file written
    SKIPPED = "skipped"   # destination already existed, nothing done
    FAILED = "failed"     # export raised; see error/stage


@dataclass
class SaveResult:
    status: SaveStatus
    path: str
    format: SaveAs
    error: str = ""
    stage: SnapshotStage | None = None
    elapsed: float = 0.0
    inline: InlineStats | None = None   # HTML saves only

    @property
    def ok(self) -> bool:
        return self.status in (SaveStatus.SAVED, SaveStatus.SKIPPED)


def destination_path(path: str, save_as: SaveAs) -> str:
    """``path`` with the extension for *save_as* appended."""
    return f"{path}.{save_as.value}"
