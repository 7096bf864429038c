"""Failure stages for browser snapshot operations.

Playwright's own launch and navigation errors propagate unwrapped; the stage
tag is used where this package raises or reports a failure itself.
"""
from enum import Enum


class SnapshotStage(Enum):
    """Where in the snapshot flow a failure happened."""
    LAUNCH = "launch"           # starting the browser process
    NAVIGATION = "navigation"   # page.goto
    TAB = "tab"                 # acquiring a page from the browser
    SAVE = "save"               # PDF/HTML export and file write


class SnapshotError(Exception):
    """Exception carrying the SnapshotStage that raised it."""

    def __init__(self, stage: SnapshotStage, message: str = ""):
        self.stage = stage
        super().__init__(message or stage.value)


class BrowserNotLaunchedError(SnapshotError):
    """Raised when a tab is requested before any browser was launched."""

    def __init__(self, message: str = "No browser initialized yet"):
        super().__init__(SnapshotStage.TAB, message)
