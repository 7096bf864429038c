"""snapshot-kit: save web pages as PDF or self-contained HTML with Playwright.

Provides a caller-owned browser manager, tab wrappers with PDF/HTML export,
a site-adapter protocol for site-specific cleanup, and JSONL save telemetry.
"""
from .adapter import SiteAdapter, EducativeAdapter, DEFAULT_ADAPTER  # noqa: F401
from .browser import BrowserManager, Tab  # noqa: F401
from .config import Configuration, UserConfig, SaveAs, load_config  # noqa: F401
from .errors import SnapshotStage, SnapshotError, BrowserNotLaunchedError  # noqa: F401
from .export import SaveResult, SaveStatus  # noqa: F401
from .orchestrator import save_url  # noqa: F401
