"""browser: Playwright browser lifecycle and tab wrappers."""
from .manager import BrowserManager, SPECIAL_ARGS  # noqa: F401
from .tab import Tab  # noqa: F401
