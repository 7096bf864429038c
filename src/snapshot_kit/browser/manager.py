"""BrowserManager: lifecycle of one persistent Chromium context.

The manager is constructed and owned by the caller; at most one browser is
live per manager. Switching to special mode closes the current browser before
launching a new one, so two never coexist. There is no lock: concurrent calls
into the same manager are not supported.
"""
import logging
import os

from playwright.async_api import BrowserContext, Playwright, async_playwright

from ..adapter import DEFAULT_ADAPTER, SiteAdapter
from ..config import Configuration
from ..errors import BrowserNotLaunchedError
from .tab import Tab

log = logging.getLogger(__name__)

# Fixed window width for interactive sessions; height 0 lets the OS pick.
SPECIAL_ARGS = ["--window-size=1920,0"]


class BrowserManager:
    """Hands out Tabs from a lazily launched persistent browser context."""

    def __init__(self, config: Configuration, adapter: SiteAdapter = DEFAULT_ADAPTER) -> None:
        self._config = config
        self._adapter = adapter
        self._user_data_dir = config.user_data_dir
        self._headless = config.user_config.headless
        self._special = False
        self._playwright: Playwright | None = None
        self._browser: BrowserContext | None = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    @property
    def user_data_dir(self) -> str:
        return self._user_data_dir

    async def _launch(self, headless: bool, special: bool = False) -> None:
        os.makedirs(self._user_data_dir, exist_ok=True)
        if self._playwright is None:
            self._playwright = await async_playwright().start()

        options = {"headless": headless}
        if special:
            options["args"] = list(SPECIAL_ARGS)
            options["no_viewport"] = True

        log.info(f"Launching browser (headless={headless}, special={special})")
        try:
            self._browser = await self._playwright.chromium.launch_persistent_context(
                self._user_data_dir, **options
            )
        except Exception:
            await self._stop_driver()
            raise
        self._headless = headless

    async def _stop_driver(self) -> None:
        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as e:
                log.warning(f"Failed to stop Playwright driver cleanly: {e}")
            self._playwright = None

    async def get(self, headless: bool | None = None) -> BrowserContext:
        """Return the live browser, launching it first if needed."""
        if self._browser is None:
            await self._launch(self._headless if headless is None else headless)
        return self._browser

    async def make_special(self, headless: bool | None = None) -> None:
        """Relaunch the browser with the fixed special window size.

        No-op if already in special mode.
        """
        if self._special:
            return

        # A normal-mode browser has to go before the special one starts
        if self._browser is not None:
            await self._close_browser()

        await self._launch(self._headless if headless is None else headless, special=True)
        self._special = True

    async def get_tab(self) -> Tab:
        """Wrap the first open page, opening one only if none exist.

        Raises:
            BrowserNotLaunchedError: If no browser was launched yet.
        """
        if self._browser is None:
            raise BrowserNotLaunchedError()

        pages = self._browser.pages
        page = pages[0] if pages else await self._browser.new_page()
        return Tab(page, self._config, self._adapter)

    async def new_tab(self) -> Tab:
        """Open a fresh page and wrap it.

        Raises:
            BrowserNotLaunchedError: If no browser was launched yet.
        """
        if self._browser is None:
            raise BrowserNotLaunchedError()

        page = await self._browser.new_page()
        return Tab(page, self._config, self._adapter)

    async def _close_browser(self) -> None:
        try:
            await self._browser.close()
        finally:
            self._browser = None
            self._special = False

    async def close(self) -> None:
        """Close the browser and stop the Playwright driver."""
        if self._browser is None:
            log.info("No browser initialized yet")
            await self._stop_driver()
            return

        log.info("Closing browser")
        try:
            await self._close_browser()
        finally:
            await self._stop_driver()

    def is_special(self) -> bool:
        return self._special

    def is_headless(self) -> bool:
        return self._headless
