"""Tab: one browser page, its navigation, and its snapshot export."""
import logging
import os
import time

from playwright.async_api import Page

from ..adapter import DEFAULT_ADAPTER, SiteAdapter
from ..config import Configuration, SaveAs
from ..errors import SnapshotStage
from ..export.html import InlineStats, save_as_html
from ..export.pdf import save_as_pdf
from ..export.result import SaveResult, SaveStatus, destination_path

log = logging.getLogger(__name__)


class Tab:
    """Wrapper around a Playwright Page owned exclusively by this tab."""

    def __init__(self, page: Page, config: Configuration,
                 adapter: SiteAdapter = DEFAULT_ADAPTER) -> None:
        """Initialize the tab.

        Args:
            page: Playwright Page instance.
            config: Source of the navigation timeout, save format and delays.
            adapter: Site rules used by HTML export.
        """
        self._page = page
        self._config = config
        self._adapter = adapter
        self._timeout = config.http_timeout
        self._save_as = config.user_config.save_as

    @property
    def url(self) -> str:
        """Current page URL."""
        return self._page.url

    @property
    def page(self) -> Page:
        """Underlying Playwright page for advanced operations."""
        return self._page

    @property
    def save_as(self) -> SaveAs:
        return self._save_as

    async def goto(self, url: str, timeout: float | None = None,
                   wait_until: str = "domcontentloaded") -> None:
        """Navigate to *url*.

        Waits for DOMContentLoaded by default rather than the full load event.
        Playwright's TimeoutError/Error propagate unchanged.

        Args:
            url: Destination URL.
            timeout: Seconds; defaults to the configured http_timeout.
            wait_until: Playwright load state to wait for.
        """
        if timeout is None:
            timeout = self._timeout
        log.info(f"Navigating to: {url}")
        await self._page.goto(url, timeout=timeout * 1000, wait_until=wait_until)

    async def save_page(self, path: str, event_logger=None) -> SaveResult:
        """Save the page to ``path.pdf`` or ``path.html`` per the configured format.

        An existing destination is never overwritten: the call returns a
        SKIPPED result without touching the page. Export failures are logged
        and returned as a FAILED result.
        """
        destination = destination_path(path, self._save_as)
        if os.path.exists(destination):
            log.info(f"Page already exists. Path: {destination}")
            if event_logger is not None:
                event_logger.log_save_result(self.url, destination, SaveStatus.SKIPPED.value, 0.0)
            return SaveResult(SaveStatus.SKIPPED, destination, self._save_as)

        url = self.url
        if event_logger is not None:
            event_logger.log_save_start(url, destination, self._save_as.value)

        if self._save_as == SaveAs.PDF:
            result = await self._run_export(destination, self._save_pdf)
        else:
            result = await self._run_export(destination, self._save_html)

        if event_logger is not None:
            event_logger.log_save_result(
                url, destination, result.status.value, result.elapsed,
                error=result.error,
                stage=result.stage.value if result.stage else None,
                inlined=result.inline.inlined if result.inline else None,
                inline_failed=result.inline.failed if result.inline else None,
            )
        return result

    async def _run_export(self, destination: str, export) -> SaveResult:
        start = time.monotonic()
        try:
            stats = await export(destination)
        except Exception as e:
            log.warning(f"Error saving page as {self._save_as.value.upper()}: {e}")
            return SaveResult(
                SaveStatus.FAILED, destination, self._save_as,
                error=str(e) or type(e).__name__,
                stage=SnapshotStage.SAVE,
                elapsed=time.monotonic() - start,
            )
        return SaveResult(
            SaveStatus.SAVED, destination, self._save_as,
            elapsed=time.monotonic() - start,
            inline=stats,
        )

    async def _save_pdf(self, destination: str) -> None:
        await save_as_pdf(self._page, destination)

    async def _save_html(self, destination: str) -> InlineStats:
        return await save_as_html(
            self._page, destination, self._adapter,
            settle_delay=self._config.html_settle_delay,
            apply_delay=self._config.image_apply_delay,
        )

    async def close(self) -> None:
        """Close the underlying page."""
        await self._page.close()
