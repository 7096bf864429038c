"""Orchestrator: one-shot "open, navigate, save" for a single URL.

Processes exactly one page under the caller's control; looping over URLs,
retries and scheduling stay with the caller.
"""
import logging

from .export.result import SaveResult

log = logging.getLogger(__name__)


async def save_url(manager, url: str, path: str, *,
                   new_tab: bool = False,
                   timeout: float | None = None,
                   event_logger=None) -> SaveResult:
    """Snapshot *url* to ``path.pdf``/``path.html`` using *manager*'s browser.

    Launches the browser if needed. With ``new_tab=False`` the first open
    page is reused and left open; a fresh tab is always closed afterwards.
    Navigation errors propagate; save failures come back as a FAILED result.

    Args:
        manager: BrowserManager owning the browser.
        url: Page to visit.
        path: Destination without extension.
        new_tab: Open a dedicated tab instead of reusing the first page.
        timeout: Navigation timeout in seconds (defaults to config).
        event_logger: Optional SnapshotEventLogger for telemetry.
    """
    await manager.get()
    tab = await (manager.new_tab() if new_tab else manager.get_tab())
    try:
        await tab.goto(url, timeout=timeout)
        result = await tab.save_page(path, event_logger=event_logger)
    finally:
        if new_tab:
            await tab.close()

    log.info(f"{result.status.value}: {url} -> {result.path}")
    return result
