"""Tests for BrowserManager lifecycle with a mocked Playwright driver."""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from snapshot_kit.browser import manager as manager_mod
from snapshot_kit.browser.manager import BrowserManager, SPECIAL_ARGS
from snapshot_kit.browser.tab import Tab
from snapshot_kit.config import Configuration, UserConfig
from snapshot_kit.errors import BrowserNotLaunchedError


def _make_context(pages=None):
    context = MagicMock()
    context.pages = list(pages or [])
    context.new_page = AsyncMock(side_effect=lambda: MagicMock(name="new_page"))
    context.close = AsyncMock()
    return context


@pytest.fixture
def driver(monkeypatch):
    """Patch async_playwright(); returns the fake Playwright object."""
    context = _make_context()
    playwright = MagicMock()
    playwright.chromium.launch_persistent_context = AsyncMock(return_value=context)
    playwright.stop = AsyncMock()
    playwright.context = context

    starter = MagicMock()
    starter.start = AsyncMock(return_value=playwright)
    factory = MagicMock(return_value=starter)
    monkeypatch.setattr(manager_mod, "async_playwright", factory)
    playwright.factory = factory
    return playwright


@pytest.fixture
def config(tmp_path):
    return Configuration(root_dir=str(tmp_path), user_config=UserConfig(headless=True))


def test_get_launches_lazily_once(driver, config):
    manager = BrowserManager(config)
    launch = driver.chromium.launch_persistent_context

    async def run():
        first = await manager.get()
        second = await manager.get()
        return first, second

    first, second = asyncio.run(run())

    assert first is second is driver.context
    launch.assert_awaited_once()
    args, kwargs = launch.await_args
    assert args == (config.user_data_dir,)
    assert kwargs == {"headless": True}
    assert manager.is_headless()
    assert not manager.is_special()


def test_get_headless_override(driver, config):
    manager = BrowserManager(config)
    asyncio.run(manager.get(headless=False))

    assert driver.chromium.launch_persistent_context.await_args.kwargs["headless"] is False
    assert manager.is_headless() is False


def test_make_special_twice_closes_and_launches_once(driver, config):
    manager = BrowserManager(config)
    launch = driver.chromium.launch_persistent_context

    async def run():
        await manager.get()
        launch.reset_mock()
        await manager.make_special()
        await manager.make_special()

    asyncio.run(run())

    assert driver.context.close.await_count == 1
    assert launch.await_count == 1
    kwargs = launch.await_args.kwargs
    assert kwargs["args"] == SPECIAL_ARGS
    assert kwargs["no_viewport"] is True
    assert manager.is_special()


def test_make_special_without_browser_does_not_close(driver, config):
    manager = BrowserManager(config)
    asyncio.run(manager.make_special(headless=False))

    driver.context.close.assert_not_awaited()
    driver.chromium.launch_persistent_context.assert_awaited_once()
    assert manager.is_special()
    assert manager.is_headless() is False


def test_get_tab_without_browser_fails(driver, config):
    manager = BrowserManager(config)
    with pytest.raises(BrowserNotLaunchedError):
        asyncio.run(manager.get_tab())
    driver.context.new_page.assert_not_awaited()


def test_new_tab_without_browser_fails(driver, config):
    manager = BrowserManager(config)
    with pytest.raises(BrowserNotLaunchedError):
        asyncio.run(manager.new_tab())


def test_get_tab_opens_page_when_none(driver, config):
    manager = BrowserManager(config)

    async def run():
        await manager.get()
        return await manager.get_tab()

    tab = asyncio.run(run())
    assert isinstance(tab, Tab)
    driver.context.new_page.assert_awaited_once()


def test_get_tab_reuses_first_page(driver, config):
    existing = MagicMock(name="existing")
    driver.context.pages = [existing, MagicMock(name="second")]
    manager = BrowserManager(config)

    async def run():
        await manager.get()
        return await manager.get_tab()

    tab = asyncio.run(run())
    assert tab.page is existing
    driver.context.new_page.assert_not_awaited()


def test_new_tab_always_opens_page(driver, config):
    driver.context.pages = [MagicMock(name="existing")]
    manager = BrowserManager(config)

    async def run():
        await manager.get()
        return await manager.new_tab(), await manager.new_tab()

    first, second = asyncio.run(run())
    assert first.page is not second.page
    assert driver.context.new_page.await_count == 2


def test_close_without_browser_is_noop(driver, config):
    manager = BrowserManager(config)
    asyncio.run(manager.close())
    driver.context.close.assert_not_awaited()


def test_close_then_get_relaunches(driver, config):
    manager = BrowserManager(config)
    launch = driver.chromium.launch_persistent_context

    async def run():
        await manager.get()
        await manager.close()
        await manager.get()

    asyncio.run(run())
    assert driver.context.close.await_count == 1
    assert driver.stop.await_count == 1
    assert launch.await_count == 2
    assert driver.factory.call_count == 2


def test_close_resets_special_mode(driver, config):
    manager = BrowserManager(config)

    async def run():
        await manager.make_special()
        await manager.close()

    asyncio.run(run())
    assert not manager.is_special()


def test_launch_failure_propagates(driver, config):
    driver.chromium.launch_persistent_context.side_effect = RuntimeError("Executable doesn't exist")
    manager = BrowserManager(config)

    with pytest.raises(RuntimeError, match="Executable"):
        asyncio.run(manager.get())
    driver.stop.assert_awaited_once()

    with pytest.raises(BrowserNotLaunchedError):
        asyncio.run(manager.get_tab())


def test_async_context_manager_closes(driver, config):
    async def run():
        async with BrowserManager(config) as manager:
            await manager.get()

    asyncio.run(run())
    driver.context.close.assert_awaited_once()
    driver.stop.assert_awaited_once()
