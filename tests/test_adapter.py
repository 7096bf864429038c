"""Tests for SiteAdapter protocol and the educative.io adapter."""
from snapshot_kit.adapter import SiteAdapter, EducativeAdapter, DEFAULT_ADAPTER


class MockAdapter:
    """Minimal mock adapter for testing."""
    name = "mock"
    origin = "https://example.com"
    asset_prefix = "/assets/"
    banner_selectors = ("#cookie-bar", ".gdpr")

    def should_inline(self, url): return url.startswith(self.asset_prefix)
    def resolve(self, url): return self.origin + url


def test_mock_adapter_is_site_adapter():
    assert isinstance(MockAdapter(), SiteAdapter)


def test_educative_adapter_is_site_adapter():
    assert isinstance(EducativeAdapter(), SiteAdapter)
    assert isinstance(DEFAULT_ADAPTER, EducativeAdapter)


def test_educative_should_inline():
    adapter = EducativeAdapter()
    assert adapter.should_inline("/api/image1.png")
    assert adapter.should_inline("/api/collection/123/image/456?page_type=x")
    assert not adapter.should_inline("/static/logo.svg")
    assert not adapter.should_inline("https://cdn.example.com/api/a.png")
    assert not adapter.should_inline("")


def test_educative_resolve():
    adapter = EducativeAdapter()
    assert adapter.resolve("/api/image1.png") == "https://www.educative.io/api/image1.png"


def test_educative_banner_selector():
    assert "#onetrust-banner-sdk" in EducativeAdapter.banner_selectors
