"""SiteAdapter Protocol: the site-specific knobs of HTML export.

The export code never hard-codes a site's origin, asset paths, or banner
selectors; it asks the adapter. ``EducativeAdapter`` is the one site the
package ships with and the default for every Tab.
"""
from typing import Protocol, runtime_checkable


@runtime_checkable
class SiteAdapter(Protocol):
    """Protocol that site adapters must implement."""

    name: str               # "educative"
    origin: str             # "https://www.educative.io"
    asset_prefix: str       # "/api/"
    banner_selectors: tuple[str, ...]

    def should_inline(self, url: str) -> bool:
        """True if *url* must be fetched and replaced by a data URL."""
        ...

    def resolve(self, url: str) -> str:
        """Turn a page-relative asset URL into an absolute fetchable one."""
        ...


class EducativeAdapter:
    """educative.io: OneTrust cookie banner, images served from ``/api/``."""

    name = "educative"
    origin = "https://www.educative.io"
    asset_prefix = "/api/"
    banner_selectors = ("#onetrust-banner-sdk",)

    def should_inline(self, url: str) -> bool:
        return bool(url) and url.startswith(self.asset_prefix)

    def resolve(self, url: str) -> str:
        return self.origin + url


DEFAULT_ADAPTER = EducativeAdapter()
