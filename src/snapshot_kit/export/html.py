"""Self-contained HTML export.

Removes the site's cookie banner, then replaces every ``<img>`` ``src`` and
``srcset`` candidate the adapter marks for inlining with a base64 ``data:``
URL, so the saved markup renders without the origin server.

Assets are fetched through the page's browser context (``page.context.request``)
so they carry the same cookies as the page itself. Within one image all
candidates are fetched concurrently; a failed fetch leaves that candidate's
original URL in place and never aborts the others.
"""
import asyncio
import base64
import logging
from dataclasses import dataclass

from ..errors import SnapshotError, SnapshotStage
from ._files import write_text

log = logging.getLogger(__name__)

_REMOVE_BANNERS_JS = """
(selectors) => {
    let removed = 0;
    for (const selector of selectors) {
        document.querySelectorAll(selector).forEach((el) => { el.remove(); removed++; });
    }
    return removed;
}
"""

# Tags each image with a temporary index so updates land on the same element
# even if the DOM shifts between collect and apply.
_COLLECT_IMAGES_JS = """
() => Array.from(document.querySelectorAll('img')).map((img, index) => {
    img.setAttribute('data-snapshot-index', String(index));
    return { index, src: img.getAttribute('src'), srcset: img.getAttribute('srcset') };
})
"""

_APPLY_IMAGES_JS = """
(updates) => {
    for (const update of updates) {
        const img = document.querySelector(`img[data-snapshot-index="${update.index}"]`);
        if (!img) continue;
        if (update.src !== null) img.setAttribute('src', update.src);
        if (update.srcset !== null) img.setAttribute('srcset', update.srcset);
    }
    document.querySelectorAll('img[data-snapshot-index]').forEach(
        (img) => img.removeAttribute('data-snapshot-index'));
}
"""


@dataclass
class InlineStats:
    """Counters from one inline_images() pass."""
    images: int = 0
    inlined: int = 0
    failed: int = 0


def parse_srcset(srcset: str) -> list[tuple[str, str]]:
    """Split a srcset into ``(url, descriptor)`` pairs, in order.

    Follows the HTML candidate parsing rules: a URL is a run of non-whitespace
    (so the comma inside a ``data:`` URL stays put), trailing commas end the
    candidate, otherwise the descriptor runs to the next comma. Descriptor is
    ``""`` when the candidate has none. Empty entries are dropped.
    """
    candidates = []
    pos, end = 0, len(srcset)
    while pos < end:
        while pos < end and (srcset[pos].isspace() or srcset[pos] == ","):
            pos += 1
        if pos >= end:
            break

        start = pos
        while pos < end and not srcset[pos].isspace():
            pos += 1
        url = srcset[start:pos]
        if url.endswith(","):
            candidates.append((url.rstrip(","), ""))
            continue

        comma = srcset.find(",", pos)
        if comma == -1:
            comma = end
        candidates.append((url, srcset[pos:comma].strip()))
        pos = comma + 1
    return candidates


def build_srcset(candidates: list[tuple[str, str]]) -> str:
    return ", ".join(f"{url} {desc}" if desc else url for url, desc in candidates)


def to_data_url(body: bytes, content_type: str = "") -> str:
    """Encode *body* as a base64 data URL, dropping any MIME parameters."""
    mime = (content_type or "").split(";")[0].strip() or "application/octet-stream"
    return f"data:{mime};base64,{base64.b64encode(body).decode('ascii')}"


async def fetch_data_url(request, url: str) -> str:
    """GET *url* with a Playwright APIRequestContext and return it as a data URL.

    Raises SnapshotError on a non-2xx response.
    """
    response = await request.get(url)
    try:
        if not response.ok:
            raise SnapshotError(SnapshotStage.SAVE, f"HTTP {response.status} fetching {url}")
        body = await response.body()
        return to_data_url(body, response.headers.get("content-type", ""))
    finally:
        await response.dispose()


async def _inline_urls(request, adapter, urls: list[str], cache: dict[str, str],
                       stats: InlineStats) -> list[str]:
    """Return *urls* with every inlinable one replaced by a data URL.

    Fetches run concurrently; failures keep the original URL.
    """

    async def one(url: str) -> str:
        if not adapter.should_inline(url):
            return url
        if url in cache:
            return cache[url]
        data_url = await fetch_data_url(request, adapter.resolve(url))
        cache[url] = data_url
        return data_url

    results = await asyncio.gather(*(one(u) for u in urls), return_exceptions=True)

    out = []
    for url, result in zip(urls, results):
        if isinstance(result, BaseException):
            stats.failed += 1
            log.warning(f"Could not inline {url}: {result}")
            out.append(url)
            continue
        if result != url:
            stats.inlined += 1
        out.append(result)
    return out


async def inline_images(page, adapter) -> InlineStats:
    """Rewrite inlinable ``<img>`` sources on *page* into data URLs."""
    images = await page.evaluate(_COLLECT_IMAGES_JS)
    request = page.context.request
    stats = InlineStats(images=len(images))
    cache: dict[str, str] = {}
    updates = []

    for image in images:
        src = image.get("src")
        srcset = image.get("srcset")
        candidates = parse_srcset(srcset) if srcset else []

        wants_src = bool(src) and adapter.should_inline(src)
        wants_srcset = any(adapter.should_inline(url) for url, _ in candidates)
        if not wants_src and not wants_srcset:
            continue

        urls = ([src] if wants_src else []) + [url for url, _ in candidates]
        resolved = await _inline_urls(request, adapter, urls, cache, stats)

        new_src = resolved.pop(0) if wants_src else None
        new_srcset = None
        if wants_srcset:
            new_srcset = build_srcset(
                [(url, desc) for url, (_, desc) in zip(resolved, candidates)]
            )
        updates.append({"index": image["index"], "src": new_src, "srcset": new_srcset})

    await page.evaluate(_APPLY_IMAGES_JS, updates)
    return stats


async def remove_banners(page, adapter) -> int:
    removed = await page.evaluate(_REMOVE_BANNERS_JS, list(adapter.banner_selectors))
    if removed:
        log.debug(f"Removed {removed} banner element(s) on {page.url}")
    return removed


async def save_as_html(page, destination: str, adapter, *,
                       settle_delay: float = 5.0,
                       apply_delay: float = 2.0) -> InlineStats:
    """Clean up and inline *page*, then write its markup to *destination*.

    *settle_delay* lets dynamic content finish before the DOM is touched;
    *apply_delay* lets the rewritten images decode before serializing.
    Errors propagate to the caller; nothing is written if one is raised
    before the final write.
    """
    if settle_delay > 0:
        await asyncio.sleep(settle_delay)

    await remove_banners(page, adapter)
    stats = await inline_images(page, adapter)

    if apply_delay > 0:
        await asyncio.sleep(apply_delay)

    html = await page.content()
    write_text(destination, html)
    log.info(
        f"Saved HTML ({stats.inlined} inlined, {stats.failed} failed, "
        f"{stats.images} images): {destination}"
    )
    return stats
