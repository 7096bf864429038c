"""PDF export: screen-media A4 rendering with backgrounds and no margins."""
import logging

from ._files import write_bytes

log = logging.getLogger(__name__)

PDF_OPTIONS = {
    "print_background": True,
    "format": "A4",
    "margin": {"top": "0", "right": "0", "bottom": "0", "left": "0"},
}


async def save_as_pdf(page, destination: str) -> int:
    """Render *page* to PDF and write it to *destination*.

    Media is emulated as "screen" first so the PDF keeps the on-screen styling
    instead of the site's print stylesheet. Returns the number of bytes written.
    """
    await page.emulate_media(media="screen")
    data = await page.pdf(**PDF_OPTIONS)
    write_bytes(destination, data)
    log.info(f"Saved PDF ({len(data)} bytes): {destination}")
    return len(data)
