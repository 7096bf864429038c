"""export: PDF and self-contained HTML snapshot writers."""
from .html import (  # noqa: F401
    InlineStats,
    build_srcset,
    fetch_data_url,
    inline_images,
    parse_srcset,
    remove_banners,
    save_as_html,
    to_data_url,
)
from .pdf import PDF_OPTIONS, save_as_pdf  # noqa: F401
from .result import SaveResult, SaveStatus, destination_path  # noqa: F401
