"""Receipt PDF rendering utilities."""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Tuple

from jinja2 import Environment, FileSystemLoader, select_autoescape

TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"
_env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR), autoescape=select_autoescape()
)

logger = logging.getLogger("api.pdf")


def _load_weasyprint():
    """Return the weasyprint module, or ``None`` if it cannot be loaded.

    WeasyPrint raises ``OSError`` at import time when its native libraries
    (Pango, Cairo) are missing.
    """

    try:
        return importlib.import_module("weasyprint")
    except (ImportError, OSError) as exc:
        logger.warning("weasyprint unavailable, serving HTML: %s", exc)
        return None


def render_template(template_name: str, context: dict) -> Tuple[bytes, str]:
    """Render ``context`` using ``template_name`` to PDF or HTML."""

    html = _env.get_template(template_name).render(**context)
    weasyprint = _load_weasyprint()
    if weasyprint is None:
        return html.encode("utf-8"), "text/html"
    pdf_bytes = weasyprint.HTML(string=html, base_url=str(TEMPLATE_DIR)).write_pdf()
    return pdf_bytes, "application/pdf"


def render_receipt(context: dict) -> Tuple[bytes, str]:
    """Render a receipt context to PDF or HTML.

    If WeasyPrint can be loaded, a PDF is returned with ``application/pdf``
    mimetype. Otherwise, the rendered HTML bytes are returned with
    ``text/html`` mimetype.
    """

    return render_template("receipt.html", context)
