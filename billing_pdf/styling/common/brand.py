# billing_pdf/styling/common/brand.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

logger = logging.getLogger(__name__)

REGULAR_FONT_FILE = "Brand-Regular.ttf"
BOLD_FONT_FILE = "Brand-Bold.ttf"
LOGO_FILE = "logo.png"


@dataclass(frozen=True)
class BrandAssets:
    font_regular: str = "Helvetica"
    font_bold: str = "Helvetica-Bold"
    logo_path: Optional[Path] = None


def register_brand_assets(brand_dir: Optional[Path]) -> BrandAssets:
    """
    Looks for Brand-Regular.ttf / Brand-Bold.ttf / logo.png in brand_dir.
    Anything missing falls back to the Helvetica core fonts and the letter logo.
    Use a TTF that carries the currency glyph (e.g. DejaVu Sans) when the symbol is not Latin-1.
    """
    if brand_dir is None:
        return BrandAssets()

    font_regular = "Helvetica"
    font_bold = "Helvetica-Bold"

    reg_font = brand_dir / REGULAR_FONT_FILE
    bold_font = brand_dir / BOLD_FONT_FILE
    logo_path = brand_dir / LOGO_FILE

    try:
        if reg_font.exists():
            pdfmetrics.registerFont(TTFont("Brand-Regular", str(reg_font)))
            font_regular = "Brand-Regular"
        if bold_font.exists():
            pdfmetrics.registerFont(TTFont("Brand-Bold", str(bold_font)))
            font_bold = "Brand-Bold"
    except Exception:
        logger.warning("Could not register brand fonts from %s, using Helvetica", brand_dir, exc_info=True)
        font_regular, font_bold = "Helvetica", "Helvetica-Bold"

    if not logo_path.exists():
        logger.warning("Brand logo not found at %s", logo_path)

    return BrandAssets(
        font_regular=font_regular,
        font_bold=font_bold,
        logo_path=logo_path if logo_path.exists() else None,
    )
