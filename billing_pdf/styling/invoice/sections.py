# billing_pdf/styling/invoice/sections.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from reportlab.lib import colors
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from billing_pdf.config import Settings
from billing_pdf.styling.common.brand import BrandAssets
from billing_pdf.styling.invoice import terms
from billing_pdf.styling.invoice.formatting import (
    attendance_id,
    clean,
    clip_line,
    contact_line,
    created_by_name,
    customer_name,
    format_date,
    format_datetime,
    invoice_type_label,
    item_base_fee,
    item_date_range,
    item_description,
    item_duration,
    item_fee,
    money,
    organization_address,
    payment_modes_text,
    percent,
    place_of_supply,
    sales_rep_name,
    summary_subtotal,
    wrap_paragraphs,
    wrap_text,
)
from billing_pdf.styling.invoice.model import ZERO, Invoice, InvoiceItem

logger = logging.getLogger(__name__)


# =========================
# Page + layout constants
# =========================

PAGE_MARGIN_L = 50
PAGE_MARGIN_R = 50
PAGE_MARGIN_T = 50
PAGE_MARGIN_B = 50

CONTENT_BOTTOM = PAGE_MARGIN_B
PAGE_MARKER_Y = 24
PAGE_MARKER_FS = 7

# Header band
HEADER_BAND_H = 124
HEADER_LOGO_BOX = 56
HEADER_NAME_FS = 18
HEADER_ADDR_FS = 8
HEADER_TITLE_FS = 20
HEADER_GAP_BELOW = 18

# Info block
INFO_FS = 9
INFO_LINE_H = 15
INFO_LABEL_PAD = 4
INFO_GAP_BELOW = 16
INFO_COL_GUTTER = 6

# Item table
TABLE_HEAD_H = 22
TABLE_HEAD_FS = 8.5
ROW_PAD = 8
ROW_MIN_H = 34
ROW_DESC_FS = 9
ROW_SUB_FS = 7.5
ROW_TEXT_FS = 8.5
ROW_LINE_H = 11
COL_FRACTIONS = (0.40, 0.25, 0.12, 0.23)
CELL_PAD = 6

# Summary
SUMMARY_W = 230
SUMMARY_FS = 9
SUMMARY_TOTAL_FS = 13
SUMMARY_LINE_H = 16
SECTION_GAP = 20

# Terms
TERMS_HEADING_FS = 12
TERMS_TITLE_FS = 8.5
TERMS_TEXT_FS = 8.5
TERMS_LINE_H = 11
ACK_FS = 7.5
ACK_LINE_H = 10
ACK_PAD = 8

# Footer
FOOTER_FS = 8
FOOTER_THANKS_FS = 9.5
FOOTER_LINE_H = 13
NOTES_FS = 8.5

# Colors
BRAND_RED = colors.HexColor("#DC2626")
BRAND_RED_RULE = colors.HexColor("#EF4444")
BRAND_RED_TINT = colors.HexColor("#FEE2E2")
TEXT_DARK = colors.HexColor("#111827")
TEXT_BODY = colors.HexColor("#374151")
TEXT_MUTED = colors.HexColor("#4B5563")
TEXT_FAINT = colors.HexColor("#6B7280")
DISCOUNT_RED = colors.HexColor("#DC2626")
PAID_GREEN = colors.HexColor("#15803D")
TABLE_HEAD_BG = colors.HexColor("#F3F4F6")
RULE_STRONG = colors.HexColor("#D1D5DB")
RULE_LIGHT = colors.HexColor("#E5E7EB")
ACK_BG = colors.HexColor("#F9FAFB")


@dataclass
class PageSpec:
    w: float
    h: float


@dataclass
class DrawContext:
    """
    One canvas session. Section emitters draw through this and call
    ensure_space() before anything that might run off the page.
    """
    c: canvas.Canvas
    ps: PageSpec
    settings: Settings
    brand: BrandAssets
    total_pages: Optional[int] = None
    page_no: int = 1
    # redraws a repeating header (e.g. table head) after a page break
    on_new_page: Optional[Callable[["DrawContext", float], float]] = field(default=None, repr=False)

    @property
    def x0(self) -> float:
        return PAGE_MARGIN_L

    @property
    def x1(self) -> float:
        return self.ps.w - PAGE_MARGIN_R

    @property
    def content_w(self) -> float:
        return self.x1 - self.x0

    @property
    def top(self) -> float:
        return self.ps.h - PAGE_MARGIN_T

    @property
    def regular(self) -> str:
        return self.brand.font_regular

    @property
    def bold(self) -> str:
        return self.brand.font_bold

    def money(self, x) -> str:
        return money(x, self.settings.currency_symbol)

    def draw_page_marker(self) -> None:
        label = f"Page {self.page_no}"
        if self.total_pages:
            label += f" of {self.total_pages}"
        self.c.setFillColor(TEXT_FAINT)
        self.c.setFont(self.regular, PAGE_MARKER_FS)
        self.c.drawRightString(self.x1, PAGE_MARKER_Y, label)
        self.c.setFillColor(colors.black)

    def new_page(self) -> float:
        self.draw_page_marker()
        self.c.showPage()
        self.page_no += 1
        y = self.top
        if self.on_new_page is not None:
            y = self.on_new_page(self, y)
        return y

    def ensure_space(self, y: float, need: float) -> float:
        if (y - need) < CONTENT_BOTTOM:
            return self.new_page()
        return y


SectionEmitter = Callable[[DrawContext, Invoice, float], float]


# =========================
# 1. Header band
# =========================

def document_title(invoice: Invoice) -> str:
    # both variants print "Tax Invoice" today; see terms.PRO_FORMA_TITLE
    return terms.PRO_FORMA_TITLE if invoice.is_pro_forma else terms.DOCUMENT_TITLE


def _draw_logo_box(ctx: DrawContext, invoice: Invoice, x: float, y_top: float) -> None:
    c = ctx.c
    box = HEADER_LOGO_BOX
    c.setFillColor(colors.white)
    c.rect(x, y_top - box, box, box, stroke=0, fill=1)

    if ctx.brand.logo_path is not None:
        try:
            img = ImageReader(str(ctx.brand.logo_path))
            c.drawImage(
                img,
                x + 4,
                y_top - box + 4,
                width=box - 8,
                height=box - 8,
                preserveAspectRatio=True,
                anchor="c",
                mask="auto",
            )
            return
        except Exception:
            logger.warning("Could not draw logo %s, using letter", ctx.brand.logo_path, exc_info=True)

    name = clean(invoice.organization.name) if invoice.organization else ""
    letter = name[:1] or terms.FALLBACK_LOGO_LETTER
    c.setFillColor(TEXT_DARK)
    c.setFont(ctx.bold, 22)
    c.drawCentredString(x + box / 2.0, y_top - box / 2.0 - 8, letter)


def draw_header_band(ctx: DrawContext, invoice: Invoice, y: float) -> float:
    """
    Full-bleed red band at the top of the first page. `y` is ignored; the band
    always sits against the top edge. Returns y just below the band.
    """
    c = ctx.c
    ps = ctx.ps
    band_bottom = ps.h - HEADER_BAND_H

    c.setFillColor(BRAND_RED)
    c.rect(0, band_bottom, ps.w, HEADER_BAND_H, stroke=0, fill=1)

    logo_top = ps.h - 18
    _draw_logo_box(ctx, invoice, ctx.x0, logo_top)

    text_x = ctx.x0 + HEADER_LOGO_BOX + 14
    org = invoice.organization
    name = clean(org.name) if org else ""

    c.setFillColor(colors.white)
    c.setFont(ctx.bold, HEADER_NAME_FS)
    name = clip_line(name or terms.FALLBACK_COMPANY_NAME, ctx.bold, HEADER_NAME_FS, ctx.x1 - text_x)
    c.drawString(text_x, ps.h - 40, name)

    address = organization_address(org)
    if address:
        c.setFillColor(BRAND_RED_TINT)
        c.setFont(ctx.regular, HEADER_ADDR_FS)
        yy = ps.h - 56
        for ln in wrap_text(address, ctx.regular, HEADER_ADDR_FS, ctx.x1 - text_x)[:2]:
            c.drawString(text_x, yy, ln)
            yy -= 10

    rule_y = ps.h - 84
    c.setStrokeColor(BRAND_RED_RULE)
    c.setLineWidth(0.8)
    c.line(ctx.x0, rule_y, ctx.x1, rule_y)

    c.setFillColor(colors.white)
    c.setFont(ctx.bold, HEADER_TITLE_FS)
    c.drawCentredString(ps.w / 2.0, rule_y - 28, document_title(invoice))

    c.setFillColor(colors.black)
    c.setStrokeColor(colors.black)
    return band_bottom - HEADER_GAP_BELOW


# =========================
# 2. Customer / invoice info
# =========================

def customer_lines(invoice: Invoice, settings: Settings) -> List[Tuple[str, str]]:
    member = invoice.member
    lines = [("Customer Name:", customer_name(member))]
    if member and member.email:
        lines.append(("Email:", member.email))
    if member and member.phone:
        lines.append(("Mobile:", member.phone))
    lines.append(("Attendance ID:", attendance_id(member)))
    lines.append(("Place of Supply:", place_of_supply(invoice, settings.fallback_region)))
    return lines


def invoice_meta_lines(invoice: Invoice, settings: Settings) -> List[Tuple[str, str]]:
    tz = settings.display_tz
    lines = [
        ("Invoice Type:", invoice_type_label(invoice.type)),
        ("Date, Time:", format_datetime(invoice.created_at, tz)),
        ("Invoice Number:", invoice.invoice_number or "-"),
        ("Date of Invoice:", format_date(invoice.date_of_invoice or invoice.created_at, tz)),
    ]
    if invoice.due_date:
        lines.append(("Due Date:", format_date(invoice.due_date, tz)))

    creator = created_by_name(invoice)
    if invoice.created_by:
        lines.append(("Created by:", creator))

    rep = sales_rep_name(invoice)
    if (invoice.member and invoice.member.sales_rep) or invoice.created_by:
        lines.append(("Sales Rep:", rep or "-"))
    return lines


def draw_info_block(ctx: DrawContext, invoice: Invoice, y: float) -> float:
    c = ctx.c
    left = customer_lines(invoice, ctx.settings)
    right = invoice_meta_lines(invoice, ctx.settings)

    need = max(len(left), len(right)) * INFO_LINE_H + INFO_GAP_BELOW
    y = ctx.ensure_space(y, need)
    # each column keeps to its own half
    col_w = ctx.content_w / 2.0 - INFO_COL_GUTTER

    yl = y
    for label, value in left:
        c.setFillColor(TEXT_MUTED)
        c.setFont(ctx.regular, INFO_FS)
        c.drawString(ctx.x0, yl, label)
        label_w = stringWidth(label, ctx.regular, INFO_FS) + INFO_LABEL_PAD
        value = clip_line(value, ctx.bold, INFO_FS, col_w - label_w)
        c.setFillColor(TEXT_DARK)
        c.setFont(ctx.bold, INFO_FS)
        c.drawString(ctx.x0 + label_w, yl, value)
        yl -= INFO_LINE_H

    yr = y
    for label, value in right:
        label_w = stringWidth(label, ctx.regular, INFO_FS) + INFO_LABEL_PAD
        value = clip_line(value, ctx.bold, INFO_FS, col_w - label_w)
        c.setFillColor(TEXT_DARK)
        c.setFont(ctx.bold, INFO_FS)
        c.drawRightString(ctx.x1, yr, value)
        lx = ctx.x1 - stringWidth(value, ctx.bold, INFO_FS) - INFO_LABEL_PAD
        c.setFillColor(TEXT_MUTED)
        c.setFont(ctx.regular, INFO_FS)
        c.drawRightString(lx, yr, label)
        yr -= INFO_LINE_H

    y_bottom = min(yl, yr) + INFO_LINE_H - 10
    c.setStrokeColor(RULE_LIGHT)
    c.setLineWidth(0.8)
    c.line(ctx.x0, y_bottom, ctx.x1, y_bottom)

    c.setFillColor(colors.black)
    c.setStrokeColor(colors.black)
    return y_bottom - INFO_GAP_BELOW


# =========================
# 3. Item table
# =========================

# fee line styles
FEE_MUTED = "muted"
FEE_DISCOUNT = "discount"
FEE_STRONG = "strong"


@dataclass
class ItemRow:
    description: List[str]
    dates: List[str]
    duration: List[str]
    quantity: str
    fees: List[Tuple[str, str]]


def fee_lines(item: InvoiceItem, symbol: str) -> List[Tuple[str, str]]:
    out: List[Tuple[str, str]] = []
    discount = item.discount or ZERO
    if discount > 0:
        out.append((f"Fee: {money(item_fee(item), symbol)}", FEE_MUTED))
        out.append((f"Discount: {money(discount, symbol)}", FEE_DISCOUNT))
    out.append((f"Base Fee: {money(item_base_fee(item), symbol)}", FEE_STRONG))
    return out


def _column_edges(ctx: DrawContext) -> List[float]:
    edges = [ctx.x0]
    for frac in COL_FRACTIONS:
        edges.append(edges[-1] + ctx.content_w * frac)
    edges[-1] = ctx.x1
    return edges


def build_item_rows(ctx: DrawContext, items: List[InvoiceItem]) -> List[ItemRow]:
    edges = _column_edges(ctx)
    desc_w = (edges[1] - edges[0]) - 2 * CELL_PAD
    dur_w = (edges[2] - edges[1]) - 2 * CELL_PAD
    tz = ctx.settings.display_tz

    rows: List[ItemRow] = []
    for it in items:
        rows.append(
            ItemRow(
                description=wrap_text(item_description(it), ctx.bold, ROW_DESC_FS, desc_w) or [terms.FALLBACK_ITEM_LABEL],
                dates=wrap_text(item_date_range(it, tz), ctx.regular, ROW_SUB_FS, desc_w),
                duration=wrap_text(item_duration(it), ctx.regular, ROW_TEXT_FS, dur_w) or ["-"],
                quantity=str(it.quantity or 1),
                fees=fee_lines(it, ctx.settings.currency_symbol),
            )
        )
    return rows


def row_height(row: ItemRow) -> float:
    desc_lines = len(row.description) + len(row.dates)
    tallest = max(desc_lines, len(row.duration), len(row.fees), 1)
    return max(ROW_MIN_H, 2 * ROW_PAD + tallest * ROW_LINE_H)


def split_row(row: ItemRow, max_h: float) -> List[ItemRow]:
    """
    Cut a row taller than max_h into page-sized pieces. The first piece keeps
    duration, quantity and fees; later pieces carry the remaining description
    and date lines only.
    """
    if row_height(row) <= max_h:
        return [row]

    per_piece = max(1, int((max_h - 2 * ROW_PAD) // ROW_LINE_H))
    desc = list(row.description)
    dates = list(row.dates)

    pieces: List[ItemRow] = []
    first = True
    while desc or dates:
        n_desc = min(len(desc), per_piece)
        n_dates = min(len(dates), per_piece - n_desc)
        piece = ItemRow(
            description=desc[:n_desc],
            dates=dates[:n_dates],
            duration=row.duration[:per_piece] if first else [],
            quantity=row.quantity if first else "",
            fees=row.fees if first else [],
        )
        pieces.append(piece)
        desc = desc[n_desc:]
        dates = dates[n_dates:]
        first = False
    return pieces


def _draw_table_head(ctx: DrawContext, y: float) -> float:
    c = ctx.c
    edges = _column_edges(ctx)

    c.setFillColor(TABLE_HEAD_BG)
    c.setStrokeColor(RULE_STRONG)
    c.setLineWidth(0.8)
    c.rect(ctx.x0, y - TABLE_HEAD_H, ctx.content_w, TABLE_HEAD_H, stroke=1, fill=1)
    for x in edges[1:-1]:
        c.line(x, y, x, y - TABLE_HEAD_H)

    base = y - TABLE_HEAD_H / 2.0 - TABLE_HEAD_FS * 0.35
    c.setFillColor(TEXT_DARK)
    c.setFont(ctx.bold, TABLE_HEAD_FS)
    desc, dur, qty, fee = terms.TABLE_HEADERS
    c.drawString(edges[0] + CELL_PAD, base, desc)
    c.drawString(edges[1] + CELL_PAD, base, dur)
    c.drawCentredString((edges[2] + edges[3]) / 2.0, base, qty)
    c.drawRightString(edges[4] - CELL_PAD, base, fee)

    c.setFillColor(colors.black)
    c.setStrokeColor(colors.black)
    return y - TABLE_HEAD_H


def _draw_item_row(ctx: DrawContext, row: ItemRow, y: float) -> float:
    c = ctx.c
    edges = _column_edges(ctx)
    h = row_height(row)
    first = y - ROW_PAD - ROW_DESC_FS

    yy = first
    c.setFillColor(TEXT_DARK)
    c.setFont(ctx.bold, ROW_DESC_FS)
    for ln in row.description:
        c.drawString(edges[0] + CELL_PAD, yy, ln)
        yy -= ROW_LINE_H
    c.setFillColor(TEXT_MUTED)
    c.setFont(ctx.regular, ROW_SUB_FS)
    for ln in row.dates:
        c.drawString(edges[0] + CELL_PAD, yy, ln)
        yy -= ROW_LINE_H

    yy = first
    c.setFillColor(TEXT_BODY)
    c.setFont(ctx.regular, ROW_TEXT_FS)
    for ln in row.duration:
        c.drawString(edges[1] + CELL_PAD, yy, ln)
        yy -= ROW_LINE_H

    if row.quantity:
        c.drawCentredString((edges[2] + edges[3]) / 2.0, first, row.quantity)

    yy = first
    for text, style in row.fees:
        if style == FEE_DISCOUNT:
            c.setFillColor(DISCOUNT_RED)
            c.setFont(ctx.bold, ROW_TEXT_FS)
        elif style == FEE_STRONG:
            c.setFillColor(TEXT_DARK)
            c.setFont(ctx.bold, ROW_TEXT_FS)
        else:
            c.setFillColor(TEXT_MUTED)
            c.setFont(ctx.regular, ROW_TEXT_FS)
        c.drawRightString(edges[4] - CELL_PAD, yy, text)
        yy -= ROW_LINE_H

    y_sep = y - h
    c.setStrokeColor(RULE_LIGHT)
    c.setLineWidth(0.6)
    c.line(ctx.x0, y_sep, ctx.x1, y_sep)

    c.setFillColor(colors.black)
    c.setStrokeColor(colors.black)
    return y_sep


def draw_item_table(ctx: DrawContext, invoice: Invoice, y: float) -> float:
    rows = build_item_rows(ctx, invoice.items)
    # tallest row a continuation page can hold under the repeated head
    max_row_h = ctx.top - CONTENT_BOTTOM - TABLE_HEAD_H

    first_need = TABLE_HEAD_H + (row_height(split_row(rows[0], max_row_h)[0]) if rows else ROW_MIN_H)
    y = ctx.ensure_space(y, first_need)
    y = _draw_table_head(ctx, y)

    if not rows:
        c = ctx.c
        c.setFillColor(TEXT_FAINT)
        c.setFont(ctx.regular, ROW_TEXT_FS)
        c.drawCentredString((ctx.x0 + ctx.x1) / 2.0, y - ROW_MIN_H / 2.0 - 3, terms.EMPTY_ITEMS_LABEL)
        c.setFillColor(colors.black)
        return y - ROW_MIN_H - SECTION_GAP

    # table head repeats on continuation pages
    ctx.on_new_page = _draw_table_head
    try:
        for row in rows:
            for piece in split_row(row, max_row_h):
                y = ctx.ensure_space(y, row_height(piece))
                y = _draw_item_row(ctx, piece, y)
    finally:
        ctx.on_new_page = None

    return y - SECTION_GAP


# =========================
# 4. Summary
# =========================

SUMMARY_PLAIN = "plain"
SUMMARY_TOTAL = "total"
SUMMARY_RULE = "rule"


def summary_lines(invoice: Invoice, symbol: str) -> List[Tuple[str, str, str]]:
    """
    (label, value, style) rows of the totals box, top to bottom.
    """
    out: List[Tuple[str, str, str]] = [("Subtotal", money(summary_subtotal(invoice), symbol), SUMMARY_PLAIN)]

    if invoice.discount and invoice.discount > 0:
        out.append(("Discount", f"-{money(invoice.discount, symbol)}", SUMMARY_PLAIN))

    if invoice.tax and invoice.tax.amount > 0:
        out.append((f"Tax ({percent(invoice.tax.rate)}%)", money(invoice.tax.amount, symbol), SUMMARY_PLAIN))

    if invoice.rounding:
        out.append(("Rounding", money(invoice.rounding, symbol), SUMMARY_PLAIN))

    out.append(("", "", SUMMARY_RULE))
    out.append(("Total Due", money(invoice.total, symbol), SUMMARY_TOTAL))

    if invoice.payment_modes:
        out.append(("Mode of Payment", payment_modes_text(invoice), SUMMARY_PLAIN))

    out.append(("", "", SUMMARY_RULE))
    out.append(("Pending", money(invoice.pending, symbol), SUMMARY_PLAIN))
    return out


def draw_summary(ctx: DrawContext, invoice: Invoice, y: float) -> float:
    c = ctx.c
    lines = summary_lines(invoice, ctx.settings.currency_symbol)
    need = len(lines) * SUMMARY_LINE_H + SECTION_GAP
    y = ctx.ensure_space(y, need)

    box_x0 = ctx.x1 - SUMMARY_W
    top_y = y

    for label, value, style in lines:
        if style == SUMMARY_RULE:
            c.setStrokeColor(RULE_STRONG)
            c.setLineWidth(0.8)
            c.line(box_x0, y + SUMMARY_LINE_H - 6, ctx.x1, y + SUMMARY_LINE_H - 6)
            y -= 6
            continue

        if style == SUMMARY_TOTAL:
            c.setFillColor(TEXT_DARK)
            c.setFont(ctx.bold, SUMMARY_TOTAL_FS)
            c.drawString(box_x0, y, label)
            c.drawRightString(ctx.x1, y, value)
            y -= SUMMARY_LINE_H + 4
            continue

        c.setFillColor(TEXT_BODY)
        c.setFont(ctx.regular, SUMMARY_FS)
        c.drawString(box_x0, y, label)
        c.setFillColor(TEXT_DARK)
        c.setFont(ctx.bold, SUMMARY_FS)
        c.drawRightString(ctx.x1, y, value)
        y -= SUMMARY_LINE_H

    if (invoice.status or "").lower() == "paid":
        c.setFillColor(PAID_GREEN)
        c.setFont(ctx.bold, 16)
        c.drawString(ctx.x0, top_y - 4, "PAID")

    c.setFillColor(colors.black)
    c.setStrokeColor(colors.black)
    return y - SECTION_GAP


# =========================
# 5. Terms & conditions
# =========================

def terms_paragraphs(invoice: Invoice, settings: Settings) -> List[Tuple[str, str]]:
    org_name = ""
    if invoice.organization:
        org_name = clean(invoice.organization.name)
    org_name = org_name or settings.fallback_org_name
    return [(title, body.format(org_name=org_name)) for title, body in terms.TERMS_PARAGRAPHS]


def draw_terms(ctx: DrawContext, invoice: Invoice, y: float) -> float:
    c = ctx.c

    y = ctx.ensure_space(y, 60)
    c.setStrokeColor(RULE_STRONG)
    c.setLineWidth(1.6)
    c.line(ctx.x0, y, ctx.x1, y)
    y -= 24

    c.setFillColor(TEXT_DARK)
    c.setFont(ctx.bold, TERMS_HEADING_FS)
    c.drawCentredString((ctx.x0 + ctx.x1) / 2.0, y, terms.TERMS_HEADING)
    y -= 20

    c.setFont(ctx.bold, TERMS_TITLE_FS)
    c.drawString(ctx.x0, y, terms.TERMS_SUBHEADING)
    y -= TERMS_LINE_H + 6

    for title, body in terms_paragraphs(invoice, ctx.settings):
        body_lines = wrap_text(body, ctx.regular, TERMS_TEXT_FS, ctx.content_w)
        y = ctx.ensure_space(y, (1 + len(body_lines)) * TERMS_LINE_H)

        c.setFillColor(TEXT_BODY)
        c.setFont(ctx.bold, TERMS_TITLE_FS)
        c.drawString(ctx.x0, y, title)
        y -= TERMS_LINE_H

        c.setFont(ctx.regular, TERMS_TEXT_FS)
        for ln in body_lines:
            c.drawString(ctx.x0, y, ln)
            y -= TERMS_LINE_H
        y -= 5

    # acknowledgment box
    inner_w = ctx.content_w - 2 * ACK_PAD
    ack_lines = wrap_text(terms.ACKNOWLEDGMENT_TEXT, ctx.regular, ACK_FS, inner_w)
    box_h = 2 * ACK_PAD + TERMS_LINE_H + 4 + len(ack_lines) * ACK_LINE_H
    y = ctx.ensure_space(y, box_h + 8)
    y -= 4

    c.setFillColor(ACK_BG)
    c.setStrokeColor(RULE_LIGHT)
    c.setLineWidth(0.8)
    c.roundRect(ctx.x0, y - box_h, ctx.content_w, box_h, 4, stroke=1, fill=1)

    yy = y - ACK_PAD - TERMS_TITLE_FS
    c.setFillColor(TEXT_BODY)
    c.setFont(ctx.bold, TERMS_TITLE_FS)
    c.drawString(ctx.x0 + ACK_PAD, yy, terms.ACKNOWLEDGMENT_TITLE)
    yy -= TERMS_LINE_H + 4

    c.setFont(ctx.regular, ACK_FS)
    for ln in ack_lines:
        c.drawString(ctx.x0 + ACK_PAD, yy, ln)
        yy -= ACK_LINE_H

    c.setFillColor(colors.black)
    c.setStrokeColor(colors.black)
    return y - box_h - SECTION_GAP


# =========================
# 6. Footer
# =========================

def draw_footer(ctx: DrawContext, invoice: Invoice, y: float) -> float:
    c = ctx.c
    xc = (ctx.x0 + ctx.x1) / 2.0

    contact = contact_line(invoice.organization)
    need = 4 * FOOTER_LINE_H + (FOOTER_LINE_H if contact else 0)
    y = ctx.ensure_space(y, need)

    c.setStrokeColor(RULE_STRONG)
    c.setLineWidth(1.6)
    c.line(ctx.x0, y, ctx.x1, y)
    y -= 16

    if contact:
        c.setFillColor(TEXT_MUTED)
        c.setFont(ctx.regular, FOOTER_FS)
        c.drawCentredString(xc, y, contact)
        y -= 10
        c.setStrokeColor(RULE_STRONG)
        c.setLineWidth(0.6)
        c.line(ctx.x0, y, ctx.x1, y)
        y -= 16

    c.setFillColor(TEXT_BODY)
    c.setFont(ctx.bold, FOOTER_THANKS_FS)
    c.drawCentredString(xc, y, terms.THANK_YOU_LINE)
    y -= FOOTER_LINE_H

    c.setFillColor(TEXT_FAINT)
    c.setFont(ctx.regular, FOOTER_FS - 0.5)
    c.drawCentredString(xc, y, terms.DISCLAIMER_LINE)
    y -= FOOTER_LINE_H

    notes = (invoice.customer_notes or "").strip()
    if notes:
        note_lines = wrap_paragraphs(notes, ctx.regular, NOTES_FS, ctx.content_w)
        y = ctx.ensure_space(y, 2 * FOOTER_LINE_H + min(len(note_lines), 3) * FOOTER_LINE_H)

        c.setStrokeColor(RULE_LIGHT)
        c.setLineWidth(0.6)
        c.line(ctx.x0, y, ctx.x1, y)
        y -= 16

        c.setFillColor(TEXT_BODY)
        c.setFont(ctx.bold, FOOTER_THANKS_FS)
        c.drawString(ctx.x0, y, terms.CUSTOMER_NOTES_HEADING)
        y -= FOOTER_LINE_H

        for ln in note_lines:
            y = ctx.ensure_space(y, FOOTER_LINE_H)
            c.setFillColor(TEXT_MUTED)
            c.setFont(ctx.regular, NOTES_FS)
            if ln:
                c.drawString(ctx.x0, y, ln)
            y -= FOOTER_LINE_H

    c.setFillColor(colors.black)
    c.setStrokeColor(colors.black)
    return y


# top-to-bottom; each emitter starts where the previous one stopped
SECTIONS: List[SectionEmitter] = [
    draw_header_band,
    draw_info_block,
    draw_item_table,
    draw_summary,
    draw_terms,
    draw_footer,
]
