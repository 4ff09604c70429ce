"""
PDF export of a generated plan.

Draws the shared DocumentLayout onto A4 pages with ReportLab's canvas,
keeping a running vertical cursor. A page break is inserted whenever the next
row (or line, for rows taller than a page) would leave the printable area;
table header rows are repeated on the new page.
"""
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from reportlab.lib.colors import HexColor, black
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from rpp_copilot.config import settings as config
from rpp_copilot.core.form import FormInput
from rpp_copilot.core.schemas import GeneratedPlan
from rpp_copilot.render.layout import COLUMN_WEIGHTS, DocumentLayout, build_layout
from rpp_copilot.render.markdown_subset import HEADER, LIST, Block

logger = logging.getLogger(__name__)

PDF_FILENAME = "RPP_Generated.pdf"

PAGE_SIZE = A4
MARGIN = 15 * mm
FONT = "RppSans"
FONT_BOLD = "RppSans-Bold"
FONT_SIZE = 9
LEADING = 11.5
CELL_PADDING = 4
TITLE_SIZE = 14
SECTION_TITLE_SIZE = 11
SECTION_GAP = 8 * mm

HEADER_FILL = HexColor("#E9ECEF")
BORDER = HexColor("#ADB5BD")

# Unicode TrueType faces tried before the Vera faces bundled with reportlab
SYSTEM_FONT_CANDIDATES = [
    ("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"),
    ("/usr/share/fonts/dejavu/DejaVuSans.ttf", "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf"),
]
BUNDLED_FONTS = ("Vera.ttf", "VeraBd.ttf")


def _font_files() -> Tuple[str, str]:
    if config.PDF_FONT_PATH:
        return config.PDF_FONT_PATH, config.PDF_BOLD_FONT_PATH or config.PDF_FONT_PATH
    for regular, bold in SYSTEM_FONT_CANDIDATES:
        if Path(regular).exists() and Path(bold).exists():
            return regular, bold
    return BUNDLED_FONTS


def register_fonts():
    """
    Register the TrueType body fonts.

    The standard Type 1 fonts only encode WinAnsi, so symbols such as "≥" or
    "✓" in generated text would come out garbled.
    """
    if FONT in pdfmetrics.getRegisteredFontNames():
        return
    regular, bold = _font_files()
    pdfmetrics.registerFont(TTFont(FONT, regular))
    pdfmetrics.registerFont(TTFont(FONT_BOLD, bold))
    logger.info(f"Registered PDF fonts: {regular}, {bold}")


register_fonts()


@dataclass
class CellLine:
    """One wrapped line of cell text, tagged with the block it came from."""
    kind: str
    text: str
    font: str = FONT
    indent: float = 0
    marker: str = ""
    block_index: int = 0
    item_index: int = 0


@dataclass
class PdfRenderResult:
    data: bytes
    page_count: int
    tables: List[Tuple[str, int]] = field(default_factory=list)


def layout_cell_lines(blocks: Sequence[Block], width: float, font_size: float = FONT_SIZE) -> List[CellLine]:
    """
    Wrap a cell's blocks to `width` points.

    Headers are bold, list items get a "n. " marker with a hanging indent,
    paragraphs wrap flush left.
    """
    lines: List[CellLine] = []
    marker_width = stringWidth("99. ", FONT, font_size)

    for block_index, block in enumerate(blocks):
        if block.kind == HEADER:
            for text in simpleSplit(block.text, FONT_BOLD, font_size, width):
                lines.append(CellLine(HEADER, text, FONT_BOLD, block_index=block_index))
        elif block.kind == LIST:
            for item_index, item in enumerate(block.items):
                wrapped = simpleSplit(item, FONT, font_size, width - marker_width) or [""]
                for i, text in enumerate(wrapped):
                    lines.append(CellLine(
                        LIST, text, FONT,
                        indent=marker_width,
                        marker=f"{item_index + 1}." if i == 0 else "",
                        block_index=block_index,
                        item_index=item_index,
                    ))
        else:
            for text in simpleSplit(block.text, FONT, font_size, width):
                lines.append(CellLine(block.kind, text, FONT, block_index=block_index))

    return lines


class _PdfWriter:
    """Canvas wrapper that owns the vertical cursor and pagination."""

    def __init__(self, buffer):
        self.canvas = canvas.Canvas(buffer, pagesize=PAGE_SIZE)
        self.page_width, self.page_height = PAGE_SIZE
        self.left = MARGIN
        self.right = self.page_width - MARGIN
        self.top = self.page_height - MARGIN
        self.bottom = MARGIN + 6 * mm  # room for the page number
        self.y = self.top
        self.page_count = 1
        self.tables: List[Tuple[str, int]] = []

    @property
    def content_width(self) -> float:
        return self.right - self.left

    @property
    def printable_height(self) -> float:
        return self.top - self.bottom

    def available(self) -> float:
        return self.y - self.bottom

    def _draw_page_number(self):
        self.canvas.setFont(FONT, 8)
        self.canvas.drawCentredString(self.page_width / 2, MARGIN, f"Halaman {self.page_count}")

    def new_page(self):
        self._draw_page_number()
        self.canvas.showPage()
        self.page_count += 1
        self.y = self.top

    def ensure(self, height: float) -> bool:
        """Start a new page if `height` does not fit; returns True on a break."""
        if height > self.available():
            self.new_page()
            return True
        return False

    def finish(self):
        self._draw_page_number()
        self.canvas.save()

    # --- Text ---

    def draw_title(self, text: str):
        self.ensure(TITLE_SIZE * 2)
        self.canvas.setFont(FONT_BOLD, TITLE_SIZE)
        self.y -= TITLE_SIZE
        self.canvas.drawCentredString(self.page_width / 2, self.y, text)
        self.y -= TITLE_SIZE

    def draw_section_title(self, text: str, min_follow: float):
        self.ensure(SECTION_TITLE_SIZE * 2 + min_follow)
        self.canvas.setFont(FONT_BOLD, SECTION_TITLE_SIZE)
        self.y -= SECTION_TITLE_SIZE
        self.canvas.drawString(self.left, self.y, text)
        self.y -= SECTION_TITLE_SIZE * 0.6

    # --- Tables ---

    def _column_widths(self, weights: Sequence[float]) -> List[float]:
        return [self.content_width * w for w in weights]

    def _draw_row_segment(self, cells: List[List[CellLine]], widths: List[float], line_count: int, fill=None):
        height = line_count * LEADING + 2 * CELL_PADDING
        row_top = self.y
        x = self.left
        for lines, width in zip(cells, widths):
            if fill is not None:
                self.canvas.setFillColor(fill)
                self.canvas.rect(x, row_top - height, width, height, stroke=0, fill=1)
                self.canvas.setFillColor(black)
            self.canvas.setStrokeColor(BORDER)
            self.canvas.rect(x, row_top - height, width, height, stroke=1, fill=0)

            baseline = row_top - CELL_PADDING - FONT_SIZE
            for line in lines:
                self.canvas.setFont(line.font, FONT_SIZE)
                if line.marker:
                    self.canvas.drawString(x + CELL_PADDING, baseline, line.marker)
                self.canvas.drawString(x + CELL_PADDING + line.indent, baseline, line.text)
                baseline -= LEADING
            x += width
        self.y = row_top - height

    def _header_cells(self, headers: Sequence[str], widths: List[float]) -> List[List[CellLine]]:
        return [
            layout_cell_lines([Block(HEADER, text=h)], w - 2 * CELL_PADDING)
            for h, w in zip(headers, widths)
        ]

    def _draw_header(self, header_cells, widths):
        if header_cells is None:
            return
        count = max(len(c) for c in header_cells) or 1
        self._draw_row_segment(header_cells, widths, count, fill=HEADER_FILL)

    def draw_table(
        self,
        headers: Optional[Sequence[str]],
        weights: Sequence[float],
        rows: Sequence[Sequence[Sequence[Block]]],
    ):
        widths = self._column_widths(weights)
        header_cells = self._header_cells(headers, widths) if headers else None
        header_height = (
            (max(len(c) for c in header_cells) or 1) * LEADING + 2 * CELL_PADDING
            if header_cells else 0
        )

        self._draw_header(header_cells, widths)

        for row in rows:
            cells = [layout_cell_lines(cell, w - 2 * CELL_PADDING) for cell, w in zip(row, widths)]
            total = max((len(c) for c in cells), default=0) or 1
            offset = 0

            while offset < total:
                remaining = total - offset
                fit = int((self.available() - 2 * CELL_PADDING) // LEADING)

                if remaining <= fit:
                    self._draw_row_segment([c[offset:] for c in cells], widths, remaining)
                    break

                whole_row = remaining * LEADING + 2 * CELL_PADDING
                if offset == 0 and header_height + whole_row <= self.printable_height:
                    self.new_page()
                    self._draw_header(header_cells, widths)
                    continue

                # Row taller than a page: draw what fits, continue on the next page
                if fit >= 1:
                    self._draw_row_segment([c[offset:offset + fit] for c in cells], widths, fit)
                    offset += fit
                self.new_page()
                self._draw_header(header_cells, widths)

    def draw_signature(self, lines: Sequence[str], bold_index: int):
        block_height = (len(lines) + 3) * LEADING
        self.ensure(block_height + SECTION_GAP)
        self.y -= SECTION_GAP
        x = self.right - 70 * mm
        for i, text in enumerate(lines):
            self.canvas.setFont(FONT_BOLD if i == bold_index else FONT, FONT_SIZE + 1)
            self.y -= LEADING
            if i == bold_index:
                # space for the handwritten signature
                self.y -= 3 * LEADING
            self.canvas.drawString(x, self.y, text)


def render_layout_pdf(layout: DocumentLayout) -> PdfRenderResult:
    buffer = io.BytesIO()
    writer = _PdfWriter(buffer)

    writer.draw_title(layout.title)
    identity_rows = [[[Block("paragraph", text=label)], [Block("paragraph", text=value)]]
                     for label, value in layout.identity]
    writer.draw_table(None, COLUMN_WEIGHTS[2], identity_rows)
    writer.y -= SECTION_GAP

    for section in layout.sections:
        writer.draw_section_title(section.title, min_follow=3 * LEADING)
        writer.draw_table(section.headers, section.column_weights, section.rows)
        writer.tables.append((section.title, section.column_count))
        writer.y -= SECTION_GAP / 2

    signature = layout.signature
    writer.draw_signature(
        [signature.place_date, signature.role, signature.name, signature.nip],
        bold_index=2,
    )
    writer.finish()

    return PdfRenderResult(data=buffer.getvalue(), page_count=writer.page_count, tables=writer.tables)


def export_pdf(plan: Optional[GeneratedPlan], form: Optional[FormInput] = None) -> Optional[bytes]:
    """Render a plan to PDF bytes. No-op (returns None) when there is no plan."""
    if plan is None:
        return None
    result = render_layout_pdf(build_layout(plan, form))
    logger.info(f"Exported PDF: {result.page_count} page(s), {len(result.data)} bytes")
    return result.data


def save_pdf(plan: Optional[GeneratedPlan], form: Optional[FormInput] = None, directory=None) -> Optional[Path]:
    """Write the PDF under its fixed file name; returns the path, or None without a plan."""
    data = export_pdf(plan, form)
    if data is None:
        return None
    target = Path(directory or config.EXPORT_DIR)
    target.mkdir(parents=True, exist_ok=True)
    path = target / PDF_FILENAME
    path.write_bytes(data)
    return path
