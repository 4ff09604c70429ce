"""
Word (.docx) export of a generated plan.

Draws the shared DocumentLayout with python-docx: headings, tables with a
repeating bold header row, and description cells as bold header paragraphs
plus "List Number" paragraphs whose numbering restarts for every list.
"""
import io
import logging
from pathlib import Path
from typing import Optional, Sequence

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Emu, Pt

from rpp_copilot.config import settings as config
from rpp_copilot.core.form import FormInput
from rpp_copilot.core.schemas import GeneratedPlan
from rpp_copilot.render.layout import COLUMN_WEIGHTS, DocumentLayout, build_layout
from rpp_copilot.render.markdown_subset import HEADER, LIST, Block

logger = logging.getLogger(__name__)

DOCX_FILENAME = "RPP_Generated.docx"
LIST_STYLE = "List Number"
TABLE_STYLE = "Table Grid"


def _mark_header_row(row):
    """Repeat this row at the top of every page the table spans."""
    tr_pr = row._tr.get_or_add_trPr()
    tbl_header = OxmlElement("w:tblHeader")
    tbl_header.set(qn("w:val"), "true")
    tr_pr.append(tbl_header)


def _new_list_num_id(document) -> Optional[int]:
    """
    Create a numbering instance for "List Number" that restarts at 1.

    Returns None when the style carries no numbering definition, in which
    case paragraphs keep the style's shared numbering.
    """
    style = document.styles[LIST_STYLE]
    p_pr = style.element.pPr
    if p_pr is None or p_pr.numPr is None or p_pr.numPr.numId is None:
        return None

    numbering = document.part.numbering_part.element
    num = numbering.num_having_numId(p_pr.numPr.numId.val)
    new_num = numbering.add_num(num.abstractNumId.val)
    new_num.add_lvlOverride(ilvl=0).add_startOverride(1)
    return new_num.numId


def _set_num_id(paragraph, num_id: int):
    num_pr = paragraph._p.get_or_add_pPr().get_or_add_numPr()
    num_pr.get_or_add_ilvl().val = 0
    num_pr.get_or_add_numId().val = num_id


def write_blocks(document, cell, blocks: Sequence[Block]):
    """
    Fill a table cell with description blocks.

    The cell's initial empty paragraph is reused for the first block.
    """
    first = cell.paragraphs[0] if cell.paragraphs and not cell.paragraphs[0].text else None

    def next_paragraph(style=None):
        nonlocal first
        if first is not None:
            paragraph, first = first, None
            if style:
                paragraph.style = document.styles[style]
            return paragraph
        return cell.add_paragraph(style=style)

    for block in blocks:
        if block.kind == HEADER:
            paragraph = next_paragraph()
            paragraph.add_run(block.text).bold = True
            paragraph.paragraph_format.space_after = Pt(4)
        elif block.kind == LIST:
            num_id = _new_list_num_id(document)
            for item in block.items:
                paragraph = next_paragraph(LIST_STYLE)
                paragraph.add_run(item)
                if num_id is not None:
                    _set_num_id(paragraph, num_id)
        else:
            next_paragraph().add_run(block.text)


def _usable_width(document) -> int:
    section = document.sections[0]
    return section.page_width - section.left_margin - section.right_margin


def _apply_column_widths(document, table, weights: Sequence[float]):
    """Fix each column to its share of the usable page width."""
    table.autofit = False
    usable = _usable_width(document)
    widths = [Emu(int(usable * weight)) for weight in weights]
    for column, width in zip(table.columns, widths):
        column.width = width
    for row in table.rows:
        for cell, width in zip(row.cells, widths):
            cell.width = width


def _add_table(document, headers: Optional[Sequence[str]], rows, weights: Sequence[float]):
    table = document.add_table(rows=0, cols=len(weights))
    table.style = document.styles[TABLE_STYLE]

    if headers:
        header_row = table.add_row()
        _mark_header_row(header_row)
        for cell, text in zip(header_row.cells, headers):
            cell.paragraphs[0].add_run(text).bold = True

    for row in rows:
        table_row = table.add_row()
        for cell, blocks in zip(table_row.cells, row):
            write_blocks(document, cell, blocks)

    _apply_column_widths(document, table, weights)
    return table


def render_layout_docx(layout: DocumentLayout):
    """Build a python-docx Document for a layout."""
    document = Document()

    title = document.add_heading(layout.title, level=1)
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER

    identity_rows = [[[Block("paragraph", text=label)], [Block("paragraph", text=value)]]
                     for label, value in layout.identity]
    _add_table(document, None, identity_rows, COLUMN_WEIGHTS[2])

    for section in layout.sections:
        document.add_heading(section.title, level=2)
        _add_table(document, section.headers, section.rows, section.column_weights)

    signature = layout.signature
    document.add_paragraph()
    for i, text in enumerate([signature.place_date, signature.role, "", "", signature.name, signature.nip]):
        paragraph = document.add_paragraph()
        paragraph.alignment = WD_ALIGN_PARAGRAPH.RIGHT
        paragraph.add_run(text).bold = text == signature.name

    return document


def export_docx(plan: Optional[GeneratedPlan], form: Optional[FormInput] = None) -> Optional[bytes]:
    """Render a plan to .docx bytes. No-op (returns None) when there is no plan."""
    if plan is None:
        return None
    document = render_layout_docx(build_layout(plan, form))
    buffer = io.BytesIO()
    document.save(buffer)
    data = buffer.getvalue()
    logger.info(f"Exported DOCX: {len(data)} bytes")
    return data


def save_docx(plan: Optional[GeneratedPlan], form: Optional[FormInput] = None, directory=None) -> Optional[Path]:
    """Write the .docx under its fixed file name; returns the path, or None without a plan."""
    data = export_docx(plan, form)
    if data is None:
        return None
    target = Path(directory or config.EXPORT_DIR)
    target.mkdir(parents=True, exist_ok=True)
    path = target / DOCX_FILENAME
    path.write_bytes(data)
    return path
