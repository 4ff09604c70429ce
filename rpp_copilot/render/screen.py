"""
On-screen HTML rendering of a generated plan for the Gradio preview.
"""
from html import escape
from typing import List, Optional

from rpp_copilot.core.form import FormInput
from rpp_copilot.core.schemas import GeneratedPlan
from rpp_copilot.render.layout import DocumentLayout, build_layout
from rpp_copilot.render.markdown_subset import HEADER, LIST, Block, parse_description

EMPTY_PLACEHOLDER = """<div class="rpp-empty">
<h3>Hasil RPP Anda Akan Tampil di Sini</h3>
<p>Isi formulir dan klik "Hasilkan RPP dengan AI" untuk memulai.</p>
</div>"""


def render_blocks_html(blocks: List[Block]) -> str:
    parts = []
    for block in blocks:
        if block.kind == HEADER:
            parts.append(f'<p class="rpp-header"><strong>{escape(block.text)}</strong></p>')
        elif block.kind == LIST:
            items = "".join(f"<li>{escape(item)}</li>" for item in block.items)
            parts.append(f'<ol class="rpp-list">{items}</ol>')
        else:
            parts.append(f'<p class="rpp-paragraph">{escape(block.text)}</p>')
    return "".join(parts)


def render_description_html(text: str) -> str:
    return render_blocks_html(parse_description(text))


def render_layout_html(layout: DocumentLayout) -> str:
    html = [f'<div class="rpp-document"><h2>{escape(layout.title)}</h2>']

    html.append('<table class="rpp-identity"><tbody>')
    for label, value in layout.identity:
        html.append(f"<tr><th>{escape(label)}</th><td>{escape(value)}</td></tr>")
    html.append("</tbody></table>")

    for section in layout.sections:
        html.append(f'<section class="rpp-section" data-key="{section.key}">')
        html.append(f"<h3>{escape(section.title)}</h3>")
        html.append('<table class="rpp-table"><thead><tr>')
        for header, weight in zip(section.headers, section.column_weights):
            html.append(f'<th style="width:{int(weight * 100)}%">{escape(header)}</th>')
        html.append("</tr></thead><tbody>")
        for row in section.rows:
            cells = "".join(f"<td>{render_blocks_html(cell)}</td>" for cell in row)
            html.append(f"<tr>{cells}</tr>")
        html.append("</tbody></table></section>")

    signature = layout.signature
    html.append(
        '<div class="rpp-signature">'
        f"<p>{escape(signature.place_date)}</p>"
        f"<p>{escape(signature.role)}</p>"
        f"<p><strong>{escape(signature.name)}</strong></p>"
        f"<p>{escape(signature.nip)}</p>"
        "</div>"
    )
    html.append("</div>")
    return "\n".join(html)


def render_plan_html(plan: Optional[GeneratedPlan], form: Optional[FormInput] = None) -> str:
    """Render a plan as HTML, or the empty-state placeholder when there is none."""
    if plan is None:
        return EMPTY_PLACEHOLDER
    return render_layout_html(build_layout(plan, form))


def render_error_html(message: str) -> str:
    return (
        '<div class="rpp-error">'
        "<h3>Terjadi Kesalahan</h3>"
        f"<p>{escape(message)}</p>"
        "</div>"
    )
