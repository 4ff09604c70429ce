"""
Tests for render/screen.py - On-screen HTML rendering
"""
from rpp_copilot.core.schemas import SECTIONS
from rpp_copilot.render.screen import (
    EMPTY_PLACEHOLDER,
    render_description_html,
    render_error_html,
    render_plan_html,
)


class TestRenderPlanHtml:
    """Test render_plan_html"""

    def test_no_plan_shows_placeholder(self):
        assert render_plan_html(None) == EMPTY_PLACEHOLDER

    def test_sections_rendered_in_order(self, sample_plan, sample_form):
        html = render_plan_html(sample_plan, sample_form)
        positions = [html.index(f'data-key="{spec.key}"') for spec in SECTIONS]
        assert positions == sorted(positions)

    def test_band_text_in_criterion_table(self, sample_plan, sample_form):
        html = render_plan_html(sample_plan, sample_form)
        assert '<p class="rpp-paragraph">Hampir Tercapai: 65 - 74</p>' in html

    def test_values_are_escaped(self, sample_plan, sample_form):
        form = sample_form.model_copy(update={"school_name": "<b>SMP</b>"})
        html = render_plan_html(sample_plan, form)
        assert "&lt;b&gt;SMP&lt;/b&gt;" in html
        assert "<b>SMP</b>" not in html


def test_render_description_html():
    assert render_description_html("**Judul**\n1. Satu") == (
        '<p class="rpp-header"><strong>Judul</strong></p>'
        '<ol class="rpp-list"><li>Satu</li></ol>'
    )


def test_render_error_html():
    html = render_error_html("Gagal <x>")
    assert 'class="rpp-error"' in html
    assert "Gagal &lt;x&gt;" in html
