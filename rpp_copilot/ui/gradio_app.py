import gradio as gr
from pathlib import Path
from typing import Optional
from rpp_copilot.config import settings as config
from rpp_copilot.core.coordinator import PlanCoordinator
from rpp_copilot.core.form import (
    FormInput,
    GRADUATE_PROFILE_DIMENSIONS,
    PEDAGOGY_MODELS,
    REQUIRED_FIELDS,
    SLB_REQUIRED_FIELDS,
    SLB_SENTINEL,
    FormState,
)
from rpp_copilot.render.screen import render_error_html, render_plan_html
from rpp_copilot.render.pdf_exporter import save_pdf
from rpp_copilot.render.docx_exporter import save_docx
from rpp_copilot.storage.settings_store import BrowserSettingsStore, Settings
from rpp_copilot.ui.css import custom_css
import logging

logger = logging.getLogger(__name__)

LOADING_HTML = """<div class="rpp-loading">
<p>AI sedang meracik RPP terbaik untuk Anda...</p>
<p>Ini mungkin memakan waktu beberapa saat.</p>
</div>"""

# Text fields in form order: (field name, label, placeholder, multiline)
TEXT_FIELDS = [
    ("school_name", "Nama Sekolah", "Contoh: SMP Negeri 1 Bandung", False),
    ("teacher_name", "Nama Guru", "Contoh: Siti Rahmawati, S.Pd.", False),
    ("nip", "NIP (opsional)", "Contoh: 198501012010012001", False),
    ("city", "Kota", "Contoh: Bandung", False),
    ("academic_year", "Tahun Pelajaran", "Contoh: 2025/2026", False),
    ("class_name", "Kelas", "Contoh: 7", False),
    ("phase", "Fase", "Contoh: D", False),
    ("semester", "Semester", "Contoh: Ganjil", False),
    ("subject", "Mata Pelajaran", "Contoh: Ilmu Pengetahuan Alam", False),
    ("topic_theme", "Topik/Tema", "Contoh: Ekosistem dan Keseimbangannya", False),
    ("time_allocation", "Alokasi Waktu", "Contoh: 4 JP", False),
    ("meetings", "Jumlah Pertemuan", "Contoh: 2", False),
    ("learning_outcomes", "Capaian Pembelajaran (CP) Ringkas", "Contoh: Peserta didik dapat mendeskripsikan interaksi komponen biotik dan abiotik.", True),
    ("kktp", "Nilai Minimal Ketercapaian (KKTP)", "75", False),
    ("learning_context", "Konteks & Sumber Daya", "Contoh: Akses ke taman sekolah, LMS Google Classroom.", True),
    ("facilities", "Sarana dan Prasarana", "Contoh: Proyektor, laboratorium IPA.", True),
    ("student_characteristics", "Karakteristik Siswa", "Contoh: 28 siswa, mayoritas visual.", True),
    ("learning_interests", "Minat Belajar", "Contoh: Tertarik pada isu lingkungan.", True),
    ("learning_motivation", "Motivasi Belajar", "", True),
    ("learning_achievement", "Prestasi Belajar", "", True),
    ("school_environment", "Lingkungan Sekolah", "", True),
]

SLB_FIELDS = [
    ("slb_category", "Kategori Kebutuhan", "Contoh: Autisme Spektrum Ringan", False),
    ("iep_targets", "IEP/Target Individual", "Contoh: Meningkatkan interaksi sosial saat kerja kelompok", True),
    ("sensory_profile", "Profil Sensorik & Kesehatan", "Contoh: Sensitif terhadap suara keras", True),
    ("communication_mode", "Mode Komunikasi", "Contoh: Verbal dan menggunakan gambar", False),
    ("assistive_tools", "Alat Bantu", "Contoh: Headphone peredam bising", True),
    ("assistant_role", "Peran Pendamping/Terapis/Orang Tua", "Contoh: Membantu siswa fokus pada tugas", True),
]


FORM_FIELD_NAMES = (
    [name for name, *_ in TEXT_FIELDS]
    + ["education_unit_type", "graduate_profile_dimensions", "pedagogy_model"]
    + [name for name, *_ in SLB_FIELDS]
)

KEY_EMPTY_PLACEHOLDER = "Masukkan kunci API Anda di sini"
KEY_SAVED_PLACEHOLDER = "Kunci tersimpan di browser ini (kosongkan untuk tetap memakainya)"


def _label(name, label):
    required = name in REQUIRED_FIELDS or name in SLB_REQUIRED_FIELDS
    return f"{label} *" if required else label


def _textbox(name, label, placeholder, multiline):
    return gr.Textbox(
        label=_label(name, label),
        placeholder=placeholder,
        lines=3 if multiline else 1,
        max_lines=8 if multiline else 1,
    )


# --- Per-session state ---
# Every browser session gets its own coordinator (kept in gr.State) and its
# own credential settings (kept in gr.BrowserState). Only the deployment's
# default key is process-wide.

def new_session() -> PlanCoordinator:
    return PlanCoordinator(BrowserSettingsStore())


def bind_session(session: Optional[PlanCoordinator], saved_settings, factory=new_session) -> PlanCoordinator:
    """
    Return this session's coordinator, creating it on first use.

    The browser copy of the settings is authoritative, so it is reloaded on
    every event.
    """
    if session is None:
        session = factory()
    session.settings_store = BrowserSettingsStore(saved_settings)
    session.load_settings()
    return session


def collect_form(values) -> FormInput:
    form_state = FormState()
    form_state.update_many(dict(zip(FORM_FIELD_NAMES, values)))
    return form_state.snapshot()


def session_export_dir(session: PlanCoordinator) -> Path:
    """Export files keep their fixed names, so each session gets its own folder."""
    return Path(config.EXPORT_DIR) / session.session_id


def save_session_settings(session: PlanCoordinator, mode: str, key: Optional[str]):
    # A blank field keeps the key already stored in this browser
    key = (key or "").strip() or session.settings.key
    return session.save_settings(Settings(mode=mode, key=key))


def key_field_update(settings: Settings):
    """The stored key is never sent back to the page."""
    return gr.update(
        value="",
        visible=settings.mode == "custom",
        placeholder=KEY_SAVED_PLACEHOLDER if settings.key else KEY_EMPTY_PLACEHOLDER,
    )


def settings_view(saved_settings):
    settings = BrowserSettingsStore(saved_settings).load()
    return settings.mode, key_field_update(settings)


def create_gradio_ui(coordinator_factory=None):
    factory = coordinator_factory or new_session

    def start_generation():
        return gr.update(interactive=False, value="⏳ Menghasilkan RPP..."), LOADING_HTML

    async def generate_handler(session, saved_settings, *values):
        session = bind_session(session, saved_settings, factory)
        try:
            form = collect_form(values)
        except ValueError as e:
            logger.warning(f"Invalid form input: {e}")
            return render_error_html(f"Isian formulir tidak valid: {e}"), gr.update(interactive=False), gr.update(interactive=False), session

        outcome = await session.submit(form)
        if outcome.stale or outcome.rejected:
            # A newer request or a reset owns the display now
            return gr.update(), gr.update(), gr.update(), session
        if outcome.error:
            return render_error_html(outcome.error), gr.update(interactive=False), gr.update(interactive=False), session
        return render_plan_html(outcome.plan, form), gr.update(interactive=True), gr.update(interactive=True), session

    def finish_generation():
        return gr.update(interactive=True, value="✨ Hasilkan RPP dengan AI")

    def download_pdf_handler(session):
        if session is None:
            return None
        try:
            path = save_pdf(session.plan, session.form, session_export_dir(session))
        except Exception as e:
            logger.error(f"PDF export failed: {e}")
            gr.Warning(f"Gagal membuat PDF: {e}")
            return None
        return str(path) if path else None

    def download_docx_handler(session):
        if session is None:
            return None
        try:
            path = save_docx(session.plan, session.form, session_export_dir(session))
        except Exception as e:
            logger.error(f"DOCX export failed: {e}")
            gr.Warning(f"Gagal membuat DOCX: {e}")
            return None
        return str(path) if path else None

    def toggle_slb(unit_type):
        return gr.update(visible=unit_type == SLB_SENTINEL)

    def reset_handler(session):
        if session is not None:
            session.reset()
        return render_plan_html(None), gr.update(interactive=False), gr.update(interactive=False), None, session

    def save_settings_handler(session, saved_settings, mode, key):
        session = bind_session(session, saved_settings, factory)
        result = save_session_settings(session, mode, key)
        if result.success:
            gr.Info("Pengaturan berhasil disimpan!")
            status = "✅ Pengaturan berhasil disimpan."
        else:
            status = f"❌ {result.error}"
        key_update = key_field_update(Settings(mode=mode, key=session.settings.key))
        return status, session.settings_store.data, session, key_update

    def load_handler(saved_settings):
        # Created on page load so a reset can reach the very first request
        session = bind_session(None, saved_settings, factory)
        return (session,) + settings_view(saved_settings)

    def settings_mode_changed(mode):
        return gr.update(visible=mode == "custom")

    theme = gr.themes.Base(
        primary_hue="teal",
        secondary_hue="gray",
        neutral_hue="gray",
        font=("Inter", "system-ui", "sans-serif"),
    )

    with gr.Blocks(title="RPP Copilot") as demo:
        session_state = gr.State(None)
        browser_settings = gr.BrowserState(
            Settings().model_dump(),
            storage_key=config.BROWSER_STORAGE_KEY,
            secret=config.BROWSER_STATE_SECRET,
        )

        with gr.Tab("📝 Buat RPP"):
            gr.Markdown("## Input Data RPP")
            with gr.Row():
                with gr.Column(scale=1, elem_id="rpp-form"):
                    text_inputs = {}
                    gr.Markdown("### 1. Identitas & Konteks")
                    education_unit_type = gr.Dropdown(
                        choices=["Umum", SLB_SENTINEL],
                        value="Umum",
                        label="Tipe Satuan Pendidikan *",
                    )
                    for name, label, placeholder, multiline in TEXT_FIELDS:
                        text_inputs[name] = _textbox(name, label, placeholder, multiline)

                    gr.Markdown("### 2. Kerangka Pembelajaran Mendalam")
                    dimensions = gr.CheckboxGroup(
                        choices=[d.value for d in GRADUATE_PROFILE_DIMENSIONS],
                        label="Dimensi Profil Lulusan (pilih ≥ 2)",
                    )
                    pedagogy_model = gr.Dropdown(
                        choices=[m.value for m in PEDAGOGY_MODELS],
                        value=PEDAGOGY_MODELS[0].value,
                        label="Model/Strategi Utama *",
                    )

                    with gr.Group(visible=False) as slb_group:
                        gr.Markdown("### 3. Data Khusus SLB/ABK")
                        slb_inputs = [_textbox(*spec) for spec in SLB_FIELDS]

                    submit_btn = gr.Button("✨ Hasilkan RPP dengan AI", variant="primary")
                    reset_btn = gr.Button("🗑️ Bersihkan Hasil")

                with gr.Column(scale=1):
                    gr.Markdown("## Hasil RPP Pembelajaran Mendalam")
                    with gr.Row():
                        pdf_btn = gr.Button("Unduh PDF", interactive=False, size="sm")
                        docx_btn = gr.Button("Unduh DOCX", interactive=False, size="sm")
                    download_file = gr.File(label="File Unduhan", interactive=False)
                    result_html = gr.HTML(value=render_plan_html(None), elem_id="rpp-result")

        with gr.Tab("⚙️ Pengaturan"):
            gr.Markdown("## Pengaturan API")
            gr.Markdown(
                "Aplikasi ini memerlukan API Key Google Gemini. Anda dapat memperolehnya dari "
                "[Google AI Studio](https://aistudio.google.com/app/apikey)."
            )
            settings_mode = gr.Radio(
                choices=[("Gunakan kunci bawaan", "default"), ("Gunakan API Key sendiri", "custom")],
                value="default",
                label="Sumber API Key",
            )
            settings_key = gr.Textbox(
                type="password",
                label="Kunci API Gemini *",
                placeholder=KEY_EMPTY_PLACEHOLDER,
                visible=False,
            )
            save_btn = gr.Button("Simpan Pengaturan", variant="primary")
            settings_status = gr.Markdown(value="")

        form_inputs = [text_inputs[name] for name, *_ in TEXT_FIELDS] + [education_unit_type, dimensions, pedagogy_model] + slb_inputs

        education_unit_type.change(toggle_slb, education_unit_type, slb_group)

        submit_btn.click(
            start_generation,
            outputs=[submit_btn, result_html],
        ).then(
            generate_handler,
            inputs=[session_state, browser_settings] + form_inputs,
            outputs=[result_html, pdf_btn, docx_btn, session_state],
        ).then(
            finish_generation,
            outputs=[submit_btn],
        )

        pdf_btn.click(download_pdf_handler, inputs=[session_state], outputs=[download_file])
        docx_btn.click(download_docx_handler, inputs=[session_state], outputs=[download_file])
        reset_btn.click(
            reset_handler,
            inputs=[session_state],
            outputs=[result_html, pdf_btn, docx_btn, download_file, session_state],
        )

        settings_mode.change(settings_mode_changed, settings_mode, settings_key)
        save_btn.click(
            save_settings_handler,
            inputs=[session_state, browser_settings, settings_mode, settings_key],
            outputs=[settings_status, browser_settings, session_state, settings_key],
        )
        demo.load(load_handler, inputs=[browser_settings], outputs=[session_state, settings_mode, settings_key])

    # Attach theme and css to demo for Gradio 6.0
    demo.theme = theme
    demo.css = custom_css
    return demo
