"""
Shared document layout for every output surface.

One pass over a GeneratedPlan decides section order, table columns and cell
content (as parsed markdown-subset blocks). The screen, PDF and Word
renderers only draw this layout, so they cannot disagree on structure or on
achievement-band text.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from rpp_copilot.core.form import FormInput
from rpp_copilot.core.schemas import SECTIONS, GeneratedPlan, SectionSpec
from rpp_copilot.render.bands import compute_bands, format_bands
from rpp_copilot.render.markdown_subset import Block, parse_description, plain_block

DOCUMENT_TITLE = "Rencana Pelaksanaan Pembelajaran (RPP)"

CONTEXT_HEADERS = ["Konteks", "Deskripsi"]
CRITERION_HEADERS = ["Tujuan Pembelajaran", "Kriteria Ketercapaian", "Interval Nilai"]
REFERENCE_HEADERS = ["Rujukan"]

# Relative column widths per layout, shared by the PDF and Word exporters
COLUMN_WEIGHTS = {
    2: [0.3, 0.7],
    3: [0.35, 0.4, 0.25],
    1: [1.0],
}

MONTHS_ID = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]

Cell = List[Block]


@dataclass
class SectionTable:
    key: str
    title: str
    headers: List[str]
    rows: List[List[Cell]] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    @property
    def column_weights(self) -> List[float]:
        return COLUMN_WEIGHTS[self.column_count]


@dataclass
class SignatureBlock:
    place_date: str
    role: str
    name: str
    nip: str


@dataclass
class DocumentLayout:
    title: str
    identity: List[Tuple[str, str]]
    sections: List[SectionTable]
    signature: SignatureBlock
    band_text: str

    def section_titles(self) -> List[str]:
        return [section.title for section in self.sections]


def format_date_id(day: date) -> str:
    return f"{day.day} {MONTHS_ID[day.month - 1]} {day.year}"


def build_identity_rows(form: FormInput) -> List[Tuple[str, str]]:
    rows = [
        ("Nama Sekolah", form.school_name),
        ("Nama Guru", form.teacher_name),
        ("NIP", form.nip or "-"),
        ("Kota", form.city),
        ("Tahun Pelajaran", form.academic_year),
        ("Tipe Satuan Pendidikan", form.education_unit_type),
        ("Kelas / Fase", f"{form.class_name} / {form.phase}"),
        ("Semester", form.semester),
        ("Mata Pelajaran", form.subject),
        ("Topik/Tema", form.topic_theme),
        ("Alokasi Waktu", form.time_allocation),
        ("Jumlah Pertemuan", form.meetings),
        ("Model Pembelajaran", form.pedagogy_model.value),
    ]
    if form.is_slb and form.slb_category:
        rows.append(("Kategori Kebutuhan", form.slb_category))
    return rows


def _build_section(spec: SectionSpec, items: list, band_text: str) -> SectionTable:
    if spec.kind == "criterion":
        table = SectionTable(spec.key, spec.title, list(CRITERION_HEADERS))
        for item in items:
            table.rows.append([
                plain_block(item.tujuan),
                parse_description(item.kriteria),
                plain_block(band_text),
            ])
    elif spec.kind == "reference":
        table = SectionTable(spec.key, spec.title, list(REFERENCE_HEADERS))
        for reference in items:
            table.rows.append([plain_block(reference)])
    else:
        table = SectionTable(spec.key, spec.title, list(CONTEXT_HEADERS))
        for item in items:
            table.rows.append([plain_block(item.konteks), parse_description(item.deskripsi)])
    return table


def build_layout(
    plan: GeneratedPlan,
    form: Optional[FormInput] = None,
    today: Optional[date] = None,
) -> DocumentLayout:
    """
    Build the renderer-independent layout for a plan.

    Empty sections are skipped. Section B gets a third column with the
    achievement bands derived from the form's threshold.
    """
    form = form or FormInput()
    band_text = format_bands(compute_bands(form.achievement_threshold))

    sections = []
    for spec in SECTIONS:
        items = plan.section(spec.key)
        if items:
            sections.append(_build_section(spec, items, band_text))

    place = form.city or "........"
    signature = SignatureBlock(
        place_date=f"{place}, {format_date_id(today or date.today())}",
        role="Guru Mata Pelajaran",
        name=form.teacher_name or "........................",
        nip=f"NIP. {form.nip}" if form.nip else "NIP. -",
    )

    return DocumentLayout(
        title=DOCUMENT_TITLE,
        identity=build_identity_rows(form),
        sections=sections,
        signature=signature,
        band_text=band_text,
    )
