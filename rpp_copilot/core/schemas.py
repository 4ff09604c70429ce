"""
Response contract with the generative-AI service.

Defines the lesson-plan result model, the ordered section registry every
renderer walks, the Gemini response schema derived from it, and the
validator applied right after parsing.
"""

from typing import Any, Dict, List, Literal, NamedTuple

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from rpp_copilot.core.errors import ValidationError

SectionKind = Literal["context", "criterion", "reference"]


class SectionItem(BaseModel):
    """One row of a lesson-plan section."""
    konteks: str
    deskripsi: str


class CriterionItem(BaseModel):
    """A learning objective paired with its achievement criterion."""
    tujuan: str
    kriteria: str


class SectionSpec(NamedTuple):
    key: str
    title: str
    kind: SectionKind
    description: str


DESCRIPTION_FORMAT_RULE = (
    "WAJIB IKUTI FORMAT HIERARKIS: Poin utama ditebalkan (**Contoh Poin Utama**). "
    "Sub-poin penjelas di bawahnya WAJIB menggunakan daftar bernomor (1., 2., dst.). "
    "DILARANG menggunakan bullet point (*) atau tanda hubung (-)."
)

SECTIONS: List[SectionSpec] = [
    SectionSpec("A_identitasKonteks", "A. Identitas & Konteks", "context",
                "Identitas dan konteks RPP"),
    SectionSpec("B_capaianTujuanPembelajaran", "B. Capaian & Tujuan Pembelajaran", "criterion",
                "Tujuan pembelajaran spesifik beserta kriteria ketercapaiannya (KKTP)"),
    SectionSpec("C_dimensiProfilLulusan", "C. Dimensi Profil Lulusan", "context",
                "Keterkaitan dengan dimensi profil lulusan"),
    SectionSpec("D_lintasDisiplinTopik", "D. Lintas Disiplin & Topik", "context",
                "Keterkaitan lintas disiplin ilmu dengan topik"),
    SectionSpec("E_praktikPedagogisUtama", "E. Praktik Pedagogis Utama", "context",
                "Praktik pedagogis utama yang digunakan"),
    SectionSpec("F_lingkunganPembelajaran", "F. Lingkungan Pembelajaran", "context",
                "Pengaturan lingkungan pembelajaran"),
    SectionSpec("G_pemanfaatanDigital", "G. Pemanfaatan Digital", "context",
                "Pemanfaatan teknologi digital"),
    SectionSpec("H_kemitraanPembelajaran", "H. Kemitraan Pembelajaran", "context",
                "Kemitraan dengan orang tua dan komunitas"),
    SectionSpec("I_langkahLangkahPembelajaran", "I. Langkah-Langkah Pembelajaran", "context",
                "Langkah-langkah pembelajaran rinci per pertemuan"),
    SectionSpec("J_asesmenInstrumen", "J. Asesmen & Instrumen", "context",
                "Strategi dan instrumen asesmen (diagnostik, formatif, sumatif)"),
    SectionSpec("K_diferensiasiAkomodasi", "K. Diferensiasi & Akomodasi", "context",
                "Strategi diferensiasi dan akomodasi (konten, proses, produk)"),
    SectionSpec("L_tindakLanjutRefleksi", "L. Tindak Lanjut & Refleksi", "context",
                "Kegiatan tindak lanjut dan refleksi guru/siswa"),
    SectionSpec("M_daftarRujukanInternal", "M. Daftar Rujukan & Sumber Belajar", "reference",
                "Daftar rujukan dan sumber belajar"),
]

SECTION_KEYS: List[str] = [spec.key for spec in SECTIONS]


class GeneratedPlan(BaseModel):
    """Complete lesson plan returned by the service. Every key is required."""
    A_identitasKonteks: List[SectionItem]
    B_capaianTujuanPembelajaran: List[CriterionItem]
    C_dimensiProfilLulusan: List[SectionItem]
    D_lintasDisiplinTopik: List[SectionItem]
    E_praktikPedagogisUtama: List[SectionItem]
    F_lingkunganPembelajaran: List[SectionItem]
    G_pemanfaatanDigital: List[SectionItem]
    H_kemitraanPembelajaran: List[SectionItem]
    I_langkahLangkahPembelajaran: List[SectionItem]
    J_asesmenInstrumen: List[SectionItem]
    K_diferensiasiAkomodasi: List[SectionItem]
    L_tindakLanjutRefleksi: List[SectionItem]
    M_daftarRujukanInternal: List[str]

    def section(self, key: str) -> list:
        return getattr(self, key)


_SECTION_ITEM_SCHEMA = {
    "type": "object",
    "properties": {
        "konteks": {"type": "string", "description": "Judul atau konteks singkat dari poin ini."},
        "deskripsi": {"type": "string", "description": DESCRIPTION_FORMAT_RULE},
    },
    "required": ["konteks", "deskripsi"],
}

_CRITERION_ITEM_SCHEMA = {
    "type": "object",
    "properties": {
        "tujuan": {
            "type": "string",
            "description": "Satu tujuan pembelajaran spesifik yang dapat diukur dan diamati.",
        },
        "kriteria": {
            "type": "string",
            "description": "Kriteria konkret dan terukur yang menunjukkan ketercapaian tujuan ini.",
        },
    },
    "required": ["tujuan", "kriteria"],
}

_ITEM_SCHEMAS: Dict[str, Dict[str, Any]] = {
    "context": _SECTION_ITEM_SCHEMA,
    "criterion": _CRITERION_ITEM_SCHEMA,
    "reference": {"type": "string"},
}


def build_response_schema() -> Dict[str, Any]:
    """Gemini response schema: an object of required arrays, one per section."""
    properties = {
        spec.key: {
            "type": "array",
            "items": _ITEM_SCHEMAS[spec.kind],
            "description": spec.description,
        }
        for spec in SECTIONS
    }
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties.keys()),
    }


def validate_plan(data: Any) -> GeneratedPlan:
    """
    Check a parsed response against the contract.

    Missing keys are contract violations, never defaulted.

    Raises:
        ValidationError: payload is not an object, a key is missing, or an
            item has the wrong shape
    """
    if not isinstance(data, dict):
        raise ValidationError("Respons AI tidak berbentuk objek JSON. Coba lagi.")

    missing = [key for key in SECTION_KEYS if key not in data]
    if missing:
        raise ValidationError(
            "Respons AI tidak lengkap, bagian hilang: " + ", ".join(missing)
        )

    try:
        return GeneratedPlan.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Respons AI tidak sesuai format: {e.error_count()} kesalahan") from e
