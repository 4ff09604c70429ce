"""
Form input model for lesson-plan (RPP) requests.

FormInput is the immutable snapshot sent to the prompt builder; FormState is
the mutable holder edited by the UI and read once at submit time.
"""

from enum import Enum
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

from rpp_copilot.config import settings as config

SLB_SENTINEL = "SLB/ABK"

EducationUnitType = Literal["Umum", "SLB/ABK"]


class PedagogyModel(str, Enum):
    """Primary learning models offered in the form."""
    PJBL = "Project Based Learning (PjBL)"
    PBL = "Problem Based Learning (PBL)"
    INQUIRY = "Inquiry Learning"
    DISCOVERY = "Discovery Learning"
    CONTEXTUAL = "Contextual Teaching & Learning"


class GraduateProfileDimension(str, Enum):
    """Graduate profile dimensions a plan can emphasize."""
    IMAN_TAKWA = "Beriman, Bertakwa, & Berakhlak Mulia"
    KEWARGAAN = "Berkebinekaan Global"
    PENALARAN_KRITIS = "Bernalar Kritis"
    KREATIVITAS = "Kreatif"
    KOLABORASI = "Kolaborasi/Gotong Royong"
    KEMANDIRIAN = "Mandiri"
    KESEHATAN = "Sehat Jasmani & Rohani"
    KOMUNIKASI = "Komunikatif & Interaktif"


PEDAGOGY_MODELS: List[PedagogyModel] = list(PedagogyModel)
GRADUATE_PROFILE_DIMENSIONS: List[GraduateProfileDimension] = list(GraduateProfileDimension)

# Field name -> label shown in the form and in validation messages
REQUIRED_FIELDS: Dict[str, str] = {
    "school_name": "Nama Sekolah",
    "teacher_name": "Nama Guru",
    "city": "Kota",
    "academic_year": "Tahun Pelajaran",
    "class_name": "Kelas",
    "phase": "Fase",
    "semester": "Semester",
    "subject": "Mata Pelajaran",
    "topic_theme": "Topik/Tema",
    "learning_outcomes": "Capaian Pembelajaran",
    "time_allocation": "Alokasi Waktu",
    "meetings": "Jumlah Pertemuan",
}

SLB_REQUIRED_FIELDS: Dict[str, str] = {
    "slb_category": "Kategori Kebutuhan",
    "iep_targets": "Target Individual (IEP)",
    "sensory_profile": "Profil Sensorik & Kesehatan",
    "communication_mode": "Mode Komunikasi",
    "assistive_tools": "Alat Bantu",
    "assistant_role": "Peran Pendamping/Terapis/Orang Tua",
}


class FormInput(BaseModel):
    """Structured request describing the lesson plan to generate."""
    # Institution identity
    school_name: str = ""
    teacher_name: str = ""
    nip: str = ""
    city: str = ""
    academic_year: str = ""

    # General information
    education_unit_type: EducationUnitType = "Umum"
    class_name: str = ""
    phase: str = ""
    semester: str = ""
    subject: str = ""
    topic_theme: str = ""
    time_allocation: str = ""
    meetings: str = ""

    # Learning context
    learning_outcomes: str = ""
    kktp: str = ""
    learning_context: str = ""
    facilities: str = ""

    # Initial student identification
    student_characteristics: str = ""
    learning_interests: str = ""
    learning_motivation: str = ""
    learning_achievement: str = ""
    school_environment: str = ""

    # Deep-learning framework
    graduate_profile_dimensions: List[GraduateProfileDimension] = Field(default_factory=list)
    pedagogy_model: PedagogyModel = PEDAGOGY_MODELS[0]

    # Special-education (SLB/ABK) data, only used when is_slb
    slb_category: str = ""
    iep_targets: str = ""
    sensory_profile: str = ""
    communication_mode: str = ""
    assistive_tools: str = ""
    assistant_role: str = ""

    @property
    def is_slb(self) -> bool:
        return self.education_unit_type == SLB_SENTINEL

    @property
    def achievement_threshold(self) -> int:
        """Minimum achievement score parsed from `kktp`, clamped to 0..100."""
        try:
            value = int(self.kktp.strip())
        except ValueError:
            return config.DEFAULT_KKTP
        return max(0, min(100, value))

    def missing_fields(self) -> List[str]:
        """Labels of required fields that are still empty."""
        required = dict(REQUIRED_FIELDS)
        if self.is_slb:
            required.update(SLB_REQUIRED_FIELDS)
        return [
            label for name, label in required.items()
            if not str(getattr(self, name)).strip()
        ]


class FormState:
    """
    Mutable form holder owned by the UI session.

    Created with defaults, mutated on every edit, read once at submit time.
    """

    def __init__(self, **initial: Any):
        self._data: Dict[str, Any] = FormInput(**initial).model_dump()

    def update(self, field: str, value: Any) -> None:
        if field not in FormInput.model_fields:
            raise KeyError(f"Unknown form field: {field}")
        self._data[field] = value

    def update_many(self, values: Dict[str, Any]) -> None:
        for field, value in values.items():
            self.update(field, value)

    def toggle_dimension(self, dimension: GraduateProfileDimension) -> None:
        dimensions = list(self._data["graduate_profile_dimensions"])
        if dimension in dimensions:
            dimensions.remove(dimension)
        else:
            dimensions.append(dimension)
        self._data["graduate_profile_dimensions"] = dimensions

    def snapshot(self) -> FormInput:
        """Validated copy of the current state, used as the request payload."""
        return FormInput(**self._data)
