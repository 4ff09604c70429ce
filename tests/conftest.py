"""
Pytest configuration and fixtures
"""
import json
import pytest
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rpp_copilot.core.form import FormInput, GraduateProfileDimension, PedagogyModel
from rpp_copilot.core.schemas import SECTION_KEYS, validate_plan


def _section_item(konteks, deskripsi):
    return {"konteks": konteks, "deskripsi": deskripsi}


@pytest.fixture
def sample_form():
    """A fully populated general-school form"""
    return FormInput(
        school_name="SMP Negeri 1 Bandung",
        teacher_name="Siti Rahmawati",
        nip="198501012010012001",
        city="Bandung",
        academic_year="2025/2026",
        education_unit_type="Umum",
        class_name="7",
        phase="D",
        semester="Ganjil",
        subject="Ilmu Pengetahuan Alam",
        topic_theme="Ekosistem",
        time_allocation="4 JP",
        meetings="2",
        learning_outcomes="Peserta didik mendeskripsikan interaksi dalam ekosistem.",
        kktp="75",
        learning_context="Taman sekolah dan Google Classroom",
        facilities="Proyektor",
        student_characteristics="28 siswa, mayoritas visual",
        learning_interests="Isu lingkungan",
        learning_motivation="Tinggi",
        learning_achievement="Rata-rata 78",
        school_environment="Perkotaan",
        graduate_profile_dimensions=[
            GraduateProfileDimension.PENALARAN_KRITIS,
            GraduateProfileDimension.KOLABORASI,
        ],
        pedagogy_model=PedagogyModel.PJBL,
    )


@pytest.fixture
def slb_form(sample_form):
    """The same form for a special-education unit"""
    return sample_form.model_copy(update={
        "education_unit_type": "SLB/ABK",
        "slb_category": "Autisme Spektrum Ringan",
        "iep_targets": "Interaksi sosial",
        "sensory_profile": "Sensitif suara",
        "communication_mode": "Verbal dan gambar",
        "assistive_tools": "Headphone",
        "assistant_role": "Pendamping kelas",
    })


@pytest.fixture
def sample_plan_data():
    """A complete response payload with every section key"""
    data = {key: [_section_item(f"Konteks {key[0]}", f"**Poin {key[0]}**\n1. Satu\n2. Dua")]
            for key in SECTION_KEYS}
    data["B_capaianTujuanPembelajaran"] = [
        {"tujuan": "Mengidentifikasi komponen biotik", "kriteria": "**Kriteria**\n1. Menyebut tiga contoh"},
        {"tujuan": "Menjelaskan rantai makanan", "kriteria": "Menjelaskan dengan benar"},
    ]
    data["M_daftarRujukanInternal"] = ["Buku IPA Kelas 7", "Modul Ekosistem"]
    return data


@pytest.fixture
def sample_plan(sample_plan_data):
    return validate_plan(sample_plan_data)


@pytest.fixture
def mock_llm(sample_plan_data):
    """A mock chat model whose async invoke returns the sample payload"""
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=MagicMock(content=json.dumps(sample_plan_data)))
    return llm


@pytest.fixture
def llm_factory(mock_llm):
    """Factory stub that records how often a model was created"""
    return MagicMock(return_value=mock_llm)
