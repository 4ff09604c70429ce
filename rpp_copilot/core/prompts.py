"""
Lesson-plan generation prompt.

The description format rules here must stay in lockstep with
rpp_copilot.render.markdown_subset: the screen, PDF and Word renderers key
their formatting off exactly the bold-line and numbered-line markers.
"""

from typing import List, Tuple

from rpp_copilot.core.form import FormInput

ROLE_PREAMBLE = """Anda adalah ahli pedagogi dan desainer instruksional berpengalaman di Indonesia. \
Tugas Anda adalah menyusun Rencana Pelaksanaan Pembelajaran (RPP) yang mendalam, \
berpusat pada siswa, dan inovatif berdasarkan data yang diberikan."""

FORMAT_RULES = """**Instruksi Kritis untuk Format Konten:**
1. **HANYA JSON:** Seluruh output HARUS berupa satu objek JSON yang valid, tanpa teks pembuka, penutup, atau penjelasan lain.
2. **Struktur Deskripsi (WAJIB):** Setiap nilai properti 'deskripsi' HARUS mengikuti format hierarkis berikut:
   - **Poin Utama:** Selalu tulis sebagai satu baris teks tebal dengan sintaks Markdown `**...**`. Jangan diawali karakter lain (seperti *, -, atau nomor).
   - **Sub-Poin Penjelas:** Jika ada, tulis sebagai daftar bernomor (`1.`, `2.`, dst.) pada baris baru di bawah poin utama.
   - **LARANGAN MUTLAK:** Jangan pernah memakai bullet point (`*`) atau tanda hubung (`-`) sebagai penanda daftar di bagian mana pun dari respons.
   - **Contoh Format yang BENAR:**
     "deskripsi": "**Karakteristik Peserta Didik:**\\n1. Siswa memiliki gaya belajar visual.\\n2. Beberapa siswa memerlukan bimbingan tambahan."
   - **Contoh Format yang SALAH:**
     "deskripsi": "* Karakteristik Peserta Didik\\n- Siswa visual\\n- Bimbingan tambahan"
3. **Bagian A (Identitas dan Konteks):** Jangan mengulang data institusional dan informasi umum (nama sekolah, kelas, mata pelajaran) yang sudah ada di input. Fokus pada analisis konteks satuan pendidikan dan lingkungan belajar siswa.
4. **Bagian B (KKTP):** Pecah Capaian Pembelajaran menjadi beberapa 'tujuan' yang spesifik. Untuk setiap tujuan, tulis 'kriteria' ketercapaian yang jelas dan terukur. Gunakan Nilai Minimal Ketercapaian {threshold} sebagai acuan kelulusan.
5. **Kualitas & Bahasa:** Isi setiap bagian dengan deskripsi konkret dan implementatif dalam Bahasa Indonesia yang baik dan benar.
6. **Konteks SLB/ABK:** Jika tipe satuan pendidikan adalah "SLB/ABK", beri perhatian khusus pada diferensiasi, akomodasi, dan data khusus ABK.
7. **Pengingat Format:** Ulangi, setiap 'deskripsi' hanya boleh berisi baris tebal `**...**` dan daftar bernomor `1.`, `2.`, dst. Tanpa `*` dan tanpa `-`."""

SLB_FIELD_LABELS: List[str] = [
    "Kategori Kebutuhan",
    "Target Individual (IEP)",
    "Profil Sensorik & Kesehatan",
    "Mode Komunikasi",
    "Alat Bantu yang Digunakan",
    "Peran Pendamping/Terapis/Orang Tua",
]

CLOSING_INSTRUCTION = (
    "Sekarang, berdasarkan data dan SEMUA instruksi di atas, "
    "hasilkan RPP dalam format JSON yang diminta."
)


def _format_block(title: str, rows: List[Tuple[str, str]]) -> str:
    lines = [f"**{title}:**"]
    lines.extend(f"- {label}: {value}" for label, value in rows)
    return "\n".join(lines)


def _threshold_text(form: FormInput) -> str:
    # Same parsed value the achievement bands use
    return str(form.achievement_threshold)


def get_data_sections(form: FormInput) -> List[str]:
    """Serialize every form field under labeled sections."""
    dimensions = ", ".join(d.value for d in form.graduate_profile_dimensions) or "Tidak dipilih"

    sections = [
        _format_block("1. Informasi Institusional", [
            ("Nama Sekolah", form.school_name),
            ("Nama Guru", form.teacher_name),
            ("NIP", form.nip or "Tidak diisi"),
            ("Kota", form.city),
            ("Tahun Pelajaran", form.academic_year),
        ]),
        _format_block("2. Informasi Umum RPP", [
            ("Tipe Satuan Pendidikan", form.education_unit_type),
            ("Kelas", form.class_name),
            ("Fase", form.phase),
            ("Semester", form.semester),
            ("Mata Pelajaran", form.subject),
            ("Topik/Tema", form.topic_theme),
            ("Alokasi Waktu", form.time_allocation),
            ("Jumlah Pertemuan", form.meetings),
        ]),
        _format_block("3. Konteks Pembelajaran", [
            ("Capaian Pembelajaran (CP) Ringkas", form.learning_outcomes),
            ("Nilai Minimal Ketercapaian (KKM)", _threshold_text(form)),
            ("Konteks & Sumber Daya", form.learning_context),
            ("Sarana dan Prasarana di Kelas", form.facilities),
        ]),
        _format_block("4. Identifikasi Awal Siswa", [
            ("Karakteristik Siswa", form.student_characteristics),
            ("Minat Belajar", form.learning_interests),
            ("Motivasi Belajar", form.learning_motivation),
            ("Prestasi Belajar", form.learning_achievement),
            ("Lingkungan Sekolah", form.school_environment),
        ]),
        _format_block("5. Kerangka Pembelajaran Mendalam", [
            ("Dimensi Profil Lulusan yang Ditekankan", dimensions),
            ("Model/Strategi Pedagogis Utama", form.pedagogy_model.value),
        ]),
    ]

    if form.is_slb:
        values = [
            form.slb_category,
            form.iep_targets,
            form.sensory_profile,
            form.communication_mode,
            form.assistive_tools,
            form.assistant_role,
        ]
        sections.append(_format_block(
            "6. Data Khusus Siswa Berkebutuhan Khusus (ABK)",
            list(zip(SLB_FIELD_LABELS, values)),
        ))

    return sections


def build_prompt(form: FormInput) -> str:
    """
    Build the full generation prompt for a form.

    Args:
        form: Fully populated form input

    Returns:
        Prompt string: preamble, format rules, labeled form data and the
        special-education block when the unit type requires it
    """
    data = "\n\n".join(get_data_sections(form))
    rules = FORMAT_RULES.format(threshold=_threshold_text(form))

    return f"""{ROLE_PREAMBLE}

{rules}

Berikut adalah data untuk penyusunan RPP:

--- DATA RPP ---

{data}

--- AKHIR DATA ---

{CLOSING_INSTRUCTION}"""
