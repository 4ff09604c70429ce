"""
Tests for core/form.py - Form input model and state holder
"""
import pytest
from rpp_copilot.core.form import FormInput, FormState, GraduateProfileDimension, PedagogyModel


class TestFormInput:
    """Test FormInput validation helpers"""

    def test_defaults(self):
        form = FormInput()
        assert form.education_unit_type == "Umum"
        assert form.pedagogy_model == PedagogyModel.PJBL
        assert form.graduate_profile_dimensions == []

    def test_complete_form_has_no_missing_fields(self, sample_form):
        assert sample_form.missing_fields() == []

    def test_missing_fields_lists_labels(self):
        form = FormInput(school_name="SMPN 1")
        missing = form.missing_fields()
        assert "Nama Sekolah" not in missing
        assert "Mata Pelajaran" in missing

    def test_slb_fields_ignored_for_general_school(self, sample_form):
        assert "Kategori Kebutuhan" not in sample_form.missing_fields()

    def test_slb_fields_required_for_slb(self, sample_form):
        form = sample_form.model_copy(update={"education_unit_type": "SLB/ABK"})
        missing = form.missing_fields()
        assert "Kategori Kebutuhan" in missing
        assert "Mode Komunikasi" in missing

    def test_slb_form_complete(self, slb_form):
        assert slb_form.missing_fields() == []

    @pytest.mark.parametrize("kktp,expected", [
        ("80", 80),
        (" 70 ", 70),
        ("", 75),
        ("abc", 75),
        ("150", 100),
        ("-5", 0),
    ])
    def test_achievement_threshold(self, kktp, expected):
        assert FormInput(kktp=kktp).achievement_threshold == expected


class TestFormState:
    """Test FormState mutation and snapshot"""

    def test_update_and_snapshot(self):
        state = FormState()
        state.update("subject", "Matematika")
        state.update("pedagogy_model", PedagogyModel.INQUIRY.value)

        form = state.snapshot()
        assert form.subject == "Matematika"
        assert form.pedagogy_model == PedagogyModel.INQUIRY

    def test_unknown_field_rejected(self):
        state = FormState()
        with pytest.raises(KeyError):
            state.update("not_a_field", "x")

    def test_toggle_dimension(self):
        state = FormState()
        state.toggle_dimension(GraduateProfileDimension.KREATIVITAS)
        assert state.snapshot().graduate_profile_dimensions == [GraduateProfileDimension.KREATIVITAS]

        state.toggle_dimension(GraduateProfileDimension.KREATIVITAS)
        assert state.snapshot().graduate_profile_dimensions == []

    def test_snapshot_is_independent_copy(self):
        state = FormState(subject="IPA")
        form = state.snapshot()
        state.update("subject", "IPS")
        assert form.subject == "IPA"
