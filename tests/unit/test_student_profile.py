"""
Unit tests for StudentProfile and LearningPreferences.

Tests:
- Defaults applied over partial input
- Preference key handling (camelCase / snake_case, unknown keys)
- Age-based and topic-based predicates
"""

import pytest

from src.models.student_profile import PREFERENCE_KEYS, LearningPreferences, StudentProfile


class TestLearningPreferences:
    """Test suite for LearningPreferences."""

    def test_defaults(self):
        prefs = LearningPreferences().to_dict()
        assert prefs == {
            "easyReading": False,
            "examples": True,
            "analogies": True,
            "stepByStep": True,
            "visualAids": False,
            "realWorldContext": True,
        }

    def test_partial_merge_keeps_all_six_keys(self):
        prefs = LearningPreferences.from_dict({"easyReading": True})
        data = prefs.to_dict()
        assert set(data) == set(PREFERENCE_KEYS)
        assert data["easyReading"] is True
        assert data["examples"] is True

    def test_snake_case_keys_accepted(self):
        prefs = LearningPreferences.from_dict({"step_by_step": False})
        assert prefs.step_by_step is False

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError, match="Unknown preference key"):
            LearningPreferences.from_dict({"darkMode": True})

    def test_non_boolean_rejected(self):
        with pytest.raises(ValueError, match="boolean"):
            LearningPreferences.from_dict({"examples": 1})

    def test_enabled(self):
        prefs = LearningPreferences.from_dict({"analogies": False})
        assert prefs.enabled() == ["examples", "stepByStep", "realWorldContext"]


class TestStudentProfile:
    """Test suite for StudentProfile."""

    def test_empty_input_uses_defaults(self):
        profile = StudentProfile.from_dict(None)
        assert profile.age is None
        assert profile.prior_knowledge == ()
        assert profile.preferences == LearningPreferences()

    def test_from_dict(self, young_profile):
        profile = StudentProfile.from_dict(young_profile)
        assert profile.age == 14
        assert profile.level_detail == "9th grade"
        assert profile.interests == ("football", "video games")
        assert profile.preferences.easy_reading is True

    def test_duplicates_and_blanks_dropped(self):
        profile = StudentProfile.from_dict({"interests": ["chess", "", "chess", "music"]})
        assert profile.interests == ("chess", "music")

    def test_profile_is_immutable(self):
        profile = StudentProfile(age=20)
        with pytest.raises(AttributeError):
            profile.age = 21

    @pytest.mark.parametrize("age,expected", [(10, True), (15, True), (16, False), (30, False), (None, False)])
    def test_is_young_student(self, age, expected):
        assert StudentProfile(age=age).is_young_student() is expected

    def test_has_knowledge_substring_case_insensitive(self):
        profile = StudentProfile.from_dict({"priorKnowledge": ["Basic Derivatives"]})
        assert profile.has_knowledge("derivatives")
        assert profile.has_knowledge("DERIVATIVES")
        assert not profile.has_knowledge("integrals")

    def test_has_difficulty(self, young_profile):
        profile = StudentProfile.from_dict(young_profile)
        assert profile.has_difficulty("integrals")
        assert not profile.has_difficulty("fractions")

    def test_blank_topic_never_matches(self, young_profile):
        profile = StudentProfile.from_dict(young_profile)
        assert not profile.has_knowledge("")
        assert not profile.has_difficulty("   ")

    def test_needs_detailed_explanations(self):
        plain = StudentProfile.from_dict(
            {"preferences": {"stepByStep": False, "examples": False}}
        )
        assert not plain.needs_detailed_explanations()
        assert StudentProfile().needs_detailed_explanations()

    def test_to_dict_round_trip(self, university_profile):
        profile = StudentProfile.from_dict(university_profile)
        assert StudentProfile.from_dict(profile.to_dict()) == profile

    def test_repr(self):
        assert "age=14" in repr(StudentProfile(age=14))
