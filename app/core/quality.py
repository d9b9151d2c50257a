"""
Extraction quality for parsed profiles.

Per-field completeness lets the API tell callers how much of the record the heuristics
actually recovered, and decide when an extraction is too thin to be worth returning.

Score scale:
  1.0   = Field present and well-formed
  0.7   = Present but thin (very short text, a single entry)
  0.0   = Missing
"""

from typing import Dict, List, Sequence

from app.core.schemas import ParseQuality, ProfileRecord


CORE_FIELDS = ["name", "headline", "about"]


class QualityCalculator:
    """Central place for profile completeness logic."""

    @staticmethod
    def text_field(value: str, min_len: int) -> float:
        if not value:
            return 0.0
        return 1.0 if len(value) >= min_len else 0.7

    @staticmethod
    def list_field(values: Sequence[str], full_at: int) -> float:
        """1.0 once `full_at` entries exist, 0.7 below that, 0.0 when empty."""
        if not values:
            return 0.0
        return 1.0 if len(values) >= full_at else 0.7

    @staticmethod
    def score_fields(profile: ProfileRecord) -> Dict[str, float]:
        return {
            "name": QualityCalculator.text_field(profile.name, 5),
            "headline": QualityCalculator.text_field(profile.headline, 15),
            "about": QualityCalculator.text_field(profile.about, 50),
            "experience": QualityCalculator.list_field(profile.experience, 2),
            "skills": QualityCalculator.list_field(profile.skills, 5),
            "education": QualityCalculator.list_field(profile.education, 1),
            "certifications": QualityCalculator.list_field(profile.certifications, 1),
        }

    @staticmethod
    def overall_quality(field_scores: Dict[str, float]) -> ParseQuality:
        """
        Quality tiers:
          "high"   : core fields (name, headline, about) average >= 0.85 and experience found
          "medium" : core fields average >= 0.5
          "low"    : otherwise
        """
        core = [field_scores.get(f, 0.0) for f in CORE_FIELDS]
        avg_core = sum(core) / len(core)

        if avg_core >= 0.85 and field_scores.get("experience", 0.0) > 0:
            return "high"
        elif avg_core >= 0.5:
            return "medium"
        else:
            return "low"


def is_meaningful(profile: ProfileRecord, count_experience: bool = False) -> bool:
    """
    False when nothing identifying was recovered: name, headline and about all empty.

    With `count_experience`, experience entries alone still count as a meaningful
    extraction (PDF uploads are often CVs without a headline).
    """
    if profile.name or profile.headline or profile.about:
        return True
    if count_experience:
        return bool(profile.experience)
    return False


def collect_warnings(profile: ProfileRecord) -> List[str]:
    warnings: List[str] = []
    if not profile.name:
        warnings.append("Could not detect the profile owner's name.")
    if not profile.headline:
        warnings.append("No headline detected.")
    if not profile.about:
        warnings.append("No about/summary section detected.")
    if not profile.experience:
        warnings.append("No experience entries detected.")
    if not profile.skills:
        warnings.append("No skills detected.")
    return warnings
