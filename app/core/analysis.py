"""
Prompt construction for the external profile-analysis model, and validation of what
it sends back.

The model's reply is untrusted text: markdown fences are stripped, the JSON is
validated against AnalysisResult, and anything unusable is replaced by a
deterministic fallback built from the profile itself.
"""

import json
import logging
import re
from typing import Tuple

from pydantic import ValidationError

from app.core.schemas import (
    AnalysisResult,
    CareerMatch,
    ExperienceImprovement,
    ProfileRecord,
    Rewrites,
    SectionScores,
)

logger = logging.getLogger(__name__)


SYSTEM_PREAMBLE = (
    "You are a professional profile analyzer and career coach. "
    "Provide detailed, actionable feedback in the exact JSON format requested."
)

RESPONSE_SHAPE = """{
  "overallScore": number (0-100),
  "sectionScores": {
    "headline": number (0-100),
    "about": number (0-100),
    "experience": number (0-100),
    "skills": number (0-100),
    "education": number (0-100)
  },
  "rewrites": {
    "headline": "Professional rewrite of the headline",
    "about": "Professional rewrite of the about section",
    "experienceImprovements": [
      {"originalRole": "Role as written", "improvedDescription": "Rewritten description"}
    ],
    "skillsPresentation": "Professional rewrite for skills presentation"
  },
  "insights": ["Key insight about the profile"],
  "strongSkills": ["5-7 strongest skills identified"],
  "missingSkills": ["5-7 skills missing for career advancement"],
  "skillRecommendations": ["Specific recommendation for skill development"],
  "careerMatches": [
    {
      "role": "Job title that matches the profile",
      "matchPercentage": number (0-100),
      "description": "Why this role is a good fit",
      "requirements": ["Key requirement"]
    }
  ]
}"""

GUIDELINES = [
    "Be objective and constructive in your assessment",
    "Focus on professional growth opportunities",
    "Provide specific, actionable recommendations",
    "Identify both strengths and areas for improvement",
    "Suggest 2-3 career matches that align with the profile",
    "Make rewrites professional, engaging, and ATS-friendly",
]


def build_analysis_prompt(profile: ProfileRecord) -> str:
    """Deterministic prompt embedding every profile field and the expected JSON shape."""
    guidelines = "\n".join(f"{i}. {g}" for i, g in enumerate(GUIDELINES, start=1))
    return (
        f"{SYSTEM_PREAMBLE}\n\n"
        "Analyze the following professional profile and provide a comprehensive assessment in JSON format.\n\n"
        "Profile Data:\n"
        f"- Name: {profile.name}\n"
        f"- Headline: {profile.headline}\n"
        f"- About: {profile.about}\n"
        f"- Experience: {chr(10).join(profile.experience)}\n"
        f"- Skills: {', '.join(profile.skills)}\n"
        f"- Education: {chr(10).join(profile.education)}\n"
        f"- Certifications: {', '.join(profile.certifications)}\n\n"
        f"Return a JSON object with the following structure:\n\n{RESPONSE_SHAPE}\n\n"
        f"Analysis Guidelines:\n{guidelines}\n\n"
        "Return only the JSON object, no additional text or formatting."
    )


CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?```\s*$", re.DOTALL | re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` block if present."""
    text = (text or "").strip()
    m = CODE_FENCE_RE.match(text)
    if m:
        return m.group(1).strip()
    return text


def fallback_analysis(profile: ProfileRecord) -> AnalysisResult:
    """Neutral analysis used when the model's reply cannot be used."""
    top_skills = ", ".join(profile.skills[:3])
    return AnalysisResult(
        overall_score=75,
        section_scores=SectionScores(headline=80, about=70, experience=75, skills=70, education=80),
        rewrites=Rewrites(
            headline=(
                f"Experienced professional in {profile.headline or 'your field'} "
                "with expertise in delivering results"
            ),
            about=f"Professional summary highlighting your key achievements and expertise in {top_skills}.",
            experience_improvements=[
                ExperienceImprovement(
                    original_role="Current Role",
                    improved_description="Enhanced experience descriptions with quantified achievements and impact metrics.",
                )
            ],
            skills_presentation=(
                f"Comprehensive skill set including {', '.join(profile.skills)} "
                "with proven application in professional settings."
            ),
        ),
        insights=[
            "Your profile shows strong technical expertise",
            "Consider adding more quantified achievements",
            "Professional summary could be more compelling",
        ],
        strong_skills=list(profile.skills[:5]),
        missing_skills=["Leadership", "Project Management", "Data Analysis"],
        skill_recommendations=[
            "Consider obtaining certifications in your core competencies",
            "Develop leadership and management skills",
            "Stay current with industry trends and technologies",
        ],
        career_matches=[
            CareerMatch(
                role="Senior Professional",
                match_percentage=85,
                description="Advanced role matching your current skill set and experience level.",
                requirements=["Experience", "Technical Skills", "Leadership"],
            )
        ],
    )


def parse_analysis_response(text: str, profile: ProfileRecord) -> Tuple[AnalysisResult, bool]:
    """
    Validate the model's reply.

    Returns:
        (result, used_fallback)
    """
    json_text = strip_code_fences(text)
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        truncated = json_text[:200] + ("..." if len(json_text) > 200 else "")
        logger.warning(f"Analysis reply is not valid JSON ({e.msg}): {truncated!r}")
        return fallback_analysis(profile), True

    try:
        return AnalysisResult.model_validate(data), False
    except ValidationError as e:
        logger.warning(f"Analysis reply failed schema validation: {e.error_count()} error(s)")
        return fallback_analysis(profile), True
