from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Literal, Optional, Tuple


ParseQuality = Literal["high", "medium", "low"]
TextSource = Literal["pdf", "docx", "ocr", "url", "user"]


class ProfileRecord(BaseModel):
    """Structured profile recovered from free text. Immutable once returned by the parser."""
    model_config = ConfigDict(frozen=True)

    name: str = ""
    headline: str = ""
    about: str = ""
    # Tuples, so a returned record cannot be changed in place either
    experience: Tuple[str, ...] = Field(default_factory=tuple, description="One multi-line block per job, document order")
    skills: Tuple[str, ...] = Field(default_factory=tuple)
    education: Tuple[str, ...] = Field(default_factory=tuple, description="One multi-line block per school/degree")
    certifications: Tuple[str, ...] = Field(default_factory=tuple)


class ParseResponse(BaseModel):
    profile: ProfileRecord
    source: TextSource
    parse_quality: ParseQuality
    field_scores: Dict[str, float] = Field(
        default_factory=dict,
        description="Per-field completeness, 0.0 (missing) to 1.0",
    )
    warnings: List[str] = Field(default_factory=list)


class TextParseRequest(BaseModel):
    text: str = Field(..., description="Raw profile text (pasted, extracted or scraped)")


class UrlParseRequest(BaseModel):
    url: str = Field(..., description="Public profile page to scrape")


# ============================================================================
# Generative analysis payload
# ============================================================================
# The external analysis model returns camelCase JSON. Every field it may omit is
# declared Optional so validation fails only on genuinely wrong shapes.

class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SectionScores(_CamelModel):
    headline: int = Field(..., ge=0, le=100)
    about: int = Field(..., ge=0, le=100)
    experience: int = Field(..., ge=0, le=100)
    skills: int = Field(..., ge=0, le=100)
    education: int = Field(..., ge=0, le=100)
    completeness: Optional[int] = Field(default=None, ge=0, le=100)
    presentation: Optional[int] = Field(default=None, ge=0, le=100)
    keyword_optimization: Optional[int] = Field(default=None, ge=0, le=100, alias="keywordOptimization")


class ExperienceImprovement(_CamelModel):
    original_role: str = Field(..., alias="originalRole")
    improved_description: str = Field(..., alias="improvedDescription")


class Rewrites(_CamelModel):
    headline: str
    about: str
    experience_improvements: Optional[List[ExperienceImprovement]] = Field(default=None, alias="experienceImprovements")
    skills_presentation: Optional[str] = Field(default=None, alias="skillsPresentation")


class CareerMatch(_CamelModel):
    role: str
    match_percentage: int = Field(..., ge=0, le=100, alias="matchPercentage")
    description: str
    requirements: List[str] = Field(default_factory=list)
    salary_range: Optional[str] = Field(default=None, alias="salaryRange")
    growth_potential: Optional[str] = Field(default=None, alias="growthPotential")
    skill_gaps: Optional[List[str]] = Field(default=None, alias="skillGaps")
    transition_strategy: Optional[str] = Field(default=None, alias="transitionStrategy")


class DetailedAnalysis(_CamelModel):
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    missing_elements: List[str] = Field(default_factory=list, alias="missingElements")
    inconsistencies: List[str] = Field(default_factory=list)


class IndustryBenchmarking(_CamelModel):
    profile_completeness: str = Field(..., alias="profileCompleteness")
    competitive_positioning: str = Field(..., alias="competitivePositioning")
    market_value: str = Field(..., alias="marketValue")
    differentiators: List[str] = Field(default_factory=list)


class AnalysisResult(_CamelModel):
    overall_score: int = Field(..., ge=0, le=100, alias="overallScore")
    section_scores: SectionScores = Field(..., alias="sectionScores")
    rewrites: Rewrites
    insights: List[str] = Field(default_factory=list)
    strong_skills: List[str] = Field(default_factory=list, alias="strongSkills")
    missing_skills: List[str] = Field(default_factory=list, alias="missingSkills")
    skill_recommendations: List[str] = Field(default_factory=list, alias="skillRecommendations")
    career_matches: List[CareerMatch] = Field(default_factory=list, alias="careerMatches")
    detailed_analysis: Optional[DetailedAnalysis] = Field(default=None, alias="detailedAnalysis")
    actionable_recommendations: Optional[List[str]] = Field(default=None, alias="actionableRecommendations")
    industry_benchmarking: Optional[IndustryBenchmarking] = Field(default=None, alias="industryBenchmarking")


class AnalysisValidationRequest(BaseModel):
    profile: ProfileRecord
    response_text: str = Field(..., description="Raw text returned by the analysis model")


class AnalysisValidationResponse(BaseModel):
    analysis: AnalysisResult
    used_fallback: bool


class AnalysisPromptResponse(BaseModel):
    prompt: str
