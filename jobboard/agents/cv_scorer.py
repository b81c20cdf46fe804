"""
CV Scorer.

Scores a candidate's CV against a job or internship with a chat model.
The call is best-effort: any failure, timeout or unparsable answer yields
FALLBACK_RESULT so CV analysis stays available when the model is not.
"""

import logging
from typing import Literal

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage
from pydantic import AliasChoices, BaseModel, Field, field_validator

from jobboard.config import settings
from jobboard.utils.parser import extract_json
from jobboard.utils.text import coerce_list

logger = logging.getLogger(__name__)

ListingKind = Literal["job", "internship"]

NOT_A_CV_ERROR = "Please upload a CV or resume, not other document."


class LineImprovement(BaseModel):
    """A CV line quoted verbatim with a rewritten version."""

    originalText: str = Field(validation_alias=AliasChoices("originalText", "originalLine"))
    improvedText: str = Field(validation_alias=AliasChoices("improvedText", "improvedLine"))


class ScoreResult(BaseModel):
    compatibilityScore: int = 0
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[LineImprovement | str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    matchingSkills: list[str] = Field(default_factory=list)
    missingSkills: list[str] = Field(default_factory=list)
    error: str | None = None

    @field_validator("compatibilityScore", mode="before")
    @classmethod
    def clamp_score(cls, value):
        try:
            score = round(float(value))
        except (TypeError, ValueError):
            raise ValueError(f"compatibilityScore must be a number, got {value!r}")
        return max(0, min(100, score))


FALLBACK_RESULT = ScoreResult(
    compatibilityScore=60,
    strengths=[
        "Strong technical background in relevant technologies",
        "Good educational qualifications",
        "Relevant work experience",
        "Problem-solving skills demonstrated",
    ],
    weaknesses=[
        "Limited experience with specific frameworks mentioned in job",
        "Could improve communication skills section",
        "Missing some industry certifications",
    ],
    improvements=[
        "Add more specific project details and outcomes",
        "Include relevant certifications or courses",
        "Highlight leadership and teamwork experiences",
        "Quantify achievements with numbers and metrics",
        "Tailor skills section to match job requirements",
    ],
    matchingSkills=["JavaScript", "React", "Node.js", "Problem Solving"],
    missingSkills=["AWS", "Docker", "Kubernetes", "CI/CD"],
)

CV_SCORER_PROMPT = """You are an expert resume reviewer. Analyze ONLY CVs/resumes.
If the document below is not a CV or resume (cover letter, application letter, anything else), do NOT score it. Return exactly:
{{"error": "{not_a_cv}"}}

Otherwise review the CV against the {kind} below. Be strict and realistic: only give a high compatibility score for a truly excellent match.

## Weaknesses
- When a specific CV line needs work, return {{"originalLine": "<quoted line>", "improvedLine": "<rewritten line>"}}
- Otherwise return a plain, actionable string

## Improvements
- Specific to THIS CV's content; reference the actual sections or lines. No generic advice.

## {kind_upper} DETAILS
{details}

## CV CONTENT
{cv_text}

## Output Format (JSON only, no explanation)
{{
    "compatibilityScore": <0-100>,
    "strengths": ["..."],
    "weaknesses": ["..." or {{"originalLine": "...", "improvedLine": "..."}}],
    "improvements": ["..."],
    "matchingSkills": ["skills from the CV that match the {kind}"],
    "missingSkills": ["important skills missing from the CV"]
}}
"""


def _joined(value) -> str:
    items = coerce_list(value)
    return ", ".join(items) if items else "Not specified"


def build_prompt(listing: dict, cv_text: str, kind: ListingKind) -> str:
    """Embed the listing's descriptive fields and the CV text in the scoring prompt."""
    if kind == "internship":
        lines = [f"Title: {listing.get('title', '')}"]
    else:
        lines = [f"Role: {listing.get('role', '')}"]
    lines += [
        f"Company: {listing.get('companyName') or listing.get('company') or ''}",
        f"Location: {listing.get('location', '')}",
        f"Description: {listing.get('jobDescription') or listing.get('description') or ''}",
        f"Required Skills/Tags: {_joined(listing.get('tags') or listing.get('skills'))}",
    ]
    if kind == "internship":
        lines.append(f"Batch: {_joined(listing.get('batch'))}")

    return CV_SCORER_PROMPT.format(
        not_a_cv=NOT_A_CV_ERROR,
        kind=kind,
        kind_upper=kind.upper(),
        details="\n".join(lines),
        cv_text=cv_text,
    )


def create_scoring_model() -> BaseChatModel | None:
    """Create the chat model, or None when no API key is configured."""
    if not settings.deepseek_api_key:
        return None

    from langchain_deepseek import ChatDeepSeek

    return ChatDeepSeek(
        model=settings.llm_model,
        api_key=settings.deepseek_api_key,
        temperature=0.1,
        timeout=settings.llm_timeout,
        max_retries=0,
    )


def _message_text(content) -> str:
    if isinstance(content, str):
        return content
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class CvScorer:
    """Score CVs with a chat model, falling back to FALLBACK_RESULT."""

    def __init__(self, model: BaseChatModel | None = None):
        self.model = model

    def score(self, listing: dict, cv_text: str, kind: ListingKind = "job") -> ScoreResult:
        if self.model is None:
            logger.warning("No scoring model configured, using fallback analysis")
            return FALLBACK_RESULT.model_copy(deep=True)

        prompt = build_prompt(listing, cv_text, kind)
        try:
            response = self.model.invoke([HumanMessage(content=prompt)])
            payload = extract_json(_message_text(response.content))
            if not isinstance(payload, dict):
                raise ValueError("model response contained no JSON object")
            return ScoreResult.model_validate(payload)
        except Exception as e:
            logger.warning(f"CV scoring failed, using fallback analysis: {e}")
            return FALLBACK_RESULT.model_copy(deep=True)
