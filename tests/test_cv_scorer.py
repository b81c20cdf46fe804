from __future__ import annotations

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from jobboard.agents.cv_scorer import (
    FALLBACK_RESULT,
    NOT_A_CV_ERROR,
    CvScorer,
    LineImprovement,
    ScoreResult,
    build_prompt,
)

JOB = {
    "role": "Backend Engineer",
    "companyName": "Acme",
    "location": "Pune",
    "jobDescription": "Build APIs",
    "tags": ["Python", "AWS"],
}


class ExplodingModel:
    def invoke(self, messages):
        raise TimeoutError("model timed out")


def _scorer(*responses: str) -> CvScorer:
    return CvScorer(model=FakeListChatModel(responses=list(responses)))


def test_prompt_embeds_listing_and_cv() -> None:
    prompt = build_prompt(JOB, "Jane Doe, Python developer", "job")
    assert "Role: Backend Engineer" in prompt
    assert "Required Skills/Tags: Python, AWS" in prompt
    assert "Jane Doe, Python developer" in prompt
    assert NOT_A_CV_ERROR in prompt

    internship = build_prompt({"title": "Intern", "company": "Globex", "batch": "2025"}, "cv", "internship")
    assert "Title: Intern" in internship
    assert "Company: Globex" in internship
    assert "Batch: 2025" in internship


def test_parses_fenced_json_with_line_improvements() -> None:
    answer = """Sure, here is the analysis:
```json
{
  "compatibilityScore": 78,
  "strengths": ["Python"],
  "weaknesses": [
    "No cloud experience",
    {"originalLine": "Worked on APIs", "improvedLine": "Built 12 REST APIs serving 2M requests/day"}
  ],
  "improvements": ["Quantify impact"],
  "matchingSkills": ["Python"],
  "missingSkills": ["AWS"]
}
```"""
    result = _scorer(answer).score(JOB, "cv text")

    assert result.compatibilityScore == 78
    assert result.weaknesses[0] == "No cloud experience"
    assert result.weaknesses[1] == LineImprovement(
        originalText="Worked on APIs", improvedText="Built 12 REST APIs serving 2M requests/day"
    )
    assert result.error is None


@pytest.mark.parametrize(("raw", "expected"), [(140, 100), (-5, 0), ("72.6", 73)])
def test_score_is_rounded_and_clamped(raw, expected) -> None:
    assert ScoreResult.model_validate({"compatibilityScore": raw}).compatibilityScore == expected


def test_refusal_is_passed_through() -> None:
    result = _scorer(f'{{"error": "{NOT_A_CV_ERROR}"}}').score(JOB, "Dear hiring manager")
    assert result.error == NOT_A_CV_ERROR
    assert "error" in result.model_dump(exclude_none=True)


@pytest.mark.parametrize(
    "answer",
    [
        "I cannot help with that.",
        '{"compatibilityScore": "very high"}',
        '{"compatibilityScore": 50, "weaknesses": [{"originalLine": "only half"}]}',
    ],
)
def test_unusable_answers_fall_back(answer) -> None:
    assert _scorer(answer).score(JOB, "cv") == FALLBACK_RESULT


def test_model_failure_falls_back() -> None:
    assert CvScorer(model=ExplodingModel()).score(JOB, "cv") == FALLBACK_RESULT


def test_missing_model_falls_back_with_a_copy() -> None:
    result = CvScorer(model=None).score(JOB, "cv")
    assert result.compatibilityScore == 60
    result.strengths.append("mutated")
    assert "mutated" not in FALLBACK_RESULT.strengths
