"""
LLM-backed collaborators.

- cv_scorer: scores a CV against a job or internship
"""

from jobboard.agents.cv_scorer import FALLBACK_RESULT, CvScorer, ScoreResult, create_scoring_model

__all__ = ["CvScorer", "ScoreResult", "FALLBACK_RESULT", "create_scoring_model"]
