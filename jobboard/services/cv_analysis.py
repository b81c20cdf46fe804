"""
CV analysis against a job or internship.

Reads the uploaded CV from the blob store, extracts its text, asks the
scorer for an analysis and, for jobs, suggests other active jobs whose tags
overlap the CV's matching skills.
"""

import logging

from jobboard.agents.cv_scorer import CvScorer
from jobboard.db import DocumentStore, Eq, Filter, Ne
from jobboard.errors import StoreError, ValidationError
from jobboard.resources import Resources
from jobboard.tools.blob_store import BlobStore
from jobboard.tools.pdf_parser import parse_pdf
from jobboard.utils.text import coerce_list

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5


def count_skill_matches(skills: list[str], tags) -> int:
    """Number of skills appearing (case-insensitively) inside any tag."""
    tags = [t.lower() for t in coerce_list(tags)]
    return sum(1 for skill in skills if any(skill.lower() in tag for tag in tags))


def suggest_jobs(store: DocumentStore, table: str, skills: list[str], exclude_job_id: str) -> list[dict]:
    """Top active jobs ranked by how many ``skills`` their tags mention."""
    candidates = store.scan(table, Filter((Eq("status", "active"), Ne("jobId", exclude_job_id))))
    scored = [(count_skill_matches(skills, job.get("tags")), job) for job in candidates]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [
        {
            "jobId": job.get("jobId"),
            "role": job.get("role"),
            "companyName": job.get("companyName"),
            "location": job.get("location"),
            "matchScore": score,
        }
        for score, job in scored[:MAX_SUGGESTIONS]
    ]


class CvAnalyzer:
    def __init__(self, resources: Resources, blobs: BlobStore, scorer: CvScorer):
        self.resources = resources
        self.blobs = blobs
        self.scorer = scorer

    def analyze(self, cv_key: str | None, job_id: str | None = None, internship_id: str | None = None) -> dict:
        """
        Score the CV at ``cv_key`` against a job or an internship.

        Args:
            cv_key: Blob key of an uploaded PDF
            job_id: Job to compare against
            internship_id: Internship to compare against (wins over job_id)

        Returns:
            ``{"analysis": ..., "suggestedJobs": [...]}``
        """
        if (not job_id and not internship_id) or not cv_key:
            raise ValidationError("jobId or internshipId and cvS3Key are required")
        if not cv_key.lower().endswith(".pdf"):
            raise ValidationError("Only PDF files are supported for CV analysis.")

        if internship_id:
            listing, kind = self.resources.internships.get(internship_id), "internship"
        else:
            listing, kind = self.resources.jobs.get(job_id), "job"

        cv_text = parse_pdf(self.blobs.get_bytes(cv_key))
        if not cv_text.strip():
            raise ValidationError("PDF appears to be empty or unreadable")

        analysis = self.scorer.score(listing, cv_text, kind)

        suggested: list[dict] = []
        if kind == "job" and not analysis.error:
            try:
                suggested = suggest_jobs(
                    self.resources.jobs.store, self.resources.jobs.table, analysis.matchingSkills, job_id
                )
            except StoreError as e:
                logger.warning(f"Could not load suggested jobs: {e}")

        return {"analysis": analysis.model_dump(exclude_none=True), "suggestedJobs": suggested}
