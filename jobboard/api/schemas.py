"""API request/response schemas."""

from typing import Any

from pydantic import BaseModel, Field

from jobboard.agents.cv_scorer import ScoreResult
from jobboard.services.pipeline import Pagination


class MessageResponse(BaseModel):
    message: str


# Listing responses
class JobListResponse(BaseModel):
    jobs: list[dict[str, Any]]
    pagination: Pagination


class InternshipListResponse(BaseModel):
    internships: list[dict[str, Any]]
    pagination: Pagination


class CertificationListResponse(BaseModel):
    certifications: list[dict[str, Any]]
    pagination: Pagination


class WalkingListResponse(BaseModel):
    walking: list[dict[str, Any]]
    pagination: Pagination


class SubscriptionListResponse(BaseModel):
    subscriptions: list[dict[str, Any]]
    pagination: Pagination


class ActivityListResponse(BaseModel):
    activities: list[dict[str, Any]]
    pagination: Pagination


class FilterOptionsResponse(BaseModel):
    categories: list[str]
    locations: list[str]
    batches: list[str] | None = None


# Subscriptions
class SubscribeRequest(BaseModel):
    email: str | None = None
    categories: list[str] | None = None


class SubscribeResponse(BaseModel):
    message: str
    email: str
    categories: list[str]


# Admin schemas
class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class AdminProfile(BaseModel):
    email: str
    role: str


class LoginResponse(BaseModel):
    message: str
    token: str
    admin: AdminProfile


class CreateAdminRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    role: str | None = None


class CreateAdminResponse(BaseModel):
    message: str
    admin: AdminProfile


class StatsResponse(BaseModel):
    totalPrivateJobs: int
    activePrivateJobs: int
    totalGovtJobs: int
    activeGovtJobs: int
    totalInternships: int
    activeInternships: int
    totalWalking: int
    activeWalking: int
    totalCertifications: int
    totalSubscriptions: int


# AI / S3 schemas
class AnalyzeCvRequest(BaseModel):
    jobId: str | None = None
    internshipId: str | None = None
    cvS3Key: str | None = Field(default=None, description="Key returned by /s3/pre-signed-url")


class SuggestedJob(BaseModel):
    jobId: str | None
    role: str | None
    companyName: str | None
    location: str | None
    matchScore: int


class AnalyzeCvResponse(BaseModel):
    analysis: ScoreResult
    suggestedJobs: list[SuggestedJob]


class PresignedUrlResponse(BaseModel):
    uploadUrl: str
    key: str
    expiresIn: int
