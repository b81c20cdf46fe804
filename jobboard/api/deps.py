"""Request dependencies: collaborators built once per app and kept on ``app.state``."""

from fastapi import Request

from jobboard.resources import Resources
from jobboard.services.cv_analysis import CvAnalyzer
from jobboard.tools.blob_store import BlobStore


def get_resources(request: Request) -> Resources:
    return request.app.state.resources


def get_blob_store(request: Request) -> BlobStore:
    return request.app.state.blobs


def get_analyzer(request: Request) -> CvAnalyzer:
    return request.app.state.analyzer
