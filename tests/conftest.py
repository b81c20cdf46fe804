from __future__ import annotations

import io

import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient

from jobboard.agents.cv_scorer import CvScorer
from jobboard.api.app import create_app
from jobboard.api.limiter import limiter
from jobboard.db import DocumentStore, create_db_engine, init_db
from jobboard.resources import build_resources
from jobboard.tools.blob_store import BlobStore
from jobboard.tools.logo import LogoResolver

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse"


class FakeLogoResolver(LogoResolver):
    """Resolves every non-empty name without network access and records the lookups."""

    def __init__(self):
        super().__init__(base_url="https://logo.test", placeholder="/placeholder-logo.svg")
        self.calls: list[str] = []

    def resolve(self, name):
        self.calls.append(name)
        if not name:
            return self.placeholder
        return self.url_for(name)


class FakeS3Client:
    def __init__(self):
        self.objects: dict[str, bytes] = {}

    def generate_presigned_url(self, operation, Params, ExpiresIn):
        return f"https://s3.test/{Params['Bucket']}/{Params['Key']}?op={operation}&expires={ExpiresIn}"

    def get_object(self, Bucket, Key):
        if Key not in self.objects:
            raise ClientError({"Error": {"Code": "NoSuchKey", "Message": "missing"}}, "GetObject")
        return {"Body": io.BytesIO(self.objects[Key])}


@pytest.fixture
def store() -> DocumentStore:
    engine = create_db_engine("sqlite://")
    init_db(engine)
    return DocumentStore(engine)


@pytest.fixture
def logos() -> FakeLogoResolver:
    return FakeLogoResolver()


@pytest.fixture
def resources(store, logos):
    return build_resources(store, logos)


@pytest.fixture
def s3_client() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def app(store, logos, s3_client):
    limiter.enabled = False
    application = create_app(
        store=store,
        logos=logos,
        scorer=CvScorer(model=None),
        blobs=BlobStore(bucket="test-bucket", client=s3_client),
    )
    yield application
    limiter.enabled = True


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(app, client) -> dict[str, str]:
    app.state.resources.admins.create_admin(ADMIN_EMAIL, ADMIN_PASSWORD, "admin")
    response = client.post("/api/v1/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
