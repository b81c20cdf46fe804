from __future__ import annotations

from conftest import ADMIN_EMAIL

JOBS = "/api/v1/jobs"

JOB = {
    "role": "Backend Engineer",
    "companyName": "Acme",
    "location": "Pune",
    "salary": "12 LPA",
    "jobDescription": "APIs",
    "originalLink": "https://acme.example/jobs/1",
    "category": "Tech",
    "expiresOn": "2030-01-01",
}


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_create_job_sets_server_fields(client, admin_headers) -> None:
    response = client.post(JOBS, json=JOB, headers=admin_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "active"
    assert body["jobId"]
    assert body["postedOn"]

    listing = client.get(JOBS, params={"category": "Tech"}).json()
    assert [j["jobId"] for j in listing["jobs"]] == [body["jobId"]]
    assert listing["pagination"]["totalItems"] == 1


def test_mutations_require_a_token(client) -> None:
    response = client.post(JOBS, json=JOB)
    assert response.status_code == 401
    assert response.json() == {"error": "Access token required"}

    response = client.delete(f"{JOBS}/anything", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


def test_missing_field_is_a_400(client, admin_headers) -> None:
    response = client.post(JOBS, json={**JOB, "role": ""}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "role is required"}


def test_unknown_job_is_a_404(client) -> None:
    response = client.get(f"{JOBS}/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Job not found"}


def test_delete_twice_succeeds(client, admin_headers) -> None:
    job_id = client.post(JOBS, json=JOB, headers=admin_headers).json()["jobId"]

    first = client.delete(f"{JOBS}/{job_id}", headers=admin_headers)
    second = client.delete(f"{JOBS}/{job_id}", headers=admin_headers)

    assert first.status_code == 200
    assert first.json() == {"message": "Job deleted successfully"}
    assert second.status_code == 200
    assert second.json() == {"message": "Job deleted successfully (not found, already deleted)"}


def test_update_moves_job_between_categories(client, admin_headers) -> None:
    job_id = client.post(JOBS, json=JOB, headers=admin_headers).json()["jobId"]

    response = client.put(f"{JOBS}/{job_id}", json={"category": "Ops"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["category"] == "Ops"
    assert client.get(JOBS, params={"category": "Tech"}).json()["jobs"] == []
    assert client.get(JOBS, params={"category": "Ops"}).json()["pagination"]["totalItems"] == 1


def test_bulk_upload_csv(client, admin_headers) -> None:
    header = ",".join(JOB)
    rows = [",".join(f"{v}{i}" if k == "role" else v for k, v in JOB.items()) for i in range(3)]
    content = "\n".join([header, *rows, "Broken,,,,,,,"]).encode()

    response = client.post(
        f"{JOBS}/bulk-upload",
        files={"file": ("jobs.csv", content, "text/csv")},
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["uploaded"] == 3
    assert body["errors"] == [{"row": 4, "error": "companyName is required"}]


def test_bulk_upload_requires_a_file(client, admin_headers) -> None:
    response = client.post(f"{JOBS}/bulk-upload", headers=admin_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "File is required"}


def test_login_failure(client, admin_headers) -> None:
    response = client.post("/api/v1/admin/login", json={"email": ADMIN_EMAIL, "password": "wrong"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_activity_is_recorded(client, admin_headers) -> None:
    job_id = client.post(JOBS, json=JOB, headers=admin_headers).json()["jobId"]

    response = client.get("/api/v1/admin/recent-activity", headers=admin_headers)

    assert response.status_code == 200
    activities = response.json()["activities"]
    assert activities[0]["action"] == "ADDED"
    assert activities[0]["targetType"] == "Job"
    assert activities[0]["targetId"] == job_id
    assert activities[0]["adminEmail"] == ADMIN_EMAIL


def test_stats(client, admin_headers) -> None:
    client.post(JOBS, json=JOB, headers=admin_headers)
    response = client.get("/api/v1/admin/stats", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["activePrivateJobs"] == 1


def test_subscribe_is_public_but_reading_is_not(client, admin_headers) -> None:
    response = client.post("/api/v1/subscriptions", json={"email": "reader@example.com", "categories": ["Tech"]})
    assert response.status_code == 201
    assert response.json()["categories"] == ["Tech"]

    assert client.get("/api/v1/subscriptions/reader@example.com").status_code == 401
    response = client.get("/api/v1/subscriptions/reader@example.com", headers=admin_headers)
    assert response.json()["categories"] == ["Tech"]


def test_certifications_include_provider_logo(client, admin_headers, logos) -> None:
    cert = {"title": "Solutions Architect", "provider": "AWS", "category": "Cloud", "link": "https://aws.example"}
    assert client.post("/api/v1/certifications", json=cert, headers=admin_headers).status_code == 201

    body = client.get("/api/v1/certifications/category/Cloud").json()
    assert body["certifications"][0]["providerLogo"] == logos.url_for("AWS")


def test_internship_filters(client, admin_headers) -> None:
    internship = {
        "title": "Intern",
        "company": "Acme",
        "location": "Remote",
        "applyLink": "https://a.example",
        "category": "Tech",
        "batch": "2025",
    }
    client.post("/api/v1/internships", json=internship, headers=admin_headers)

    response = client.get("/api/v1/internships/filters")
    assert response.json() == {"categories": ["Tech"], "locations": ["Remote"], "batches": ["2025"]}


def test_presigned_url(client) -> None:
    response = client.get("/api/v1/s3/pre-signed-url")

    assert response.status_code == 200
    body = response.json()
    assert body["key"].startswith("cvs/")
    assert body["key"].endswith(".pdf")
    assert body["uploadUrl"].startswith("https://s3.test/test-bucket/")
    assert body["expiresIn"] > 0


def test_analyze_cv_rejects_non_pdf(client) -> None:
    response = client.post("/api/v1/ai/analyze-cv", json={"jobId": "j1", "cvS3Key": "cvs/resume.docx"})
    assert response.status_code == 400


def test_analyze_cv_unknown_job(client) -> None:
    response = client.post("/api/v1/ai/analyze-cv", json={"jobId": "missing", "cvS3Key": "cvs/resume.pdf"})
    assert response.status_code == 404


def test_analyze_cv_missing_upload(client, admin_headers) -> None:
    job_id = client.post(JOBS, json=JOB, headers=admin_headers).json()["jobId"]
    response = client.post("/api/v1/ai/analyze-cv", json={"jobId": job_id, "cvS3Key": "cvs/nowhere.pdf"})
    assert response.status_code == 404
    assert response.json() == {"error": "CV file not found"}


def test_analyze_cv_with_fallback_scoring(client, admin_headers, s3_client, monkeypatch) -> None:
    target = client.post(JOBS, json=JOB, headers=admin_headers).json()["jobId"]
    other = client.post(JOBS, json={**JOB, "role": "Frontend", "tags": "React, Node.js"}, headers=admin_headers).json()
    s3_client.objects["cvs/me.pdf"] = b"%PDF-1.4 stub"
    monkeypatch.setattr("jobboard.services.cv_analysis.parse_pdf", lambda content: "Jane Doe\nReact developer")

    response = client.post("/api/v1/ai/analyze-cv", json={"jobId": target, "cvS3Key": "cvs/me.pdf"})

    assert response.status_code == 200
    body = response.json()
    assert body["analysis"]["compatibilityScore"] == 60
    assert "error" not in body["analysis"]
    assert body["suggestedJobs"][0]["jobId"] == other["jobId"]
    assert body["suggestedJobs"][0]["matchScore"] == 2
    assert all(job["jobId"] != target for job in body["suggestedJobs"])


def test_analyze_cv_rejects_empty_pdf_text(client, admin_headers, s3_client, monkeypatch) -> None:
    job_id = client.post(JOBS, json=JOB, headers=admin_headers).json()["jobId"]
    s3_client.objects["cvs/blank.pdf"] = b"%PDF-1.4 stub"
    monkeypatch.setattr("jobboard.services.cv_analysis.parse_pdf", lambda content: "   ")

    response = client.post("/api/v1/ai/analyze-cv", json={"jobId": job_id, "cvS3Key": "cvs/blank.pdf"})

    assert response.status_code == 400
    assert response.json() == {"error": "PDF appears to be empty or unreadable"}


def test_numeric_category_update_keeps_the_job(client, admin_headers) -> None:
    job_id = client.post(JOBS, json={**JOB, "category": "2024"}, headers=admin_headers).json()["jobId"]

    response = client.put(f"{JOBS}/{job_id}", json={"category": 2024}, headers=admin_headers)
    assert response.status_code == 200

    response = client.get(f"{JOBS}/{job_id}")
    assert response.status_code == 200
    assert response.json()["category"] == "2024"
