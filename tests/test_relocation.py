from __future__ import annotations

import pytest

from jobboard.errors import NotFoundError
from jobboard.services.relocation import find_duplicates, reconcile

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


def test_category_change_moves_the_job(resources, store) -> None:
    jobs = resources.jobs
    created = jobs.create(JOB)

    updated = jobs.update(created["jobId"], {"category": "Ops", "salary": "15 LPA"})

    copies = [i for i in store.scan(jobs.table) if i["jobId"] == created["jobId"]]
    assert len(copies) == 1
    assert copies[0]["category"] == "Ops"
    assert copies[0]["salary"] == "15 LPA"
    assert copies[0]["postedOn"] == created["postedOn"]
    assert updated["category"] == "Ops"


def test_update_without_category_change_stays_in_place(resources, store) -> None:
    jobs = resources.jobs
    created = jobs.create(JOB)

    updated = jobs.update(created["jobId"], {"role": "Staff Engineer", "jobId": "ignored"})

    assert updated["jobId"] == created["jobId"]
    assert updated["category"] == "Tech"
    assert updated["role"] == "Staff Engineer"
    assert "lastUpdated" in updated
    assert len(store.scan(jobs.table)) == 1


def test_empty_patch_only_touches_last_updated(resources) -> None:
    jobs = resources.jobs
    created = jobs.create(JOB)

    updated = jobs.update(created["jobId"], {})

    assert {k: v for k, v in updated.items() if k != "lastUpdated"} == created


def test_update_of_unknown_job_is_not_found(resources) -> None:
    with pytest.raises(NotFoundError, match="Job not found"):
        resources.jobs.update("missing", {"role": "x"})


def test_internship_move_refreshes_logo_when_company_changes(resources, logos) -> None:
    internships = resources.internships
    created = internships.create(
        {"title": "Intern", "company": "Acme", "location": "Remote", "applyLink": "https://a.example", "category": "Tech"}
    )
    assert created["companyLogo"] == logos.url_for("Acme")

    moved = internships.update(created["id"], {"category": "Design"})
    assert moved["companyLogo"] == logos.url_for("Acme")

    renamed = internships.update(created["id"], {"category": "Ops", "company": "Globex"})
    assert renamed["companyLogo"] == logos.url_for("Globex")
    assert renamed["category"] == "Ops"


def test_reconcile_keeps_the_newest_copy(resources, store) -> None:
    table = resources.jobs.table
    store.put(table, {**JOB, "jobId": "dup", "category": "Tech", "lastUpdated": "2024-01-01T00:00:00.000Z"})
    store.put(table, {**JOB, "jobId": "dup", "category": "Ops", "lastUpdated": "2024-02-01T00:00:00.000Z"})
    store.put(table, {**JOB, "jobId": "single", "category": "Tech"})

    assert list(find_duplicates(store, table)) == ["dup"]

    stale = reconcile(store, table)
    assert [i["category"] for i in stale] == ["Tech"]
    assert len(store.scan(table)) == 3

    reconcile(store, table, apply=True)
    remaining = sorted((i["jobId"], i["category"]) for i in store.scan(table))
    assert remaining == [("dup", "Ops"), ("single", "Tech")]
    assert find_duplicates(store, table) == {}


def test_update_with_duplicates_present_targets_the_newest(resources, store) -> None:
    table = resources.jobs.table
    store.put(table, {**JOB, "jobId": "dup", "category": "Tech", "lastUpdated": "2024-01-01T00:00:00.000Z"})
    store.put(table, {**JOB, "jobId": "dup", "category": "Ops", "lastUpdated": "2024-02-01T00:00:00.000Z"})

    updated = resources.jobs.update("dup", {"salary": "20 LPA"})
    assert updated["category"] == "Ops"


def test_category_given_as_number_updates_in_place(resources, store) -> None:
    jobs = resources.jobs
    created = jobs.create({**JOB, "category": "2024"})

    updated = jobs.update(created["jobId"], {"category": 2024, "salary": "18 LPA"})

    copies = [i for i in store.scan(jobs.table) if i["jobId"] == created["jobId"]]
    assert len(copies) == 1
    assert copies[0]["category"] == "2024"
    assert copies[0]["salary"] == "18 LPA"
    assert updated["category"] == "2024"
    assert jobs.get(created["jobId"])["salary"] == "18 LPA"
