from __future__ import annotations

import pytest

from jobboard.db import Contains, Eq, Filter, KeySchema
from jobboard.services.pipeline import ListingConfig, ListingPipeline, ListQuery


@pytest.fixture
def pipeline(store):
    store.define_table("jobs", KeySchema("category", "jobId"))
    config = ListingConfig(
        table="jobs",
        timestamp_field="postedOn",
        default_limit=15,
        search_fields=("role", "companyName"),
        base_filter=Filter((Eq("status", "active"),)),
        filter_builders={
            "category": lambda v: Eq("category", v),
            "location": lambda v: Contains("location", v),
        },
    )
    return ListingPipeline(store, config)


def _seed(store, count: int, category: str = "Tech", status: str = "active") -> None:
    for i in range(count):
        store.put(
            "jobs",
            {
                "category": category,
                "jobId": f"{category}-{status}-{i}",
                "role": f"Role {i}",
                "companyName": "Acme",
                "status": status,
                "postedOn": f"2024-01-{i + 1:02d}T00:00:00.000Z",
            },
        )


def test_pagination_is_computed_from_the_filtered_set(store, pipeline) -> None:
    _seed(store, 7)
    _seed(store, 3, status="expired")

    page = pipeline.list(ListQuery(page=2, limit=3))

    assert page.pagination.model_dump() == {
        "currentPage": 2,
        "totalPages": 3,
        "totalItems": 7,
        "hasNext": True,
        "hasPrev": True,
    }
    assert len(page.items) == 3
    assert len(store.scan("jobs")) == 10


def test_single_page_holds_every_item(store, pipeline) -> None:
    _seed(store, 5)
    total = pipeline.list(ListQuery()).pagination.totalItems

    page = pipeline.list(ListQuery(page=1, limit=total))
    assert len(page.items) == total
    assert page.pagination.hasNext is False


def test_page_past_the_end_is_empty(store, pipeline) -> None:
    _seed(store, 2)
    page = pipeline.list(ListQuery(page=5, limit=2))
    assert page.items == []
    assert page.pagination.totalItems == 2


def test_empty_result_is_not_an_error(pipeline) -> None:
    page = pipeline.list(ListQuery(filters={"category": "Nothing"}))
    assert page.items == []
    assert page.pagination.totalItems == 0
    assert page.pagination.totalPages == 0


def test_newest_first_and_missing_timestamps_last(store, pipeline) -> None:
    _seed(store, 3)
    store.put("jobs", {"category": "Tech", "jobId": "legacy", "role": "Old", "status": "active"})

    ids = [i["jobId"] for i in pipeline.list(ListQuery()).items]
    assert ids == ["Tech-active-2", "Tech-active-1", "Tech-active-0", "legacy"]


def test_search_is_case_and_punctuation_insensitive(store, pipeline) -> None:
    store.put(
        "jobs",
        {"category": "Tech", "jobId": "n1", "role": "Node JS Developer", "companyName": "X", "status": "active"},
    )
    store.put(
        "jobs",
        {"category": "Tech", "jobId": "n2", "role": "Senior Node.js Engineer", "companyName": "Z", "status": "active"},
    )
    store.put(
        "jobs",
        {"category": "Tech", "jobId": "p1", "role": "Python Developer", "companyName": "Y", "status": "active"},
    )

    page = pipeline.list(ListQuery(q="Node.js"))
    assert sorted(i["jobId"] for i in page.items) == ["n1", "n2"]
    assert [i["jobId"] for i in pipeline.list(ListQuery(q="acme")).items] == []


def test_unknown_and_empty_filters_are_ignored(store, pipeline) -> None:
    _seed(store, 2)
    page = pipeline.list(ListQuery(filters={"category": "", "salary": "10L"}))
    assert page.pagination.totalItems == 2


def test_partition_query_limits_to_one_category(store, pipeline) -> None:
    _seed(store, 2, category="Tech")
    _seed(store, 4, category="Ops")
    page = pipeline.list(ListQuery(partition="Ops"))
    assert page.pagination.totalItems == 4
    assert {i["category"] for i in page.items} == {"Ops"}


def test_enrichment_runs_on_the_page_only(store) -> None:
    store.define_table("certs", KeySchema("id"))
    for i in range(5):
        store.put("certs", {"id": f"c{i}", "postedAt": f"2024-02-0{i + 1}T00:00:00Z"})
    seen: list[int] = []

    def enrich(items):
        seen.append(len(items))
        return [{**item, "logo": "x"} for item in items]

    pipeline = ListingPipeline(
        store, ListingConfig(table="certs", timestamp_field="postedAt", default_limit=2, search_fields=(), enricher=enrich)
    )
    page = pipeline.list(ListQuery())

    assert seen == [2]
    assert all(item["logo"] == "x" for item in page.items)
    assert all("logo" not in item for item in store.scan("certs"))


def test_invalid_page_is_rejected(pipeline) -> None:
    with pytest.raises(ValueError):
        pipeline.list(ListQuery(page=0))
