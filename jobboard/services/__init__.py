"""
Shared listing services.

- pipeline: fetch/filter/search/sort/paginate/enrich for every resource
- relocation: partition-key changes on update, duplicate reconciliation
"""

from jobboard.services.pipeline import ListingConfig, ListingPage, ListingPipeline, ListQuery, Pagination
from jobboard.services.relocation import RelocatingUpdater, UpdateOutcome, find_duplicates, reconcile

__all__ = [
    "ListingConfig",
    "ListingPage",
    "ListingPipeline",
    "ListQuery",
    "Pagination",
    "RelocatingUpdater",
    "UpdateOutcome",
    "find_duplicates",
    "reconcile",
]
