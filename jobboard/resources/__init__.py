"""
Resource controllers.

``build_resources`` wires every controller to one document store; the API
and the CLI both go through it so table names and key schemas are declared
in a single place.
"""

from dataclasses import dataclass

from jobboard.config import settings
from jobboard.db import DocumentStore, Eq, Filter
from jobboard.resources.activity import ActivityLog
from jobboard.resources.admins import AdminAccounts
from jobboard.resources.base import BulkUploadResult, ResourceController, RowError
from jobboard.resources.certifications import CertificationsController
from jobboard.resources.internships import InternshipsController
from jobboard.resources.jobs import JobsController
from jobboard.resources.sarkari_jobs import SarkariJobsController
from jobboard.resources.subscriptions import SubscriptionsController
from jobboard.resources.walking import WalkingController
from jobboard.tools.logo import LogoResolver
from jobboard.tools.notifications import NotificationSink


@dataclass
class Resources:
    jobs: JobsController
    sarkari_jobs: SarkariJobsController
    internships: InternshipsController
    certifications: CertificationsController
    walking: WalkingController
    subscriptions: SubscriptionsController
    admins: AdminAccounts
    activity: ActivityLog

    @property
    def relocatable(self) -> list[ResourceController]:
        """Controllers whose items can move between partitions."""
        return [self.jobs, self.internships]

    def stats(self) -> dict[str, int]:
        """Totals and active counts for the admin dashboard."""
        store = self.jobs.store

        def count(controller: ResourceController, active: Filter | None = None) -> int:
            return len(store.scan(controller.table, active))

        active_status = Filter((Eq("status", "active"),))
        is_active = Filter((Eq("isActive", True),))
        return {
            "totalPrivateJobs": count(self.jobs),
            "activePrivateJobs": count(self.jobs, active_status),
            "totalGovtJobs": count(self.sarkari_jobs),
            "activeGovtJobs": count(self.sarkari_jobs, active_status),
            "totalInternships": count(self.internships),
            "activeInternships": count(self.internships, is_active),
            "totalWalking": count(self.walking),
            "activeWalking": count(self.walking, is_active),
            "totalCertifications": count(self.certifications),
            "totalSubscriptions": count(self.subscriptions),
        }


def build_resources(
    store: DocumentStore,
    logos: LogoResolver | None = None,
    notifications: NotificationSink | None = None,
) -> Resources:
    logos = logos or LogoResolver()
    return Resources(
        jobs=JobsController(store, settings.jobs_table),
        sarkari_jobs=SarkariJobsController(store, settings.sarkari_jobs_table),
        internships=InternshipsController(store, settings.internships_table, logos),
        certifications=CertificationsController(store, settings.certifications_table, logos),
        walking=WalkingController(store, settings.walking_table, logos),
        subscriptions=SubscriptionsController(store, settings.subscriptions_table, notifications),
        admins=AdminAccounts(store, settings.admins_table),
        activity=ActivityLog(store, settings.activities_table),
    )


__all__ = [
    "Resources",
    "build_resources",
    "BulkUploadResult",
    "RowError",
    "ResourceController",
    "JobsController",
    "SarkariJobsController",
    "InternshipsController",
    "CertificationsController",
    "WalkingController",
    "SubscriptionsController",
    "AdminAccounts",
    "ActivityLog",
]
