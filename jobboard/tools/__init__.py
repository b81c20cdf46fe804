"""
External integrations.

- logo: brand-logo lookup with placeholder fallback
- pdf_parser: extract CV text from PDF bytes
- blob_store: S3 pre-signed uploads and CV reads
- tabular: CSV/XLSX rows for bulk uploads
- notifications: event sink (disabled producer)
"""

from jobboard.tools.logo import LogoResolver
from jobboard.tools.notifications import NotificationSink, NullNotificationSink
from jobboard.tools.pdf_parser import parse_pdf
from jobboard.tools.tabular import read_rows

__all__ = ["LogoResolver", "NotificationSink", "NullNotificationSink", "parse_pdf", "read_rows"]
