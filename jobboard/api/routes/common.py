"""Helpers shared by the resource routers."""

from fastapi import UploadFile
from fastapi.responses import JSONResponse

from jobboard.errors import ValidationError
from jobboard.resources import BulkUploadResult, Resources
from jobboard.services.pipeline import ListQuery
from jobboard.tools.tabular import read_rows


def list_query(page: int, limit: int | None, q: str | None = None, **filters: str | None) -> ListQuery:
    return ListQuery(
        page=page,
        limit=limit,
        q=q,
        filters={name: value for name, value in filters.items() if value},
    )


def read_upload(file: UploadFile | None) -> list[dict]:
    """Rows of an uploaded CSV/XLSX file."""
    if file is None or not file.filename:
        raise ValidationError("File is required")
    return read_rows(file.filename, file.file.read())


def bulk_response(result: BulkUploadResult) -> JSONResponse:
    status_code = 201 if result.uploaded else 200
    return JSONResponse(status_code=status_code, content=result.model_dump())


def audit(resources: Resources, admin: dict, action: str, target_type: str, target_id) -> None:
    resources.activity.record(action, target_type, str(target_id), admin["email"])
