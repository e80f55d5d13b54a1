from fastapi import APIRouter
from fastapi.responses import Response

from minutes_studio.models.minutes_model import ExportRequest
from minutes_studio.services.exporter import export_minutes
from minutes_studio.utils.responses import error_response

router = APIRouter()


@router.post("/export/{fmt}")
def export(fmt: str, payload: ExportRequest):
    try:
        exported = export_minutes(fmt, payload.summary, payload.minutes)
    except ValueError as exc:
        return error_response(400, str(exc))
    return Response(
        content=exported.content.encode("utf-8"),
        media_type=exported.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )
