from fastapi import APIRouter, Depends, Request

from minutes_studio.config import Settings, get_settings
from minutes_studio.services.s3_storage import S3Storage
from minutes_studio.utils.responses import error_response

from .controller import StorageNotConfigured, UploadController

router = APIRouter()


def get_upload_controller(settings: Settings = Depends(get_settings)) -> UploadController:
    return UploadController(S3Storage.from_settings(settings))


@router.post("/upload-sign")
async def sign_upload(request: Request, controller: UploadController = Depends(get_upload_controller)):
    try:
        body = await request.json()
    except ValueError:
        body = None
    try:
        return controller.sign(body)
    except (StorageNotConfigured, ValueError) as exc:
        return error_response(400, str(exc))
