from __future__ import annotations

import asyncio
import logging
import traceback

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from minutes_studio.config import Settings, get_settings
from minutes_studio.models.minutes_model import AudioFile, StorageKeysRequest, StyleDocument
from minutes_studio.utils.responses import error_response

from .controller import InputError, MinutesController, MinutesInput, decide_input

router = APIRouter()
logger = logging.getLogger(__name__)


def get_minutes_controller(settings: Settings = Depends(get_settings)) -> MinutesController:
    return MinutesController.from_settings(settings)


def _uploads(form, *names: str) -> list[UploadFile]:
    return [value for name in names for value in form.getlist(name) if isinstance(value, UploadFile)]


def _texts(form, *names: str) -> list[str]:
    return [value for name in names for value in form.getlist(name) if isinstance(value, str)]


async def read_minutes_input(request: Request) -> MinutesInput:
    content_type = request.headers.get("content-type", "")

    if "multipart/form-data" in content_type or "application/x-www-form-urlencoded" in content_type:
        form = await request.form()
        audio_files = [
            AudioFile(
                filename=upload.filename or "audio.mp3",
                content=await upload.read(),
                content_type=upload.content_type or "audio/mpeg",
            )
            for upload in _uploads(form, "audio", "audio[]")
        ]
        style_documents = [
            StyleDocument(filename=upload.filename or "", content=await upload.read())
            for upload in _uploads(form, "style", "style[]")
        ]
        transcripts = _texts(form, "transcript")
        return decide_input(
            audio_files=audio_files,
            s3_keys=_texts(form, "s3Key", "s3Key[]"),
            transcript=transcripts[0] if transcripts else None,
            style_documents=style_documents,
        )

    if "application/json" in content_type:
        try:
            body = StorageKeysRequest.model_validate(await request.json())
        except ValueError as exc:
            # JSONDecodeError, UnicodeDecodeError and ValidationError all derive from ValueError
            raise InputError("invalid JSON body") from exc
        if not body.s3_keys:
            raise InputError("s3Keys is required")
        return decide_input(audio_files=[], s3_keys=body.s3_keys, transcript=None)

    raise InputError("unsupported content type")


@router.post("/minutes")
async def create_minutes(request: Request, controller: MinutesController = Depends(get_minutes_controller)):
    try:
        request_input = await read_minutes_input(request)
    except InputError as exc:
        return error_response(400, str(exc))

    try:
        response = await asyncio.to_thread(controller.run, request_input)
    except Exception as exc:
        logger.exception("Minutes generation failed")
        return error_response(500, str(exc) or exc.__class__.__name__, traceback.format_exc())
    return response.model_dump(by_alias=True)
