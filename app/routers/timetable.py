import logging
from typing import List, Optional, Tuple

from fastapi import APIRouter, File, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse

from app.config import settings
from app.schemas.timetable import (
    GenerationState, GenerationStatusOut, Sheet, TimetablePreviewOut
)
from app.utils.errors import MalformedJSONError, TimetableInputError
from app.utils.excel_export import XLSX_MEDIA_TYPE, export_workbook
from app.utils.schedule_builder import build, load_payload
from app.utils.table_renderer import render

logger = logging.getLogger("app.timetable")

router = APIRouter(prefix="/timetable", tags=["Timetable"])

SUCCESS_MESSAGE = "课表生成成功！已开始下载..."
FAILURE_PREFIX = "生成失败："


def failure(e: TimetableInputError) -> HTTPException:
    status = GenerationStatusOut(
        state=GenerationState.failure,
        message=f"{FAILURE_PREFIX}{e.message}",
    )
    return HTTPException(status_code=400, detail=status.model_dump(mode="json"))


def decode_body(raw: bytes) -> str:
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise MalformedJSONError() from e


def generate_sheets(text: Optional[str]) -> Tuple[List[Sheet], int]:
    """text -> rendered sheets; raises TimetableInputError"""
    logger.info("timetable generation %s", GenerationState.in_progress.value)
    payload = load_payload(text)
    grid, max_week = build(payload)
    sheets = render(grid, max_week)
    logger.info("rendered %d sheet(s), max week %d", len(sheets), max_week)
    return sheets, max_week


async def xlsx_response(text: Optional[str]) -> StreamingResponse:
    try:
        sheets, max_week = await run_in_threadpool(generate_sheets, text)
    except TimetableInputError as e:
        logger.warning("timetable generation failed: %s", e.message)
        raise failure(e)

    xlsx_bytes = await export_workbook(sheets)
    filename = settings.EXPORT_FILENAME

    return StreamingResponse(
        iter([xlsx_bytes]),
        media_type=XLSX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Max-Week": str(max_week),
        },
    )


@router.post("/export")
async def export_timetable(request: Request):
    """
    Body = 使用者貼上的原始 JSON 文字（不限 content-type）
    """
    try:
        text = decode_body(await request.body())
    except TimetableInputError as e:
        raise failure(e)
    return await xlsx_response(text)


@router.post("/export/upload")
async def export_timetable_upload(file: UploadFile = File(...)):
    try:
        text = decode_body(await file.read())
    except TimetableInputError as e:
        raise failure(e)
    logger.info("uploaded timetable file: %s", file.filename)
    return await xlsx_response(text)


@router.post("/preview", response_model=TimetablePreviewOut)
async def preview_timetable(request: Request):
    try:
        text = decode_body(await request.body())
        sheets, max_week = await run_in_threadpool(generate_sheets, text)
    except TimetableInputError as e:
        logger.warning("timetable preview failed: %s", e.message)
        raise failure(e)

    return TimetablePreviewOut(
        status=GenerationStatusOut(
            state=GenerationState.success,
            message=SUCCESS_MESSAGE,
            max_week=max_week,
            sheet_count=len(sheets),
        ),
        max_week=max_week,
        sheets=sheets,
    )
