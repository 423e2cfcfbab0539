from __future__ import annotations
from typing import List
from io import BytesIO

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.styles import Font, Alignment
from fastapi.concurrency import run_in_threadpool

from app.config import settings
from app.schemas.timetable import Sheet

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def sheets_to_xlsx_bytes(sheets: List[Sheet]) -> bytes:
    """
    sheets: rendered weeks, one worksheet each (title = sheet.title)
    """
    wb = Workbook()
    default_ws = wb.active

    if not sheets:
        default_ws.title = "No data"
        default_ws.append(["No data"])
        buf = BytesIO()
        wb.save(buf)
        return buf.getvalue()

    wb.remove(default_ws)

    header_font = Font(name=settings.FONT_NAME, size=settings.HEADER_FONT_SIZE, bold=True)
    body_font = Font(name=settings.FONT_NAME, size=settings.BODY_FONT_SIZE)
    alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)

    for sheet in sheets:
        ws = wb.create_sheet(title=sheet.title[:31])

        for row_idx, row in enumerate(sheet.rows, start=1):
            for col_idx, text in enumerate(row, start=1):
                # 空格子寫 None，但樣式照樣套
                cell = ws.cell(row=row_idx, column=col_idx, value=text or None)
                cell.alignment = alignment
                cell.font = header_font if row_idx == 1 else body_font
            ws.row_dimensions[row_idx].height = sheet.row_heights[row_idx - 1]

        for col_idx, width in enumerate(sheet.column_widths, start=1):
            ws.column_dimensions[get_column_letter(col_idx)].width = width

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


async def export_workbook(sheets: List[Sheet]) -> bytes:
    # 存檔是 CPU/IO 工作，丟到 threadpool
    return await run_in_threadpool(sheets_to_xlsx_bytes, sheets)
