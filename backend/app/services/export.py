"""Excel reports for attendance: one session's records or a range of sessions."""

import io
from typing import Iterable, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

from backend.app.models.session import TrainingSession
from backend.app.schemas.attendance import AttendanceRead
from backend.app.schemas.session import ScheduleEntry

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
SHEET_TITLE = "Players Report"

ATTENDANCE_RECORDS_HEADERS = ["Student Name", "Package Type", "Status", "Session Duration", "Marked At"]
ATTENDANCE_SESSIONS_HEADERS = [
    "Date",
    "Start Time",
    "End Time",
    "Branch",
    "Package Type",
    "Status",
    "Coaches",
    "Participants Count",
]

HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="242833", end_color="242833", fill_type="solid")
MIN_COLUMN_WIDTH = 12
MAX_COLUMN_WIDTH = 50


def _xlsx_bytes(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    ws.append(list(headers))
    for cell in ws[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
    for row in rows:
        ws.append(list(row))

    for column in ws.columns:
        longest = max(len(str(cell.value)) if cell.value is not None else 0 for cell in column)
        width = min(max(longest + 3, MIN_COLUMN_WIDTH), MAX_COLUMN_WIDTH)
        ws.column_dimensions[column[0].column_letter].width = width

    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def session_duration_hours(session_obj) -> str:
    """Length of the session in hours; one hour counts as one session."""
    start = session_obj.start_time.hour * 60 + session_obj.start_time.minute
    end = session_obj.end_time.hour * 60 + session_obj.end_time.minute
    hours = (end - start) / 60
    return f"{hours:g}"


def build_attendance_workbook(session_obj: TrainingSession, records: list[AttendanceRead]) -> bytes:
    duration = session_duration_hours(session_obj)
    rows = [
        [
            record.student_name or "",
            record.package_type or "",
            record.status.value,
            duration,
            record.marked_at.strftime("%Y-%m-%d %H:%M") if record.marked_at else "",
        ]
        for record in records
    ]
    return _xlsx_bytes(ATTENDANCE_RECORDS_HEADERS, rows)


def build_sessions_workbook(entries: list[ScheduleEntry]) -> bytes:
    rows = [
        [
            entry.date.isoformat(),
            entry.start_time.strftime("%H:%M"),
            entry.end_time.strftime("%H:%M"),
            entry.branch_name,
            entry.package_type or "",
            entry.status.value,
            "; ".join(coach.name for coach in entry.coaches),
            str(len(entry.students)),
        ]
        for entry in entries
    ]
    return _xlsx_bytes(ATTENDANCE_SESSIONS_HEADERS, rows)


def attendance_export_filename(session_obj: TrainingSession) -> str:
    return f"attendance_records_report_session_{session_obj.id}_{session_obj.date.isoformat()}.xlsx"


def sessions_export_filename(start_date, end_date) -> str:
    start = start_date.isoformat() if start_date else "all"
    end = end_date.isoformat() if end_date else "all"
    return f"attendance_sessions_report_{start}_{end}.xlsx"
