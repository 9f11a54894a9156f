import io
from datetime import date, datetime, time, timezone

from openpyxl import load_workbook

from backend.app.db import base  # noqa: F401  registers every mapper
from backend.app.models.enums import AttendanceStatus, SessionStatus
from backend.app.models.session import TrainingSession
from backend.app.schemas.attendance import AttendanceRead
from backend.app.schemas.session import NamedRef, ScheduleEntry
from backend.app.services.export import (
    ATTENDANCE_RECORDS_HEADERS,
    ATTENDANCE_SESSIONS_HEADERS,
    MAX_COLUMN_WIDTH,
    MIN_COLUMN_WIDTH,
    SHEET_TITLE,
    attendance_export_filename,
    build_attendance_workbook,
    build_sessions_workbook,
    session_duration_hours,
    sessions_export_filename,
)


def make_session(**overrides) -> TrainingSession:
    fields = {"id": 5, "date": date(2024, 6, 1), "start_time": time(10, 0), "end_time": time(11, 0), "branch_id": 1}
    fields.update(overrides)
    return TrainingSession(**fields)


def load_sheet(content: bytes):
    return load_workbook(io.BytesIO(content)).active


def test_attendance_workbook_rows_and_header_style():
    records = [
        AttendanceRead(
            id=1,
            session_id=5,
            student_id=3,
            student_name="Avery, Jr.",
            package_type="Camp Training",
            status=AttendanceStatus.present,
            marked_at=datetime(2024, 6, 1, 10, 5, tzinfo=timezone.utc),
        ),
        AttendanceRead(id=2, session_id=5, student_id=4, student_name="Blake", status=AttendanceStatus.pending),
    ]
    ws = load_sheet(build_attendance_workbook(make_session(), records))

    assert ws.title == SHEET_TITLE
    rows = list(ws.iter_rows(values_only=True))
    assert list(rows[0]) == ATTENDANCE_RECORDS_HEADERS
    assert rows[1] == ("Avery, Jr.", "Camp Training", "present", "1", "2024-06-01 10:05")
    assert rows[2][0] == "Blake"
    assert rows[2][2] == "pending"
    assert not rows[2][4]

    header = ws["A1"]
    assert header.font.bold is True
    assert header.fill.fgColor.rgb.endswith("242833")


def test_column_widths_are_clamped():
    records = [
        AttendanceRead(id=1, session_id=5, student_id=3, student_name="X" * 80, status=AttendanceStatus.absent),
    ]
    ws = load_sheet(build_attendance_workbook(make_session(), records))
    assert ws.column_dimensions["A"].width == MAX_COLUMN_WIDTH
    assert ws.column_dimensions["C"].width == MIN_COLUMN_WIDTH
    # "Session Duration" is 16 characters long.
    assert ws.column_dimensions["D"].width == 19


def test_sessions_workbook_rows():
    entry = ScheduleEntry(
        id=1,
        date=date(2024, 6, 1),
        start_time=time(9, 30),
        end_time=time(11, 0),
        status=SessionStatus.completed,
        branch_id=1,
        branch_name="Main",
        coaches=[NamedRef(id=1, name="Coach Kim"), NamedRef(id=2, name="Coach Ray")],
        students=[NamedRef(id=3, name="Avery")],
    )
    rows = list(load_sheet(build_sessions_workbook([entry])).iter_rows(values_only=True))
    assert list(rows[0]) == ATTENDANCE_SESSIONS_HEADERS
    assert rows[1][:4] == ("2024-06-01", "09:30", "11:00", "Main")
    assert rows[1][5:] == ("completed", "Coach Kim; Coach Ray", "1")


def test_session_duration_hours():
    assert session_duration_hours(make_session()) == "1"
    assert session_duration_hours(make_session(start_time=time(9, 30), end_time=time(11, 0))) == "1.5"


def test_export_filenames():
    assert attendance_export_filename(make_session()) == "attendance_records_report_session_5_2024-06-01.xlsx"
    assert sessions_export_filename(date(2024, 6, 1), None) == "attendance_sessions_report_2024-06-01_all.xlsx"
