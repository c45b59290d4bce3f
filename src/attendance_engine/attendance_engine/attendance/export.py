from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Iterable

from ..core.constants import NO_VALUE
from .duration import format_duration, format_time
from .model import AttendanceRecord

CSV_FIELDS = [
    "work_date",
    "employee_id",
    "employee_name",
    "check_in",
    "check_out",
    "working_hours",
    "status",
]

SUMMARY_FIELDS = ["employee_id", "employee_name", "days_present", "total_hours"]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class WeeklyReportService:
    """Builds the weekly attendance export (rows plus per-employee totals)."""

    def build_report(self, records: Iterable[AttendanceRecord]) -> ReportData:
        summary_map: dict[str, dict] = {}
        out_rows: list[dict] = []

        for r in records:
            out_rows.append(
                {
                    "work_date": r.work_date.strftime("%Y-%m-%d"),
                    "employee_id": r.employee_id,
                    "employee_name": r.employee_name or NO_VALUE,
                    "check_in": format_time(r.check_in),
                    "check_out": format_time(r.check_out),
                    "working_hours": format_duration(r.working_minutes),
                    "status": r.status.value,
                }
            )

            s = summary_map.get(r.employee_id)
            if not s:
                s = {
                    "employee_id": r.employee_id,
                    "employee_name": r.employee_name or NO_VALUE,
                    "days_present": 0,
                    "total_minutes": 0,
                }
                summary_map[r.employee_id] = s
            if r.check_in is not None:
                s["days_present"] += 1
            s["total_minutes"] += int(r.working_minutes)

        summary = sorted(summary_map.values(), key=lambda x: x["total_minutes"], reverse=True)
        for s in summary:
            s["total_hours"] = format_duration(s["total_minutes"])
        return ReportData(rows=out_rows, summary=summary)

    def to_csv(self, data: ReportData) -> bytes:
        """Day rows, a blank line, then the per-employee totals.

        Encoded with a BOM so spreadsheet apps pick up UTF-8.
        """
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        if data.summary:
            out.write("\r\n")
            totals = csv.DictWriter(out, fieldnames=SUMMARY_FIELDS, extrasaction="ignore")
            totals.writeheader()
            for s in data.summary:
                totals.writerow(s)
        return out.getvalue().encode("utf-8-sig")
