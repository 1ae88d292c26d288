from __future__ import annotations

import csv
import io
from typing import List

from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from workout_engine.models.session import SessionSummary
from .formatting import format_duration
from .history import parse_date


def _display_date(summary: SessionSummary) -> str:
    dt = parse_date(summary.date)
    return dt.strftime("%Y-%m-%d %H:%M") if dt else summary.date


def _title(summary: SessionSummary) -> str:
    partial = " (partial)" if summary.is_partial else ""
    return f"Workout {_display_date(summary)}{partial}"


def _set_line(set_no: int, weight: float, reps: int) -> str:
    return f"Set {set_no}: {weight:g} x {reps}"


def export_filename(summary: SessionSummary, ext: str = "csv") -> str:
    dt = parse_date(summary.date)
    day = dt.date().isoformat() if dt else "unknown"
    return f"GoodLift_Workout_{day}.{ext}"


def to_csv(summary: SessionSummary) -> bytes:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Date", "WorkoutType", "Duration", "Exercise", "Set", "Weight", "Reps"])
    for name, log in summary.per_exercise.items():
        for s in log.sets:
            writer.writerow([
                _display_date(summary),
                summary.workout_type,
                summary.duration_seconds,
                name,
                s.set,
                s.weight,
                s.reps,
            ])
    return output.getvalue().encode("utf-8")


def to_markdown(summary: SessionSummary) -> str:
    lines: List[str] = []
    lines.append(f"# {_title(summary)}\n")
    lines.append(f"- Type: {summary.workout_type}")
    lines.append(f"- Duration: {format_duration(summary.duration_seconds)}")
    lines.append(f"- Sets: {summary.total_sets}")
    warmup = "skipped" if summary.warmup_skipped else ("done" if summary.warmup_completed else "-")
    cooldown = "skipped" if summary.cooldown_skipped else ("done" if summary.cooldown_completed else "-")
    lines.append(f"- Warm-up: {warmup}; Cool-down: {cooldown}")
    for name, log in summary.per_exercise.items():
        lines.append(f"\n## {name}")
        for s in log.sets:
            lines.append(f"- {_set_line(s.set, s.weight, s.reps)}")
    return "\n".join(lines) + "\n"


def to_pdf(summary: SessionSummary) -> bytes:
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=letter)
    width, height = letter

    margin = 36
    x = margin
    y = height - margin

    c.setFont("Helvetica-Bold", 16)
    c.drawString(x, y, _title(summary))
    y -= 20
    c.setFont("Helvetica", 10)
    c.drawString(x, y, f"{summary.workout_type} | {format_duration(summary.duration_seconds)} | {summary.total_sets} sets")
    y -= 24

    for name, log in summary.per_exercise.items():
        if y < margin + 60:
            c.showPage()
            c.setFont("Helvetica", 10)
            y = height - margin
        c.setFont("Helvetica-Bold", 12)
        c.drawString(x, y, name)
        y -= 16
        c.setFont("Helvetica", 10)
        for s in log.sets:
            if y < margin + 24:
                c.showPage()
                c.setFont("Helvetica", 10)
                y = height - margin
            c.drawString(x + 12, y, _set_line(s.set, s.weight, s.reps))
            y -= 14
        y -= 6

    c.showPage()
    c.save()
    pdf_bytes = buffer.getvalue()
    buffer.close()
    return pdf_bytes
