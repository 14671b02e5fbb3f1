from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import List, Sequence

import typer

from ..data.catalog import Catalog
from ..data.loader import load_project
from ..errors import TimetableError
from ..render.csv_out import csv_blocks, write_csv_blocks
from ..scheduler.prompt import SYSTEM_PROMPT
from ..session import TimetableSession
from ..validate.checks import ALL_RULES, DEFAULT_RULES
from ..validate.report import build_report, format_validation_report, write_validation_report


def _setup_logging(project_root: Path) -> None:
    logs_dir = project_root / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(logs_dir / "timegrid.log", encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )


def load_session(project_root: Path) -> TimetableSession:
    loaded = load_project(project_root)
    session = TimetableSession(loaded.config, Catalog(loaded.catalog))
    if loaded.schedule:
        # Stored schedules go through the same repair step as generator output
        session.accept_generated_schedule(loaded.schedule)
    return session


def write_schedule_json(session: TimetableSession, outputs_dir: Path) -> Path:
    json_dir = outputs_dir / "json"
    json_dir.mkdir(parents=True, exist_ok=True)
    path = json_dir / "schedule.json"
    with path.open("w", encoding="utf-8") as f:
        json.dump([s.to_dict() for s in session.slots], f, indent=2)
    return path


def run_pipeline(
    project_root: Path,
    *,
    log_level: int | None = None,
    rules: Sequence[str] = DEFAULT_RULES,
    session: TimetableSession | None = None,
) -> tuple[str, str, str]:
    _setup_logging(project_root)
    if log_level is not None:
        logging.getLogger().setLevel(log_level)
    if session is None:
        session = load_session(project_root)

    conflicts = session.get_conflicts(rules)
    report = build_report(session.timetable, session.catalog, conflicts)

    outputs_dir = project_root / "outputs"
    write_validation_report(report, outputs_dir)
    csv = csv_blocks(session.timetable, session.catalog, session.config)
    write_csv_blocks(csv, outputs_dir)
    write_schedule_json(session, outputs_dir)

    remaining = session.get_remaining_hours()
    audit_lines: List[str] = ["Repairs:"] + [str(n) for n in session.last_repairs]
    audit_lines += ["", "Hours:"]
    for sid, subject in session.catalog.subjects.items():
        placed = subject.hours_per_week - remaining[sid]
        audit_lines.append(f"{subject.name}: {placed}/{subject.hours_per_week}")
    audit_text = "\n".join(audit_lines)
    with (outputs_dir / "audit.txt").open("w", encoding="utf-8") as f:
        f.write(audit_text)

    return csv, format_validation_report(report), audit_text


app = typer.Typer(add_completion=False, help="Weekly class schedule checker")


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


@contextmanager
def _reported_errors():
    try:
        yield
    except TimetableError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1) from e


@app.command("validate")
def cli_validate(
    root: Path = typer.Option(Path("."), help="Project directory holding data/ and configs/"),
    strict: bool = typer.Option(False, help="Also report lab-split and hours-exceeded"),
    log_level: str = typer.Option("INFO", help="Log level"),
) -> None:
    with _reported_errors():
        _, validation, _ = run_pipeline(
            root, log_level=_level(log_level), rules=ALL_RULES if strict else DEFAULT_RULES
        )
    print(validation)


@app.command("export-csv")
def cli_export_csv(
    root: Path = typer.Option(Path("."), help="Project directory holding data/ and configs/"),
) -> None:
    with _reported_errors():
        csv, _, _ = run_pipeline(root)
    print(csv)


@app.command("hours")
def cli_hours(
    root: Path = typer.Option(Path("."), help="Project directory holding data/ and configs/"),
) -> None:
    with _reported_errors():
        _, _, audit = run_pipeline(root)
    print(audit)


@app.command("prompt")
def cli_prompt(
    root: Path = typer.Option(Path("."), help="Project directory holding data/ and configs/"),
) -> None:
    with _reported_errors():
        session = load_session(root)
    print(f"SYSTEM: {SYSTEM_PROMPT}")
    print()
    print(session.generation_prompt())


@app.command("accept")
def cli_accept(
    reply: Path = typer.Argument(..., help="File holding the generator reply text"),
    root: Path = typer.Option(Path("."), help="Project directory holding data/ and configs/"),
) -> None:
    _setup_logging(root)
    with _reported_errors():
        session = load_session(root)
        session.accept_generated_reply(reply.read_text(encoding="utf-8"))
        _, validation, audit = run_pipeline(root, session=session)
    print(validation)
    print(audit)


if __name__ == "__main__":  # pragma: no cover
    app()
