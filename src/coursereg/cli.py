"""CLI entry point for coursereg."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from coursereg import __version__
from coursereg.config import ConfigError, Settings, load_settings
from coursereg.logging import get_logger, setup_logging
from coursereg.store import RecordStore, StoreError, init_courses

logger = get_logger("cli")

config_option = click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to coursereg.yaml (auto-detected if not specified)",
)


def _load(config_path: Path | None) -> Settings:
    try:
        return load_settings(config_path)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(__version__)
def main() -> None:
    """coursereg - student course registration with credit limits."""
    pass


@main.command()
@config_option
@click.option("--host", default=None, help="Bind address (overrides config)")
@click.option("--port", type=int, default=None, help="Bind port (overrides config)")
def serve(config_path: Path | None, host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    import uvicorn  # noqa: PLC0415

    from coursereg.api import create_app  # noqa: PLC0415

    settings = _load(config_path)
    setup_logging(settings)

    app = create_app(settings)
    uvicorn.run(
        app,
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


@main.command("init-courses")
@config_option
def init_courses_command(config_path: Path | None) -> None:
    """Seed the default course catalog (no-op if courses exist)."""
    settings = _load(config_path)
    store = RecordStore(settings.database_path)
    try:
        inserted = init_courses(store)
    except StoreError as e:
        logger.error("Course seeding failed: %s", e)
        click.echo(f"Failed to initialize courses: {e}", err=True)
        sys.exit(1)
    finally:
        store.close()

    if inserted:
        click.echo(f"Courses initialized successfully ({inserted} added).")
    else:
        click.echo("Courses already initialized.")


@main.command("show-data")
@config_option
def show_data(config_path: Path | None) -> None:
    """Print all students and courses in the database."""
    settings = _load(config_path)
    store = RecordStore(settings.database_path)
    try:
        students = store.list_students()
        click.echo("=== STUDENTS ===")
        click.echo(f"Total students: {len(students)}\n")
        for index, student in enumerate(students, start=1):
            registered = store.count_registrations(student.id)
            click.echo(f"{index}. {student.name} ({student.email})")
            click.echo(f"   Student ID: {student.student_number}, Semester: {student.semester}")
            click.echo(f"   Registered Courses: {registered}")
            click.echo("")

        courses = store.list_courses()
        click.echo("=== COURSES ===")
        click.echo(f"Total courses: {len(courses)}\n")
        for index, course in enumerate(courses, start=1):
            click.echo(f"{index}. {course.code} - {course.name}")
            click.echo(f"   Credits: {course.credits}, Type: {course.type}")
            click.echo("")
    finally:
        store.close()


if __name__ == "__main__":
    main()
