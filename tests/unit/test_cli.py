"""Unit tests for the coursereg command line."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from coursereg.cli import main
from coursereg.store import RecordStore


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    config = tmp_path / "coursereg.yaml"
    config.write_text(f"database_path: {tmp_path / 'cli.db'}\nlog_dir: {tmp_path / 'logs'}\n")
    return config


@pytest.mark.unit
class TestInitCourses:
    """Tests for the init-courses command."""

    def test_seeds_once(self, config_file: Path) -> None:
        runner = CliRunner()

        first = runner.invoke(main, ["init-courses", "-c", str(config_file)])
        second = runner.invoke(main, ["init-courses", "-c", str(config_file)])

        assert first.exit_code == 0
        assert "Courses initialized successfully (15 added)." in first.output
        assert second.exit_code == 0
        assert "Courses already initialized." in second.output

    def test_bad_config(self, tmp_path: Path) -> None:
        config = tmp_path / "coursereg.yaml"
        config.write_text("colour: blue\n")

        result = CliRunner().invoke(main, ["init-courses", "-c", str(config)])

        assert result.exit_code == 1
        assert "Unknown configuration keys" in result.output


@pytest.mark.unit
class TestShowData:
    """Tests for the show-data command."""

    def test_empty_database(self, config_file: Path) -> None:
        result = CliRunner().invoke(main, ["show-data", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "Total students: 0" in result.output
        assert "Total courses: 0" in result.output

    def test_lists_students_and_courses(self, tmp_path: Path, config_file: Path) -> None:
        runner = CliRunner()
        runner.invoke(main, ["init-courses", "-c", str(config_file)])
        store = RecordStore(str(tmp_path / "cli.db"))
        try:
            student = store.create_student("Ada", "ada@example.com", "h", "S-1", semester=2)
            cs101 = next(c for c in store.list_courses() if c.code == "CS101")
            store.replace_registrations(student.id, [cs101.id], expected_version=0)
        finally:
            store.close()

        result = runner.invoke(main, ["show-data", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "Total students: 1" in result.output
        assert "1. Ada (ada@example.com)" in result.output
        assert "Student ID: S-1, Semester: 2" in result.output
        assert "Registered Courses: 1" in result.output
        assert "Total courses: 15" in result.output
        assert "CS101 - Data Structures and Algorithms" in result.output


@pytest.mark.unit
def test_version() -> None:
    result = CliRunner().invoke(main, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output
