"""Unit tests for RecordStore course operations."""

from unittest.mock import patch

import pytest

from coursereg.store import (
    DEFAULT_CATALOG,
    CourseNotFoundError,
    CourseType,
    RecordStore,
    init_courses,
)


@pytest.mark.unit
class TestSeedCourses:
    """Tests for seed_courses / init_courses."""

    def test_seed_empty_store(self, store: RecordStore) -> None:
        """All 15 catalog courses are inserted into an empty store."""
        inserted = init_courses(store)

        assert inserted == 15
        assert store.count_courses() == 15

    def test_seed_is_idempotent(self, store: RecordStore) -> None:
        """Second seeding is a no-op."""
        init_courses(store)

        assert init_courses(store) == 0
        assert store.count_courses() == 15

    def test_concurrent_seed_is_noop(self, store: RecordStore) -> None:
        """A seed that loses the race to another seeder inserts nothing."""
        init_courses(store)

        with patch.object(store, "count_courses", return_value=0):
            assert init_courses(store) == 0

        assert store.count_courses() == 15

    def test_seed_skipped_when_any_course_exists(self, store: RecordStore) -> None:
        """A single existing course blocks seeding entirely."""
        store.seed_courses([{"code": "XX999", "name": "Custom", "credits": 1, "semester": 1}])

        assert init_courses(store) == 0
        assert store.count_courses() == 1

    def test_catalog_contents(self) -> None:
        """Catalog has 10 theory and 5 lab courses with unique codes."""
        codes = [c["code"] for c in DEFAULT_CATALOG]
        types = [c["type"] for c in DEFAULT_CATALOG]

        assert len(set(codes)) == 15
        assert types.count(CourseType.THEORY.value) == 10
        assert types.count(CourseType.LAB.value) == 5
        assert all(c["credits"] > 0 for c in DEFAULT_CATALOG)
        assert all(1 <= c["semester"] <= 8 for c in DEFAULT_CATALOG)


@pytest.mark.unit
class TestListCourses:
    """Tests for list_courses."""

    def test_list_empty(self, store: RecordStore) -> None:
        assert store.list_courses() == []

    def test_ordered_by_credits_desc_then_code(self, store: RecordStore) -> None:
        init_courses(store)

        courses = store.list_courses()

        keys = [(-c.credits, c.code) for c in courses]
        assert keys == sorted(keys)
        assert courses[0].code == "CS101"


@pytest.mark.unit
class TestGetCourse:
    """Tests for get_course."""

    def test_get_course_exists(self, store: RecordStore) -> None:
        init_courses(store)
        course = store.list_courses()[0]

        retrieved = store.get_course(course.id)

        assert retrieved.code == course.code
        assert retrieved.course_type == CourseType.THEORY

    def test_get_course_not_found_raises(self, store: RecordStore) -> None:
        with pytest.raises(CourseNotFoundError) as exc_info:
            store.get_course("nonexistent-id")

        assert "nonexistent-id" in str(exc_info.value)
