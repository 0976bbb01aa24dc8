"""Unit tests for RecordStore login session operations."""

from datetime import timedelta

import pytest

from coursereg.store import RecordStore, StudentNotFoundError


@pytest.fixture
def student_id(store: RecordStore) -> str:
    return store.create_student("Ada", "ada@example.com", "h", "S-1").id


@pytest.mark.unit
class TestLoginSessions:
    """Tests for login session lifecycle."""

    def test_create_and_resolve(self, store: RecordStore, student_id: str) -> None:
        login_session = store.create_login_session(student_id, timedelta(hours=24))

        active = store.get_active_login_session(login_session.token)

        assert active is not None
        assert active.student_id == student_id
        assert active.expires_at > active.created_at

    def test_tokens_are_unique(self, store: RecordStore, student_id: str) -> None:
        ttl = timedelta(hours=1)
        tokens = {store.create_login_session(student_id, ttl).token for _ in range(5)}

        assert len(tokens) == 5

    def test_unknown_token(self, store: RecordStore) -> None:
        assert store.get_active_login_session("bogus") is None

    def test_expired_session_inactive(self, store: RecordStore, student_id: str) -> None:
        login_session = store.create_login_session(student_id, timedelta(seconds=-1))

        assert store.get_active_login_session(login_session.token) is None

    def test_invalidate(self, store: RecordStore, student_id: str) -> None:
        login_session = store.create_login_session(student_id, timedelta(hours=1))

        assert store.invalidate_login_session(login_session.token) is True
        assert store.get_active_login_session(login_session.token) is None
        assert store.invalidate_login_session(login_session.token) is False

    def test_create_for_missing_student_raises(self, store: RecordStore) -> None:
        with pytest.raises(StudentNotFoundError):
            store.create_login_session("ghost", timedelta(hours=1))
