"""Unit tests for session models and title derivation."""

import pytest
import pytest_check as check
from pydantic import ValidationError

from src.models.schemas import (
    HIDDEN_HINT,
    SESSION_LIST_ADAPTER,
    Session,
    ShellState,
    Theme,
    clean_text,
    session_title,
)


class TestSessionTitle:
    """Tests for session_title."""

    def test_empty_session_is_new_chat(self) -> None:
        """A session without messages shows the placeholder."""
        assert session_title(Session()) == "New chat"

    def test_long_first_message_is_truncated(self) -> None:
        """First message over 32 chars keeps 32 chars plus an ellipsis."""
        title = session_title(Session(messages=("x" * 40,)))

        check.equal(title, "x" * 32 + "…")
        check.is_true(title.startswith("x" * 32))

    def test_exactly_32_chars_is_not_truncated(self) -> None:
        """Boundary length is shown in full."""
        assert session_title(Session(messages=("y" * 32,))) == "y" * 32

    def test_uses_first_message_only(self) -> None:
        """Later messages do not affect the title."""
        assert session_title(Session(messages=("hello", "world"))) == "hello"

    def test_custom_length(self) -> None:
        """Truncation length can be overridden."""
        assert session_title(Session(messages=("abcdef",)), max_chars=3) == "abc…"


class TestCleanText:
    """Tests for making browser text encodable."""

    def test_plain_text_is_unchanged(self) -> None:
        """Ordinary text, emoji included, passes through."""
        check.equal(clean_text("hello"), "hello")
        check.equal(clean_text("ok \U0001f600"), "ok \U0001f600")

    def test_split_pair_is_joined(self) -> None:
        """High and low surrogate code units form one character."""
        assert clean_text("\ud83d\ude00") == "\U0001f600"

    @pytest.mark.parametrize("text", ["\ud83d", "x\udc00y", "\ude00\ud83d"])
    def test_lone_surrogates_are_replaced(self, text: str) -> None:
        """Unpaired surrogates become the replacement character."""
        cleaned = clean_text(text)

        check.is_in("\ufffd", cleaned)
        check.equal(cleaned.encode("utf-8").decode("utf-8"), cleaned)


class TestSession:
    """Tests for the Session model."""

    def test_with_message_returns_new_session(self) -> None:
        """Appending leaves the original untouched."""
        original = Session(messages=("a",))
        updated = original.with_message("b")

        check.equal(original.messages, ("a",))
        check.equal(updated.messages, ("a", "b"))

    def test_sessions_are_frozen(self) -> None:
        """Sessions cannot be mutated in place."""
        with pytest.raises(ValidationError):
            Session().messages = ("x",)  # type: ignore[misc]

    def test_equal_by_value(self) -> None:
        """Sessions with the same messages compare equal."""
        assert Session(messages=("a",)) == Session(messages=("a",))


class TestSessionListAdapter:
    """Tests for validation of the persisted session list."""

    def test_decodes_valid_list(self) -> None:
        """A list of message records is decoded into sessions."""
        sessions = SESSION_LIST_ADAPTER.validate_json('[{"messages": ["hi"]}, {"messages": []}]')

        assert sessions == [Session(messages=("hi",)), Session()]

    def test_rejects_empty_list(self) -> None:
        """Zero sessions is not a valid persisted state."""
        with pytest.raises(ValidationError):
            SESSION_LIST_ADAPTER.validate_json("[]")

    def test_rejects_non_string_messages(self) -> None:
        """Messages must be strings."""
        with pytest.raises(ValidationError):
            SESSION_LIST_ADAPTER.validate_json('[{"messages": [1, 2]}]')

    def test_rejects_non_list(self) -> None:
        """A bare object is not a session list."""
        with pytest.raises(ValidationError):
            SESSION_LIST_ADAPTER.validate_json('{"messages": []}')

    def test_dump_matches_storage_layout(self) -> None:
        """Sessions serialize as records with a messages array."""
        raw = SESSION_LIST_ADAPTER.dump_json([Session(messages=("a", "b"))])

        assert raw == b'[{"messages":["a","b"]}]'


class TestShellState:
    """Tests for the view snapshot model."""

    def test_rejects_negative_active_index(self) -> None:
        """Active index can never be negative."""
        with pytest.raises(ValidationError):
            ShellState(
                sessions=(),
                active_index=-1,
                draft="",
                hint=HIDDEN_HINT,
                composer_height=48,
                theme=Theme.LIGHT,
            )
