"""Tests for options, cursors and results."""

import json

import pytest

from src.ytplaylist.errors import (
    InvalidApiKeyError,
    InvalidContextError,
    InvalidContinuationError,
    InvalidInputError,
    InvalidOptionsError,
    InvalidTokenError,
    PagedOnlyError,
)
from src.ytplaylist.models import ContinuationCursor, Options, PlaylistResult


class TestOptions:
    def test_defaults(self):
        options = Options()
        assert options.limit is None
        assert options.pages is None
        assert options.gl == "US"
        assert options.hl == "en"
        assert options.headers == {}
        assert options.is_paged

    def test_pages_clear_limit(self):
        """Test a paged request is never limit-bounded."""
        options = Options(limit=10, pages=2)
        assert options.limit is None
        assert options.pages == 2

    @pytest.mark.parametrize("field", ["limit", "pages"])
    @pytest.mark.parametrize("value", [0, -1, "3", 1.5, True])
    def test_invalid_counts(self, field, value):
        with pytest.raises(InvalidInputError, match=f"{field} has to be a positive integer"):
            Options(**{field: value})

    def test_headers_copy(self):
        options = Options(request_options={"headers": {"test": "test"}})
        headers = options.headers
        headers["other"] = "x"
        assert options.headers == {"test": "test"}

    def test_from_dict_legacy_key(self):
        """Test the requestOptions spelling of older cursors."""
        options = Options.from_dict({"requestOptions": {"headers": {"test": "test"}}})
        assert options.headers == {"test": "test"}
        assert options.gl == "US"

    def test_dict_round_trip(self):
        options = Options(pages=3, gl="DE", hl="de", request_options={"headers": {"a": "b"}})
        assert Options.from_dict(options.to_dict()) == options


class TestContinuationCursor:
    """Cursor validation follows the field order key, token, context, options."""

    @pytest.mark.parametrize(
        "value, error, message",
        [
            (None, InvalidContinuationError, "invalid continuation array"),
            ([1, 2, 3], InvalidContinuationError, "invalid continuation array"),
            ("abcd", InvalidContinuationError, "invalid continuation array"),
            ([1, None, None, None], InvalidApiKeyError, "invalid apiKey"),
            (["", "t", {}, {}], InvalidApiKeyError, "invalid apiKey"),
            (["null", 2, None, None], InvalidTokenError, "invalid token"),
            (["null", "", {}, {}], InvalidTokenError, "invalid token"),
            (["null", "null", 3, None], InvalidContextError, "invalid context"),
            (["null", "null", None, {}], InvalidContextError, "invalid context"),
            (["null", "null", {}, 4], InvalidOptionsError, "invalid opts"),
            (["null", "null", {}, None], InvalidOptionsError, "invalid opts"),
            (["null", "null", {}, {"limit": 3}], PagedOnlyError, "continueReq only allowed for paged requests"),
            (["null", "null", {}, {"pages": -1}], InvalidOptionsError, "invalid opts"),
        ],
    )
    def test_invalid(self, value, error, message):
        with pytest.raises(error, match=message):
            ContinuationCursor.from_list(value)

    def test_valid(self):
        cursor = ContinuationCursor.from_list(
            ("apiKey", "token", {"context": "context"}, {"requestOptions": {"headers": {"test": "test"}}})
        )
        assert cursor.api_key == "apiKey"
        assert cursor.token == "token"
        assert cursor.context == {"context": "context"}
        assert cursor.options.headers == {"test": "test"}

    def test_cursor_instance_passes_through(self):
        cursor = ContinuationCursor("k", "t", {}, Options())
        assert ContinuationCursor.from_list(cursor) is cursor

    def test_json_round_trip_keeps_context(self):
        """Test the list form survives serialization with the context untouched."""
        context = {"client": {"clientVersion": "2.2024", "nested": [1, {"x": None}]}, "user": {}}
        cursor = ContinuationCursor("k", "t", context, Options(pages=2))

        loaded = ContinuationCursor.from_list(json.loads(json.dumps(cursor.to_list())))

        assert loaded == cursor
        assert loaded.context == context

    def test_with_token(self):
        cursor = ContinuationCursor("k", "t", {"a": 1}, Options())
        following = cursor.with_token("t2")
        assert following.token == "t2"
        assert following.api_key == "k"
        assert following.context is cursor.context
        assert cursor.token == "t"


def test_result_to_dict():
    """Test metadata is flattened and the cursor serialized as a list."""
    cursor = ContinuationCursor("k", "t", {}, Options(pages=1))
    result = PlaylistResult(items=[{"id": "a"}], continuation=cursor, info={"title": "T", "id": "PL1"})

    data = result.to_dict()

    assert data["title"] == "T"
    assert data["items"] == [{"id": "a"}]
    assert data["continuation"] == ["k", "t", {}, Options(pages=1).to_dict()]
    assert PlaylistResult().to_dict() == {"items": [], "continuation": None}
