"""
Tests for structlog configuration and request context
"""

from usergraph.logging import (
    RequestContextFilter,
    clear_request_context,
    configure_logging,
    generate_request_id,
    get_logger,
    get_request_id,
    set_request_context,
)


def test_generate_request_id_is_compact_and_unique():
    ids = {generate_request_id() for _ in range(100)}

    assert len(ids) == 100
    assert all(len(i) == 14 for i in ids)
    assert all("=" not in i for i in ids)


def test_request_context_is_added_to_events():
    set_request_context(request_id="req-1", operation="GetUsers")
    try:
        event = RequestContextFilter()(None, "info", {"event": "hello"})
    finally:
        clear_request_context()

    assert event == {"event": "hello", "request_id": "req-1", "graphql_operation": "GetUsers"}
    assert get_request_id() is None


def test_set_request_context_generates_id():
    request_id = set_request_context()
    try:
        assert get_request_id() == request_id
    finally:
        clear_request_context()


def test_configure_logging_json(capsys):
    configure_logging(debug=False, level="info")

    get_logger("usergraph.test").info("User created", user_id="abc")

    out = capsys.readouterr().out
    assert '"event": "User created"' in out
    assert '"user_id": "abc"' in out
