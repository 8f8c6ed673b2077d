"""Tests for the connection registry and the session table."""

from shopassist.cobrowse.registry import ConnectionRegistry
from shopassist.cobrowse.sessions import SessionTable


def test_registry_set_get_clear():
    """Test that the registry maps connections to at most one session."""
    registry = ConnectionRegistry()
    registry.set_session("c1", "s1")
    registry.set_session("c1", "s2")

    assert registry.get_session("c1") == "s2"
    assert len(registry) == 1

    registry.clear("c1")
    assert registry.get_session("c1") is None


def test_registry_operations_are_total():
    """Test that unknown connections never raise."""
    registry = ConnectionRegistry()
    assert registry.get_session("nobody") is None
    registry.clear("nobody")
    assert len(registry) == 0


def test_ensure_creates_empty_session():
    """Test that ensure creates a blank session and returns the same one afterwards."""
    table = SessionTable()
    session = table.ensure("abc123")

    assert session.id == "abc123"
    assert session.page == "/"
    assert session.shared_state == {}
    assert session.members == set()
    assert table.ensure("abc123") is session


def test_add_member_is_idempotent():
    """Test that adding the same member twice does not change the count."""
    table = SessionTable()
    table.add_member("s", "c1")
    table.add_member("s", "c1")

    assert table.snapshot("s")["memberCount"] == 1


def test_remove_last_member_deletes_session():
    """Test that an emptied session disappears from the table."""
    table = SessionTable()
    table.add_member("s", "c1")
    table.add_member("s", "c2")

    assert table.remove_member("s", "c1") == 1
    assert "s" in table

    assert table.remove_member("s", "c2") == 0
    assert "s" not in table
    assert len(table) == 0


def test_session_recreated_after_deletion_is_fresh():
    """Test that an id reused after deletion does not resurrect old state."""
    table = SessionTable()
    table.add_member("s", "c1")
    table.set_page("s", "/products/7")
    table.set_shared_field("s", "filter", "shoes")
    table.remove_member("s", "c1")

    session = table.ensure("s")
    assert session.page == "/"
    assert session.shared_state == {}
    assert session.members == set()


def test_remove_member_unknown_is_noop():
    """Test that removing from unknown sessions or unknown members never raises."""
    table = SessionTable()
    assert table.remove_member("missing", "c1") == 0

    table.add_member("s", "c1")
    assert table.remove_member("s", "c2") == 1
    assert table.members("s") == {"c1"}


def test_setters_last_write_wins():
    table = SessionTable()
    table.add_member("s", "c1")
    table.set_page("s", "/a")
    table.set_page("s", "/b")
    table.set_shared_field("s", "k", 1)
    table.set_shared_field("s", "k", 2)

    assert table.snapshot("s") == {"page": "/b", "sharedState": {"k": 2}, "memberCount": 1}


def test_setters_do_not_create_sessions():
    """Test that writing state for an unknown session is ignored."""
    table = SessionTable()
    table.set_page("ghost", "/x")
    table.set_shared_field("ghost", "k", "v")

    assert "ghost" not in table


def test_snapshot_is_a_copy():
    """Test that mutating a snapshot does not leak back into the session."""
    table = SessionTable()
    table.add_member("s", "c1")
    table.set_shared_field("s", "k", "v")

    snapshot = table.snapshot("s")
    snapshot["sharedState"]["k"] = "changed"

    assert table.get("s").shared_state == {"k": "v"}


def test_members_returns_copy():
    table = SessionTable()
    table.add_member("s", "c1")
    members = table.members("s")
    members.add("c2")

    assert table.members("s") == {"c1"}
    assert table.members("unknown") == set()
