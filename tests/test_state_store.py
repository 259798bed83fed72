"""
Tests for the append-only completed-steps state file.
"""

from fedora_setup.state_store import StateStore


def test_missing_file_is_empty(tmp_path):
    store = StateStore(tmp_path / "nope" / "state.txt")
    assert store.completed_ids() == []
    assert not store.is_completed("setup_dnf")


def test_mark_is_idempotent_and_append_only(tmp_path):
    path = tmp_path / "cfg" / "state.txt"
    store = StateStore(path)

    store.mark_completed("setup_dnf")
    store.mark_completed("setup_fonts")
    store.mark_completed("setup_dnf")

    assert path.read_text(encoding="utf-8") == "setup_dnf\nsetup_fonts\n"
    assert store.is_completed("setup_fonts")


def test_membership_is_whole_line(tmp_path):
    path = tmp_path / "state.txt"
    path.write_text("setup_dnf_extra\n", encoding="utf-8")
    store = StateStore(path)

    assert not store.is_completed("setup_dnf")
    assert not store.is_completed("setup")


def test_torn_last_line_is_not_merged(tmp_path):
    path = tmp_path / "state.txt"
    path.write_bytes(b"setup_dnf\nsetup_fo")
    store = StateStore(path)

    store.mark_completed("setup_shell")

    assert path.read_text(encoding="utf-8") == "setup_dnf\nsetup_fo\nsetup_shell\n"
    assert store.is_completed("setup_dnf")
    assert store.is_completed("setup_shell")


def test_unknown_ids_are_preserved(tmp_path):
    path = tmp_path / "state.txt"
    path.write_text("setup_from_the_future\n", encoding="utf-8")
    store = StateStore(path)

    store.mark_completed("setup_dnf")

    assert store.completed_ids() == ["setup_from_the_future", "setup_dnf"]


def test_reset_removes_everything(tmp_path):
    store = StateStore(tmp_path / "state.txt")
    store.mark_completed("setup_dnf")

    store.reset()
    store.reset()

    assert not store.path.exists()
    assert not store.is_completed("setup_dnf")


def test_unreadable_state_never_raises(tmp_path):
    # A directory where the file should be cannot be read as text.
    path = tmp_path / "state.txt"
    path.mkdir()
    assert StateStore(path).is_completed("setup_dnf") is False
