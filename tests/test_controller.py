"""Tests for VcsController."""

import pytest

from svcs.core.commit_store import SnapshotMissingError
from svcs.core.controller import VcsController
from svcs.core.state import StateDecodeError


@pytest.fixture
def temp_project(tmp_path):
    """Create a temporary working directory."""
    project = tmp_path / "project"
    project.mkdir()

    (project / "a.txt").write_text("x")
    (project / "b.txt").write_text("y")

    return project


def reopen(project):
    """Simulate a new process invocation."""
    return VcsController(working_dir=project)


@pytest.fixture
def controller(temp_project):
    return reopen(temp_project)


class TestVcsController:
    def test_default_repo_dir(self, controller, temp_project):
        assert controller.repo_dir == temp_project / "vcs"

    def test_repo_dir_from_env(self, temp_project, tmp_path, monkeypatch):
        monkeypatch.setenv("SVCS_DIR", str(tmp_path / "elsewhere"))

        assert reopen(temp_project).repo_dir == tmp_path / "elsewhere"

    def test_config_unset(self, controller):
        assert controller.config() == {"success": False, "reason": "no_user"}

    def test_config_persists(self, controller, temp_project):
        assert controller.config("alice")["name"] == "alice"
        assert reopen(temp_project).config() == {"success": True, "name": "alice"}

    def test_add_missing_path(self, controller, temp_project):
        result = controller.add("nope.txt")

        assert result == {"success": False, "reason": "not_found", "path": "nope.txt"}
        assert reopen(temp_project).add()["files"] == []

    def test_add_directory_is_rejected(self, controller, temp_project):
        (temp_project / "sub").mkdir()

        assert controller.add("sub")["reason"] == "not_found"

    def test_add_rejects_repository_files(self, controller, temp_project):
        controller.add("a.txt")
        controller.commit("one")

        result = controller.add("vcs/log.txt")

        assert result == {"success": False, "reason": "not_found", "path": "vcs/log.txt"}
        assert controller.add("vcs/../vcs/log.txt")["reason"] == "not_found"
        assert reopen(temp_project).add()["files"] == ["a.txt"]

    def test_checkout_never_rewrites_log(self, controller, temp_project):
        controller.add("a.txt")
        controller.commit("one")
        controller.add("vcs/log.txt")
        two = controller.commit("two")
        (temp_project / "a.txt").write_text("z")
        controller.commit("three")

        assert two["reason"] == "nothing_to_commit"
        reopen(temp_project).checkout(controller.log()["commits"][-1].hash)
        assert len(reopen(temp_project).log()["commits"]) == 2

    def test_commit_blank_message(self, controller):
        controller.add("a.txt")

        assert controller.commit("  ")["success"]
        assert controller.log()["commits"][0].message == "  "

    def test_add_order_survives_restart(self, controller, temp_project):
        for path in ["b.txt", "a.txt", "b.txt"]:
            assert controller.add(path)["success"]

        assert reopen(temp_project).add()["files"] == ["b.txt", "a.txt", "b.txt"]

    def test_commit_without_message(self, controller, temp_project):
        controller.add("a.txt")

        assert controller.commit() == {"success": False, "reason": "no_message"}
        assert reopen(temp_project).log()["commits"] == []

    def test_commit_twice_is_deduplicated(self, controller, temp_project):
        controller.add("a.txt")
        first = controller.commit("one")
        second = controller.commit("two")

        assert first["success"]
        assert second["reason"] == "nothing_to_commit"
        assert len(reopen(temp_project).log()["commits"]) == 1

    def test_commit_records_author_and_snapshot(self, controller, temp_project):
        controller.config("alice")
        controller.add("a.txt")

        result = controller.commit("first")

        commit = controller.log()["commits"][0]
        assert commit.hash == result["hash"]
        assert commit.author == "alice"
        assert commit.message == "first"
        assert (temp_project / "vcs" / "commits" / result["hash"] / "a.txt").read_text() == "x"

    def test_dedup_only_against_latest(self, controller, temp_project):
        controller.add("a.txt")
        controller.commit("x")
        (temp_project / "a.txt").write_text("z")
        controller.commit("z")
        (temp_project / "a.txt").write_text("x")

        result = controller.commit("x again")

        assert result["success"]
        hashes = [c.hash for c in controller.log()["commits"]]
        assert len(hashes) == 3
        assert hashes[0] == hashes[2]

    def test_log_is_reverse_chronological(self, controller, temp_project):
        controller.add("a.txt")
        for content in ["1", "2", "3"]:
            (temp_project / "a.txt").write_text(content)
            controller.commit(f"commit {content}")

        messages = [c.message for c in reopen(temp_project).log()["commits"]]
        assert messages == ["commit 3", "commit 2", "commit 1"]

    def test_checkout_without_id(self, controller):
        assert controller.checkout() == {"success": False, "reason": "no_commit_id"}

    def test_checkout_unknown_commit_changes_nothing(self, controller, temp_project):
        controller.add("a.txt")

        result = controller.checkout("deadbeef")

        assert result["reason"] == "unknown_commit"
        assert (temp_project / "a.txt").read_text() == "x"

    def test_checkout_round_trip_reproduces_hash(self, controller, temp_project):
        controller.add("a.txt")
        controller.add("b.txt")
        first = controller.commit("first")["hash"]
        (temp_project / "a.txt").write_text("z")
        (temp_project / "b.txt").write_text("w")
        controller.commit("second")

        result = reopen(temp_project).checkout(first)

        assert result == {"success": True, "hash": first, "fileCount": 2}
        assert controller.current_hash() == first

    def test_checkout_missing_snapshot_is_fatal(self, controller, temp_project):
        controller.add("a.txt")
        h = controller.commit("first")["hash"]
        (temp_project / "vcs" / "commits" / h / "a.txt").unlink()

        with pytest.raises(SnapshotMissingError):
            reopen(temp_project).checkout(h)
        assert (temp_project / "a.txt").read_text() == "x"

    def test_corrupt_state_is_fatal(self, temp_project):
        (temp_project / "vcs").mkdir()
        (temp_project / "vcs" / "log.txt").write_text("[")

        with pytest.raises(StateDecodeError):
            reopen(temp_project)

    def test_scenario_two_commits_and_checkout(self, controller, temp_project):
        controller.add("a.txt")
        controller.add("b.txt")
        first = controller.commit("first")["hash"]
        assert len(controller.log()["commits"]) == 1

        (temp_project / "a.txt").write_text("z")
        second = reopen(temp_project).commit("second")["hash"]

        log = reopen(temp_project).log()["commits"]
        assert [c.hash for c in log] == [second, first]

        reopen(temp_project).checkout(first)
        assert (temp_project / "a.txt").read_text() == "x"
        assert (temp_project / "b.txt").read_text() == "y"
