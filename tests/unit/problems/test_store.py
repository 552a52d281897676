"""Unit tests for problems.store.LocalStore."""

import os

import pytest
import yaml

from src.problems.errors import StoreError, StoreFilesystemError
from src.problems.store import LocalStore

from tests.fixtures import make_problem


class TestLoad:

    def test_missing_file_is_empty_store(self, store):
        assert store.get_problems() == []
        assert store.get_config()["database_id"] is None

    def test_empty_file_is_empty_store(self, store):
        with open(store.path, "w") as f:
            f.write("")

        assert store.get_problems() == []

    def test_invalid_yaml_raises(self, store):
        with open(store.path, "w") as f:
            f.write("problems: [unclosed")

        with pytest.raises(StoreError, match="Invalid YAML"):
            store.get_problems()

    def test_non_mapping_raises(self, store):
        with open(store.path, "w") as f:
            f.write("- just\n- a list\n")

        with pytest.raises(StoreError, match="dictionary"):
            store.get_problems()

    def test_problems_must_be_list(self, store):
        with open(store.path, "w") as f:
            f.write("problems: {a: 1}\n")

        with pytest.raises(StoreError) as exc_info:
            store.get_problems()
        assert exc_info.value.field == "problems"

    @pytest.mark.skipif(os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
                        reason="permission bits are not enforced")
    def test_unreadable_file(self, store):
        store.save_problems([make_problem()])
        os.chmod(store.path, 0)
        try:
            with pytest.raises(StoreFilesystemError) as exc_info:
                store.get_problems()
            assert exc_info.value.operation == "read"
        finally:
            os.chmod(store.path, 0o600)


class TestProblems:

    def test_add_and_read_back(self, store):
        problem = make_problem("two-sum", notes="use a hash map")

        store.add_problem(problem)

        assert store.get_problems() == [problem]

    def test_add_replaces_same_slug_in_place(self, store):
        store.add_problem(make_problem("a"))
        store.add_problem(make_problem("b"))
        replacement = make_problem("a", title="A (revisited)", problem_id="new-id")

        store.add_problem(replacement)

        problems = store.get_problems()
        assert [p.slug for p in problems] == ["a", "b"]
        assert problems[0].id == "new-id"

    def test_delete_problem(self, store):
        store.save_problems([make_problem("a"), make_problem("b")])

        assert store.delete_problem("id-a") is True
        assert [p.slug for p in store.get_problems()] == ["b"]
        assert store.delete_problem("id-a") is False

    def test_find_problem(self, store):
        store.save_problems([make_problem("a")])

        assert store.find_problem("id-a").slug == "a"
        assert store.find_problem("missing") is None

    def test_clear_all_keeps_config(self, store):
        store.save_config(database_id="db")
        store.save_problems([make_problem("a")])

        store.clear_all()

        assert store.get_problems() == []
        assert store.get_config()["database_id"] == "db"

    def test_creates_parent_directory(self, tmp_path):
        store = LocalStore(str(tmp_path / "nested" / "dir" / "store.yaml"))

        store.add_problem(make_problem())

        assert os.path.exists(store.path)


class TestConfig:

    def test_save_merges(self, store):
        store.save_config(database_id="db1", auto_sync=True)
        store.save_config(parent_page_title="Notes")

        config = store.get_config()
        assert config["database_id"] == "db1"
        assert config["auto_sync"] is True
        assert config["parent_page_title"] == "Notes"

    def test_unknown_key_rejected(self, store):
        with pytest.raises(StoreError, match="token"):
            store.save_config(token="secret_x")

    def test_token_never_written(self, store):
        store.save_config(database_id="db1")

        with open(store.path) as f:
            data = yaml.safe_load(f)
        assert "token" not in str(data)

    def test_last_sync_time(self, store):
        assert store.get_config()["last_sync_time"] is None

        stamp = store.update_last_sync_time()

        assert store.get_config()["last_sync_time"] == stamp

    def test_clear_config(self, store):
        store.save_config(database_id="db1")
        store.update_last_sync_time()
        store.save_problems([make_problem()])

        store.clear_config()

        config = store.get_config()
        assert config["database_id"] is None
        assert config["last_sync_time"] is None
        assert len(store.get_problems()) == 1


def test_default_path_under_home():
    path = LocalStore.default_path()

    assert path.startswith(os.path.expanduser("~"))
    assert path.endswith(os.path.join(".problem-tracker", "store.yaml"))
