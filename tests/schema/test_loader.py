"""Tests for snapshot loading."""

import pytest

from branchmap.schema.errors import SnapshotLoadError, SnapshotValidationError
from branchmap.schema.loader import (
    dump_snapshot,
    load_yaml,
    parse_snapshot,
    parse_snapshot_from_string,
)


class TestLoadYaml:
    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotLoadError) as exc_info:
            load_yaml(tmp_path / "missing.yaml")
        assert "File not found" in str(exc_info.value)

    def test_directory(self, tmp_path):
        with pytest.raises(SnapshotLoadError):
            load_yaml(tmp_path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml(path) == {}

    def test_not_a_mapping(self, examples_dir):
        with pytest.raises(SnapshotLoadError) as exc_info:
            load_yaml(examples_dir / "invalid" / "not_a_mapping.yaml")
        assert "Expected YAML mapping" in str(exc_info.value)

    def test_json_file(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text('{"branches": [{"name": "main"}]}')
        assert load_yaml(path)["branches"][0]["name"] == "main"


class TestParseSnapshot:
    def test_parse_sample(self, examples_dir):
        snapshot = parse_snapshot(examples_dir / "sample_repo.yaml")

        assert snapshot.owner == "octo"
        assert snapshot.selected_branch == "main"
        assert snapshot.get_branch_names() == ["main", "develop", "feature/login"]
        assert len(snapshot.commits) == 3
        assert snapshot.commits[1].message == "Add login form"

    def test_validation_errors_are_flattened(self, examples_dir):
        with pytest.raises(SnapshotValidationError) as exc_info:
            parse_snapshot(examples_dir / "invalid" / "bad_branch.yaml")

        locations = {err["loc"] for err in exc_info.value.errors}
        assert "branches.0.name" in locations
        assert any(loc.startswith("commits.0.parents") for loc in locations)

    def test_invalid_yaml_string(self):
        with pytest.raises(SnapshotLoadError):
            parse_snapshot_from_string("branches: [main")

    def test_empty_string(self):
        snapshot = parse_snapshot_from_string("")
        assert snapshot.branches == []
        assert snapshot.commits == []


class TestDumpSnapshot:
    def test_dump_is_readable(self, history_snapshot):
        reloaded = parse_snapshot_from_string(dump_snapshot(history_snapshot))

        assert reloaded.get_branch_names() == history_snapshot.get_branch_names()
        assert [c.sha for c in reloaded.commits] == ["c3", "c2", "c1"]
        assert reloaded.get_branch("main").is_main
