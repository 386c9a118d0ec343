"""Tests for graph builder."""

import math

import pytest

from branchmap.graph.builder import build_graph
from branchmap.graph.colors import (
    BRANCH_COLOR,
    DEFAULT_FILE_COLOR,
    PRIMARY_BRANCH_COLOR,
    SELECTED_BRANCH_COLOR,
)
from branchmap.graph.node_types import EdgeKind, NodeKind


def kinds(graph, kind):
    return [n for n in graph.nodes if n.kind == kind]


class TestBranchNodes:
    def test_three_branches_no_commits(self, make_branches, canvas):
        graph = build_graph(make_branches("main", "develop", "feature"), [], None, canvas)

        assert len(kinds(graph, NodeKind.BRANCH)) == 3
        assert kinds(graph, NodeKind.COMMIT) == []
        assert kinds(graph, NodeKind.FILE) == []

        edges = graph.edges
        assert len(edges) == 2
        assert {(e.source, e.target) for e in edges} == {
            ("branch:main", "branch:develop"),
            ("branch:main", "branch:feature"),
        }
        assert all(e.kind == EdgeKind.BRANCH_TO_COMMIT for e in edges)

    def test_no_default_branch_no_scaffolding(self, make_branches, canvas):
        graph = build_graph(make_branches("a", "b", "c"), [], None, canvas)
        assert graph.edges == []

    def test_master_is_default(self, make_branches, canvas):
        graph = build_graph(make_branches("dev", "master"), [], None, canvas)
        assert [(e.source, e.target) for e in graph.edges] == [
            ("branch:master", "branch:dev")
        ]

    def test_anchor_ring(self, make_branches, canvas):
        graph = build_graph(make_branches("a", "b", "c", "d"), [], None, canvas)

        # 400x400 canvas: center (200, 200), ring radius 120
        positions = [n.position for n in graph.nodes]
        expected = [(320, 200), (200, 320), (80, 200), (200, 80)]
        for (x, y), (ex, ey) in zip(positions, expected):
            assert x == pytest.approx(ex)
            assert y == pytest.approx(ey)

        for node in graph.nodes:
            x, y = node.position
            assert math.hypot(x - 200, y - 200) == pytest.approx(120)
            assert node.fixed

    def test_colors(self, make_branches, canvas):
        graph = build_graph(make_branches("main", "develop", "feature"), [], "develop", canvas)

        colors = {n.label: n.color for n in graph.nodes}
        assert colors == {
            "main": PRIMARY_BRANCH_COLOR,
            "develop": SELECTED_BRANCH_COLOR,
            "feature": BRANCH_COLOR,
        }

    def test_selected_default_branch_uses_selected_color(self, make_branches, canvas):
        graph = build_graph(make_branches("main"), [], "main", canvas)
        assert graph.get_node("branch:main").color == SELECTED_BRANCH_COLOR

    def test_duplicate_branch_names_keep_first(self, make_branches, canvas):
        graph = build_graph(make_branches("dev", "dev"), [], None, canvas)
        assert graph.get_branch_names() == ["dev"]


class TestCommitNodes:
    def test_label_truncated(self, make_branches, make_commit, canvas):
        commit = make_commit("abc", message="A very long commit message indeed")
        graph = build_graph([], [commit], None, canvas)

        node = graph.get_commit_node("abc")
        assert node.label == "A very long commit m"
        assert node.position is None
        assert not node.fixed
        assert node.payload is commit

    def test_radius_grows_with_files_capped(self, make_commit, canvas):
        commits = [
            make_commit("none"),
            make_commit("two", files=["a", "b"]),
            make_commit("many", files=[f"f{i}" for i in range(9)]),
        ]
        graph = build_graph([], commits, None, canvas)

        assert graph.get_commit_node("none").radius == 10
        assert graph.get_commit_node("two").radius == 12
        assert graph.get_commit_node("many").radius == 15

    def test_commit_without_sha_is_skipped(self, make_commit, canvas):
        graph = build_graph([], [make_commit(""), make_commit("ok")], None, canvas)
        assert [n.id for n in graph.nodes] == ["commit:ok"]

    def test_selected_branch_points_at_first_commit(
        self, make_branches, make_commit, canvas
    ):
        commits = [make_commit("c2", parents=["c1"]), make_commit("c1")]
        graph = build_graph(make_branches("feature"), commits, "feature", canvas)

        edges = graph.edges_from("branch:feature")
        assert [(e.target, e.kind) for e in edges] == [
            ("commit:c2", EdgeKind.BRANCH_TO_COMMIT)
        ]

    def test_selected_branch_missing_adds_no_edge(self, make_branches, make_commit, canvas):
        graph = build_graph(make_branches("dev"), [make_commit("c1")], "gone", canvas)
        assert graph.edges == []

    def test_no_selected_branch_adds_no_edge(self, make_branches, make_commit, canvas):
        graph = build_graph(make_branches("dev"), [make_commit("c1")], None, canvas)
        assert graph.edges == []

    def test_parent_edges_parent_to_child(self, make_commit, canvas):
        # Newest first: parents are listed after their children
        commits = [make_commit("c3", parents=["c2"]), make_commit("c2", parents=["c1"]), make_commit("c1")]
        graph = build_graph([], commits, None, canvas)

        pairs = [(e.source, e.target) for e in graph.edges if e.kind == EdgeKind.COMMIT_TO_COMMIT]
        assert pairs == [("commit:c2", "commit:c3"), ("commit:c1", "commit:c2")]

    def test_missing_parent_is_dropped(self, make_commit, canvas):
        graph = build_graph([], [make_commit("c1", parents=["outside"])], None, canvas)

        assert graph.edges == []
        assert [n.id for n in graph.nodes] == ["commit:c1"]

    def test_duplicate_commit_keeps_first(self, make_commit, canvas):
        graph = build_graph(
            [], [make_commit("c1", message="first"), make_commit("c1", message="second")], None, canvas
        )
        assert graph.get_commit_node("c1").label == "first"


class TestFileNodes:
    def test_shared_file_node(self, make_commit, canvas):
        commits = [make_commit("c2", files=["a.txt"]), make_commit("c1", files=["a.txt"])]
        graph = build_graph([], commits, None, canvas)

        file_nodes = kinds(graph, NodeKind.FILE)
        assert [n.id for n in file_nodes] == ["file:a.txt"]

        incoming = graph.edges_into("file:a.txt", EdgeKind.COMMIT_TO_FILE)
        assert sorted(e.source for e in incoming) == ["commit:c1", "commit:c2"]

    def test_label_is_basename(self, make_commit, canvas):
        graph = build_graph([], [make_commit("c1", files=["src/deep/app.py"])], None, canvas)
        assert graph.get_file_node("src/deep/app.py").label == "app.py"

    def test_extension_colors(self, make_commit, canvas):
        graph = build_graph(
            [], [make_commit("c1", files=["app.PY", "index.tsx", "Makefile", "data.xyz"])], None, canvas
        )

        assert graph.get_file_node("app.PY").color == "#3572A5"
        assert graph.get_file_node("index.tsx").color == "#3178c6"
        assert graph.get_file_node("Makefile").color == DEFAULT_FILE_COLOR
        assert graph.get_file_node("data.xyz").color == DEFAULT_FILE_COLOR

    def test_file_without_name_is_skipped(self, make_commit, canvas):
        graph = build_graph([], [make_commit("c1", files=["", "ok.md"])], None, canvas)
        assert [n.id for n in kinds(graph, NodeKind.FILE)] == ["file:ok.md"]

    def test_node_order(self, make_branches, make_commit, canvas):
        commits = [make_commit("c2", files=["x.py"]), make_commit("c1", files=["x.py", "y.py"])]
        graph = build_graph(make_branches("main"), commits, "main", canvas)

        assert [n.id for n in graph.nodes] == [
            "branch:main",
            "commit:c2",
            "file:x.py",
            "commit:c1",
            "file:y.py",
        ]


class TestGraphInvariants:
    def test_no_dangling_edges(self, history_graph):
        for edge in history_graph.edges:
            assert history_graph.has_node(edge.source)
            assert history_graph.has_node(edge.target)

    def test_ids_unique_when_sha_equals_path(self, make_branches, make_commit, canvas):
        commits = [
            make_commit("shared", files=["shared"]),
            make_commit("main", files=["main"]),
        ]
        graph = build_graph(make_branches("main", "shared"), commits, "main", canvas)

        ids = [n.id for n in graph.nodes]
        assert len(ids) == len(set(ids))
        assert len(ids) == 6

    def test_idempotent(self, history_snapshot, canvas):
        first = build_graph(
            history_snapshot.branches, history_snapshot.commits, "main", canvas
        )
        second = build_graph(
            history_snapshot.branches, history_snapshot.commits, "main", canvas
        )
        assert first.fingerprint() == second.fingerprint()

    def test_history_edges(self, history_graph):
        counts = {kind: 0 for kind in EdgeKind}
        for edge in history_graph.edges:
            counts[edge.kind] += 1

        # 2 scaffolding + main -> c3
        assert counts[EdgeKind.BRANCH_TO_COMMIT] == 3
        # c2 -> c3, c1 -> c3, c1 -> c2 (c0 is outside the window)
        assert counts[EdgeKind.COMMIT_TO_COMMIT] == 3
        assert counts[EdgeKind.COMMIT_TO_FILE] == 4

    def test_default_canvas(self, make_branches):
        graph = build_graph(make_branches("main"), [])
        x, y = graph.get_node("branch:main").position
        # 360x1000 canvas: ring radius 108 around (180, 500)
        assert x == pytest.approx(288)
        assert y == pytest.approx(500)
