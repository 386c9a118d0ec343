"""Color and size tables for graph nodes and edges."""

from .node_types import EdgeKind

SELECTED_BRANCH_COLOR = "#6f42c1"
PRIMARY_BRANCH_COLOR = "#0366d6"
BRANCH_COLOR = "#6a737d"
COMMIT_COLOR = "#28a745"
DEFAULT_FILE_COLOR = "#6e7681"

BRANCH_RADIUS = 20.0
FILE_RADIUS = 8.0
COMMIT_BASE_RADIUS = 10.0
COMMIT_MAX_FILE_BONUS = 5

EDGE_COLORS = {
    EdgeKind.BRANCH_TO_COMMIT: "#6a737d",
    EdgeKind.COMMIT_TO_COMMIT: "#28a745",
    EdgeKind.COMMIT_TO_FILE: "#ffab00",
}

FILE_EXTENSION_COLORS = {
    "js": "#f1e05a",
    "ts": "#3178c6",
    "jsx": "#61dafb",
    "tsx": "#3178c6",
    "css": "#563d7c",
    "scss": "#c6538c",
    "html": "#e34c26",
    "json": "#292929",
    "md": "#083fa1",
    "py": "#3572A5",
    "java": "#b07219",
    "rb": "#701516",
    "go": "#00ADD8",
    "rs": "#dea584",
    "php": "#4F5D95",
    "swift": "#F05138",
}


def file_color(filename: str) -> str:
    """Get the display color for a file path from its extension."""
    extension = filename.rsplit(".", 1)[-1].lower()
    return FILE_EXTENSION_COLORS.get(extension, DEFAULT_FILE_COLOR)


def branch_color(name: str, selected_branch: str | None, is_default: bool) -> str:
    """Get the display color for a branch node."""
    if name == selected_branch:
        return SELECTED_BRANCH_COLOR
    if is_default:
        return PRIMARY_BRANCH_COLOR
    return BRANCH_COLOR


def commit_radius(file_count: int) -> float:
    """Commit nodes grow with the number of touched files, capped."""
    return COMMIT_BASE_RADIUS + min(file_count, COMMIT_MAX_FILE_BONUS)
