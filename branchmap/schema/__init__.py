"""Schema layer for branch, commit and snapshot records."""

from .errors import SnapshotLoadError, SnapshotValidationError
from .models import (
    Branch,
    BranchHead,
    Commit,
    CommitDetails,
    CommitFile,
    CommitParent,
    GitIdentity,
    RepositorySnapshot,
)
from .loader import dump_snapshot, load_yaml, parse_snapshot, parse_snapshot_from_string

__all__ = [
    "SnapshotLoadError",
    "SnapshotValidationError",
    "Branch",
    "BranchHead",
    "Commit",
    "CommitDetails",
    "CommitFile",
    "CommitParent",
    "GitIdentity",
    "RepositorySnapshot",
    "dump_snapshot",
    "load_yaml",
    "parse_snapshot",
    "parse_snapshot_from_string",
]
