"""Pydantic models for branch, commit and snapshot records."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_BRANCH_NAMES = ("main", "master")


class BranchHead(BaseModel):
    """The commit a branch currently points at."""

    sha: str = ""
    url: str = ""


class Branch(BaseModel):
    """A branch as returned by the branches endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    commit: BranchHead = Field(default_factory=BranchHead)
    html_url: str = ""
    protected: bool = False
    is_main: bool = Field(default=False, alias="isMain")

    @model_validator(mode="before")
    @classmethod
    def default_is_main(cls, data: dict) -> dict:
        """Mark main/master as the default branch unless told otherwise."""
        if isinstance(data, dict):
            data = dict(data)
            if "isMain" not in data and "is_main" not in data:
                data["isMain"] = data.get("name") in DEFAULT_BRANCH_NAMES
            if data.get("commit") is None:
                data.pop("commit", None)
        return data


class GitIdentity(BaseModel):
    """Author or committer of a commit."""

    name: str = ""
    email: str = ""
    date: str = ""


class CommitDetails(BaseModel):
    """The git-level part of a commit record."""

    message: str = ""
    author: GitIdentity | None = None
    committer: GitIdentity | None = None
    comment_count: int = 0


class CommitFile(BaseModel):
    """A file touched by a commit."""

    filename: str = ""
    status: str = "modified"
    changes: int = 0


class CommitParent(BaseModel):
    """A reference to a parent commit."""

    sha: str = ""
    url: str = ""
    html_url: str = ""


class Commit(BaseModel):
    """A commit as returned by the commits endpoint."""

    sha: str = ""
    commit: CommitDetails = Field(default_factory=CommitDetails)
    files: list[CommitFile] | None = None
    parents: list[CommitParent] = Field(default_factory=list)
    html_url: str = ""

    @model_validator(mode="before")
    @classmethod
    def normalize_commit(cls, data: dict) -> dict:
        """Normalize shorthand parents, files and message."""
        if not isinstance(data, dict):
            return data
        data = dict(data)

        # message: "..." -> commit: {message: "..."}
        if "message" in data:
            message = data.pop("message")
            details = data.get("commit") or {}
            if isinstance(details, dict):
                details = dict(details)
                details.setdefault("message", message)
                data["commit"] = details

        parents = data.get("parents")
        if parents is None:
            data["parents"] = []
        elif isinstance(parents, list):
            data["parents"] = [
                {"sha": parent} if isinstance(parent, str) else parent
                for parent in parents
            ]

        files = data.get("files")
        if isinstance(files, list):
            data["files"] = [
                {"filename": f} if isinstance(f, str) else f for f in files
            ]

        return data

    @property
    def message(self) -> str:
        """The commit message."""
        return self.commit.message

    @property
    def file_count(self) -> int:
        """Number of files touched, zero when files were not fetched."""
        return len(self.files or [])


class RepositorySnapshot(BaseModel):
    """Root model for a snapshot file: one repository's branches and commits."""

    owner: str | None = None
    repo: str | None = None
    branches: list[Branch] = Field(default_factory=list)
    commits: list[Commit] = Field(default_factory=list)
    selected_branch: str | None = None

    @model_validator(mode="before")
    @classmethod
    def normalize_snapshot(cls, data: dict) -> dict:
        """Normalize branches given as plain names."""
        if not isinstance(data, dict):
            return data
        data = dict(data)

        branches = data.get("branches") or []
        if isinstance(branches, list):
            data["branches"] = [
                {"name": b} if isinstance(b, str) else b for b in branches
            ]

        if data.get("commits") is None:
            data["commits"] = []

        return data

    def get_branch(self, name: str) -> Branch | None:
        """Get a branch by name."""
        for branch in self.branches:
            if branch.name == name:
                return branch
        return None

    def get_branch_names(self) -> list[str]:
        """Get all branch names in input order."""
        return [branch.name for branch in self.branches]
