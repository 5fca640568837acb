"""Page history backed by version control.

``GitHistoryProvider`` implements ``HistoryProvider`` with GitPython. The
registry only sees the protocol, so nothing imports git until history is
configured.
"""

import hashlib
import logging
from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

from samwiki.core.errors import HistoryError
from samwiki.core.models import HistoryEntry
from samwiki.core.provider import HistoryProvider

logger = logging.getLogger(__name__)


def email_hash(email: str) -> str:
    """MD5 hex digest of an email address, as used by avatar services."""
    return hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()


class GitHistoryProvider(HistoryProvider):
    """History provider reading the git log with GitPython."""

    def __init__(self, max_count: int | None = None):
        self.max_count = max_count

    def _open(self, directory: Path) -> Repo:
        try:
            return Repo(directory, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise HistoryError(f"error open git repo in {directory}: {e}") from e

    def history(self, path: Path) -> list[HistoryEntry]:
        path = path.resolve()
        repo = self._open(path.parent)
        try:
            if repo.working_tree_dir is None:
                raise HistoryError(f"repository for {path} has no working tree")
            relative = path.relative_to(Path(repo.working_tree_dir).resolve())
            commits = repo.iter_commits(
                paths=relative.as_posix(), max_count=self.max_count
            )
            return [
                HistoryEntry(
                    sha=c.hexsha,
                    author_name=c.author.name or "",
                    author_email=c.author.email or "",
                    email_hash=email_hash(c.author.email or ""),
                    timestamp=c.authored_datetime,
                    message=c.message.strip(),
                )
                for c in commits
            ]
        except (GitCommandError, ValueError) as e:
            raise HistoryError(f"error read git history for {path}: {e}") from e
        finally:
            repo.close()
