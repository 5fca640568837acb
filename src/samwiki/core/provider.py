"""Interface for page history sources."""

from pathlib import Path
from typing import Protocol

from samwiki.core.models import HistoryEntry


class HistoryProvider(Protocol):
    """Anything that can list the changes of a single file."""

    def history(self, path: Path) -> list[HistoryEntry]:
        """Return commits touching ``path``, newest first."""
        ...
