"""Project handle exposing per-platform base directories."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

IOS_DEFAULT_DIR = "ios"


@dataclass(slots=True)
class Project:
    """A native app project that may or may not contain an iOS platform."""

    directory: Path
    ios_path: Path | None = None

    @classmethod
    def load(cls, directory: str | Path, ios_path: str | Path | None = None) -> "Project":
        """Return a project rooted at *directory*.

        An explicit *ios_path* is resolved against *directory*; otherwise the
        conventional ``ios`` folder is used when it exists.
        """
        root = Path(directory)
        if ios_path is not None:
            resolved = Path(ios_path)
            if not resolved.is_absolute():
                resolved = root / resolved
            return cls(root, resolved)
        candidate = root / IOS_DEFAULT_DIR
        return cls(root, candidate if candidate.is_dir() else None)

    @property
    def ios_dir(self) -> Path | None:
        return self.ios_path
