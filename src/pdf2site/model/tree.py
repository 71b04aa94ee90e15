"""In-memory output tree produced by site generation."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import PurePosixPath

INDEX_PATH = "index.html"


@dataclass(frozen=True, slots=True)
class OutputFile:
    path: str  # relative POSIX path
    content: str


def normalize_relative_path(path: str) -> str:
    """Validate and normalize a path relative to the tree root.

    Raises:
        ValueError: If the path is empty, absolute or escapes the root
    """
    raw = (path or "").replace("\\", "/")
    pure = PurePosixPath(raw)
    if not raw or pure.is_absolute() or raw.startswith("/"):
        raise ValueError(f"Output paths must be relative, got {path!r}")
    parts = [p for p in pure.parts if p not in ("", ".")]
    if not parts:
        raise ValueError(f"Output path is empty: {path!r}")
    if ":" in parts[0]:
        raise ValueError(f"Output paths must be relative, got {path!r}")
    if ".." in parts:
        raise ValueError(f"Output path escapes the tree root: {path!r}")
    return "/".join(parts)


@dataclass
class OutputTree:
    """Ordered mapping of relative paths to file contents.

    Adding a path twice replaces the earlier content in place.
    """

    _files: dict[str, OutputFile] = field(default_factory=dict)

    def add(self, path: str, content: str) -> OutputFile:
        rel = normalize_relative_path(path)
        entry = OutputFile(path=rel, content=content)
        self._files[rel] = entry
        return entry

    def get(self, path: str) -> str | None:
        entry = self._files.get(normalize_relative_path(path))
        return entry.content if entry is not None else None

    def __getitem__(self, path: str) -> str:
        content = self.get(path)
        if content is None:
            raise KeyError(path)
        return content

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, str):
            return False
        try:
            return normalize_relative_path(path) in self._files
        except ValueError:
            return False

    def __iter__(self) -> Iterator[OutputFile]:
        return iter(self._files.values())

    def __len__(self) -> int:
        return len(self._files)

    @property
    def paths(self) -> list[str]:
        return list(self._files)

    @property
    def index_html(self) -> str:
        return self[INDEX_PATH]

    def as_dict(self) -> dict[str, str]:
        return {f.path: f.content for f in self._files.values()}


__all__ = ["INDEX_PATH", "OutputFile", "OutputTree", "normalize_relative_path"]
