# Artifact sinks: where generated sources go once a pass completes.

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from disposegen.exceptions import DuplicateArtifactError

logger = logging.getLogger(__name__)


class ArtifactSink(ABC):
    """Receives (artifact key, source text) pairs."""

    @abstractmethod
    def add_source(self, key: str, text: str) -> None:
        ...


class InMemorySink(ArtifactSink):
    """Keeps artifacts in insertion order. Adding a key twice raises DuplicateArtifactError."""

    def __init__(self) -> None:
        self.artifacts: dict[str, str] = {}

    def add_source(self, key: str, text: str) -> None:
        if key in self.artifacts:
            raise DuplicateArtifactError(key)
        self.artifacts[key] = text

    def __len__(self) -> int:
        return len(self.artifacts)


class DirectorySink(ArtifactSink):
    """Writes each artifact to root/key as UTF-8, creating root if needed."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.written: list[Path] = []

    def add_source(self, key: str, text: str) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.root / key
        path.write_text(text, encoding="utf-8", newline="\n")
        self.written.append(path)
        logger.info("Wrote %s", path)
