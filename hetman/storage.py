"""JSON file storage for puzzles and the run index.

Layout under the output directory::

    <output_dir>/
        index.json
        crosswords/
            1.json
            2.json
            ...

Files are written to a temporary sibling first and renamed into place, so a
crash mid-write never leaves a truncated puzzle behind and never damages a
puzzle stored by an earlier run.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from hetman.models import IndexData, PuzzleData

logger = logging.getLogger(__name__)

PUZZLE_DIR_NAME = "crosswords"
INDEX_FILE_NAME = "index.json"


def _write_atomic(path: Path, content: str) -> None:
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class PuzzleStore:
    """Reads and writes puzzle files and the index file.

    Example::

        store = PuzzleStore(Path("data"))
        if not store.exists(7):
            store.save(puzzle)
    """

    def __init__(self, output_dir: Path | str) -> None:
        self.output_dir = Path(output_dir)
        self.puzzle_dir = self.output_dir / PUZZLE_DIR_NAME
        self.index_path = self.output_dir / INDEX_FILE_NAME

    def ensure_dirs(self) -> None:
        self.puzzle_dir.mkdir(parents=True, exist_ok=True)

    def puzzle_path(self, puzzle_id: int) -> Path:
        return self.puzzle_dir / f"{puzzle_id}.json"

    def exists(self, puzzle_id: int) -> bool:
        return self.puzzle_path(puzzle_id).is_file()

    def save(self, puzzle: PuzzleData) -> Path:
        """Write a puzzle to ``crosswords/<id>.json``.

        Returns:
            Path of the written file.
        """
        self.ensure_dirs()
        path = self.puzzle_path(puzzle.id)
        _write_atomic(path, puzzle.to_json())
        logger.info(f"Saved crossword {puzzle.id} to {path}")
        return path

    def load(self, puzzle_id: int) -> PuzzleData:
        """Read a stored puzzle.

        Raises:
            FileNotFoundError: If the puzzle isn't stored.
            pydantic.ValidationError: If the file doesn't hold a valid puzzle.
        """
        return PuzzleData.from_json(self.puzzle_path(puzzle_id).read_bytes())

    def stored_ids(self) -> list[int]:
        """Identifiers of all stored puzzles, ascending."""
        if not self.puzzle_dir.is_dir():
            return []
        return sorted(
            int(path.stem)
            for path in self.puzzle_dir.glob("*.json")
            if path.stem.isdigit()
        )

    def write_index(self, index: IndexData) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        _write_atomic(self.index_path, index.model_dump_json(indent=2))
        return self.index_path

    def read_index(self) -> IndexData | None:
        if not self.index_path.is_file():
            return None
        return IndexData.model_validate_json(self.index_path.read_bytes())
