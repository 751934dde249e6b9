"""JSON file storage for synchronization state."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any


class JsonFileStore:
    """Reads and atomically rewrites a single JSON document."""

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON file.
        """
        self.path = Path(path)

    def exists(self) -> bool:
        """Check whether the file has been written yet."""
        return self.path.exists()

    def load(self) -> dict[str, Any]:
        """Load the stored document.

        Returns:
            Stored mapping, or an empty dict if the file does not exist.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the file is not a JSON object.
        """
        if not self.path.exists():
            return {}
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not contain a JSON object")
        return data

    def save(self, data: dict[str, Any]) -> None:
        """Overwrite the file with data.

        The document is written to a temporary file next to the target and
        moved into place, so readers never see a partial file.

        Args:
            data: Mapping to store.

        Raises:
            OSError: If the file cannot be written.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
                f.write("\n")
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
