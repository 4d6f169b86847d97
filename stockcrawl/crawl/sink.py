"""Result sink: persists the stock links of one page as one file."""

from __future__ import annotations

import os
import tempfile
import uuid
from pathlib import Path
from typing import Callable, Sequence

TokenFactory = Callable[[], str]


def new_token() -> str:
    """Return a fresh random token for file and directory names."""
    return str(uuid.uuid4())


class ResultSink:
    """Writes each result batch to its own uniquely named text file.

    Batches never share a file, so concurrent workers can persist without
    locking; creating the drop location is the only shared step and is
    idempotent.
    """

    def __init__(self, token_factory: TokenFactory = new_token, suffix: str = ".txt") -> None:
        self._token_factory = token_factory
        self._suffix = suffix

    def persist(self, drop_location: Path, batch: Sequence[str]) -> Path:
        """Write *batch* one line per entry below *drop_location*.

        The file is written to a temporary name first and moved into place,
        so a reader never sees a partial batch.

        Returns:
            The path of the created file.

        Raises:
            OSError: If the directory or the file cannot be written.
        """
        drop_location = Path(drop_location)
        drop_location.mkdir(parents=True, exist_ok=True)
        path = drop_location / f"{self._token_factory()}{self._suffix}"
        data = "".join(f"{line}\n" for line in batch)

        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=str(drop_location),
            prefix=".",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            try:
                tmp.write(data)
            except OSError:
                tmp.close()
                Path(tmp_name).unlink(missing_ok=True)
                raise

        try:
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return path
