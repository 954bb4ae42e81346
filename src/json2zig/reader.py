import io
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, BinaryIO, Generator, List, Optional, Sequence

import ijson

from .errors import MalformedJsonError

logger = logging.getLogger(__name__)

STDIN_NAME = "<stdin>"


class JsonSource:
    """
    Reads JSON documents from files, or from stdin when no file is given.
    Uses ijson so that record arrays can be streamed instead of loaded whole.
    """

    def __init__(self, file_paths: Optional[str | Path | Sequence[str | Path]] = None, stdin: Optional[BinaryIO] = None):
        if isinstance(file_paths, (str, Path)):
            file_paths = [file_paths]

        self.file_paths: List[Path] = [Path(p) for p in (file_paths or [])]
        for p in self.file_paths:
            if not p.exists():
                raise FileNotFoundError(f"File not found: {p}")

        self._stdin = stdin

    def describe(self) -> List[str]:
        if not self.file_paths:
            return [STDIN_NAME]
        return [str(p) for p in self.file_paths]

    @contextmanager
    def _open_all(self) -> Generator[List[tuple], None, None]:
        if not self.file_paths:
            stream = self._stdin if self._stdin is not None else sys.stdin.buffer
            yield [(STDIN_NAME, stream)]
            return

        handles = []
        try:
            for path in self.file_paths:
                handles.append((str(path), open(path, "rb")))
            yield handles
        finally:
            for _, f in handles:
                f.close()

    def documents(self) -> Generator[Any, None, None]:
        """Yields the root value of every source, one document per source."""
        with self._open_all() as handles:
            for name, f in handles:
                logger.debug("Reading document from %s", name)
                yield read_document(f, name)

    def items(self) -> Generator[Any, None, None]:
        """Yields the elements of every source's top-level array."""
        with self._open_all() as handles:
            for name, f in handles:
                logger.debug("Streaming array items from %s", name)
                try:
                    # Integers come back as int and other numbers as Decimal
                    yield from ijson.items(f, "item")
                except ijson.JSONError as e:
                    raise MalformedJsonError(name, str(e)) from e


def read_document(f: BinaryIO, name: str = STDIN_NAME) -> Any:
    """
    Parses exactly one JSON document from a binary stream.
    Empty input and trailing content are rejected.
    """
    values = ijson.items(f, "")
    try:
        root = next(values)
    except StopIteration:
        raise MalformedJsonError(name, "empty document") from None
    except ijson.JSONError as e:
        raise MalformedJsonError(name, str(e)) from e

    try:
        next(values)
    except StopIteration:
        return root
    except ijson.JSONError as e:
        raise MalformedJsonError(name, str(e)) from e
    raise MalformedJsonError(name, "trailing content after document")


def loads(data: bytes | str, name: str = "<string>") -> Any:
    """Parses a JSON document held in memory."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return read_document(io.BytesIO(data), name)
