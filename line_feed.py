import os
import select
import sys
from typing import BinaryIO, Iterator, List, Optional

from errors import SourceError
from events import MoreData
from logger import setup_logger

log = setup_logger("line_feed")

CHUNK_SIZE = 64 * 1024


def open_source(path: Optional[str]) -> BinaryIO:
    """Open ``path`` for binary reading, or take over standard input.

    Standard input is duplicated onto a private descriptor so that fd 0
    can later be pointed back at the controlling terminal for key input.
    """
    if path is None or path == "-":
        try:
            fd = os.dup(sys.stdin.fileno())
            return os.fdopen(fd, "rb")
        except (OSError, ValueError) as e:
            raise SourceError(f"cannot read standard input: {e}") from e
    if os.path.isdir(path):
        raise SourceError(f"{path}: is a directory")
    try:
        return open(path, "rb")
    except OSError as e:
        raise SourceError(f"{path}: {e.strerror or e}") from e


class LineFeed:
    """Iterates over a byte stream, yielding ``MoreData`` batches.

    A batch is emitted when it reaches ``batch_size`` lines or when the
    stream has nothing more immediately available, so a slow pipe shows
    up line by line while a large file arrives in bounded chunks.
    """

    def __init__(
        self,
        stream: BinaryIO,
        batch_size: int = 256,
        encoding: str = "utf-8",
        errors: str = "strict",
    ):
        self.stream = stream
        self.batch_size = max(1, batch_size)
        self.encoding = encoding
        self.errors = errors
        self.lines_read = 0

    def _decode(self, raw: bytes) -> str:
        try:
            text = raw.decode(self.encoding, self.errors)
        except UnicodeDecodeError as e:
            raise SourceError(
                f"line {self.lines_read + 1}: cannot decode as {self.encoding}: {e.reason}"
            ) from e
        if text.endswith("\r"):
            text = text[:-1]
        return text

    def _more_ready(self) -> bool:
        try:
            fd = self.stream.fileno()
        except (AttributeError, OSError, ValueError):
            # in-memory streams never block
            return True
        try:
            ready, _, _ = select.select([fd], [], [], 0)
        except (OSError, ValueError):
            return True
        return bool(ready)

    def _read_chunk(self) -> bytes:
        try:
            return self.stream.read1(CHUNK_SIZE)
        except OSError as e:
            raise SourceError(f"read failed after line {self.lines_read}: {e}") from e

    def __iter__(self) -> Iterator[MoreData]:
        log.info("reading source in batches of %d", self.batch_size)
        batch: List[str] = []
        pending = b""
        while True:
            chunk = self._read_chunk()
            if not chunk:
                break
            pending += chunk
            *complete, pending = pending.split(b"\n")
            for raw in complete:
                batch.append(self._decode(raw))
                self.lines_read += 1
                if len(batch) >= self.batch_size:
                    yield MoreData(batch)
                    batch = []
            if batch and not self._more_ready():
                yield MoreData(batch)
                batch = []
        # last line without a trailing newline
        if pending:
            batch.append(self._decode(pending))
            self.lines_read += 1
        if batch:
            yield MoreData(batch)
        log.info("end of input after %d lines", self.lines_read)
