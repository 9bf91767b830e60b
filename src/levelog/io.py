"""
I/O redirection utilities.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from .writer import SeverityWriter


class LineStream:
    """File-like adapter turning written text into log lines.

    Partial text is buffered until a newline arrives; blank lines are dropped.
    Works as a target for ``contextlib.redirect_stdout``.
    """

    def __init__(self, writer: SeverityWriter, original_stream: TextIO | None = None):
        self.writer = writer
        self.linebuf = ""
        if original_stream is None:
            original_stream = sys.stdout
        # Console sinks write here instead of back into a redirected stream.
        while isinstance(original_stream, LineStream):
            original_stream = original_stream.original_stream
        self.original_stream = original_stream

    def write(self, buf: str | bytes) -> int:
        if isinstance(buf, bytes):
            buf = buf.decode(self.encoding, errors="replace")

        self.linebuf += buf
        *lines, self.linebuf = self.linebuf.split("\n")
        for line in lines:
            line = line.rstrip("\r")
            if line:
                # output <- write <- the code that wrote to the stream
                self.writer.output(2, line)
        return len(buf)

    def flush(self) -> None:
        if self.linebuf:
            self.writer.output(2, self.linebuf)
            self.linebuf = ""

    def isatty(self) -> bool:
        return False

    def writable(self) -> bool:
        return True

    @property
    def encoding(self) -> str:
        return "utf-8"
