"""Terminal primitives: ANSI styling and cancellable line input."""

import asyncio
import sys
from typing import TextIO

import structlog

logger = structlog.get_logger()

_RESET = "\033[0m"


def _style(code: str):
    def apply(text: object) -> str:
        return f"\033[{code}m{text}{_RESET}"

    return apply


bold = _style("1")
dim = _style("2")
red = _style("31")
green = _style("32")
yellow = _style("33")
blue = _style("34")
cyan = _style("36")


def clear_screen(out: TextIO | None = None) -> None:
    out = out or sys.stdout
    out.write("\033[2J\033[H")
    out.flush()


class ConsoleInput:
    """Reads lines from stdin through an asyncio stream.

    A pending ``prompt`` can be cancelled like any other coroutine, so the
    game can stop waiting for input as soon as the countdown runs out.

    Args:
        stream: Input stream (stdin by default).
        out: Output stream for the prompt text.
    """

    def __init__(self, stream: TextIO | None = None, out: TextIO | None = None):
        self._stream = stream or sys.stdin
        self._out = out or sys.stdout
        self._reader: asyncio.StreamReader | None = None

    async def _get_reader(self) -> asyncio.StreamReader:
        if self._reader is None:
            loop = asyncio.get_running_loop()
            reader = asyncio.StreamReader()
            protocol = asyncio.StreamReaderProtocol(reader)
            await loop.connect_read_pipe(lambda: protocol, self._stream)
            self._reader = reader
        return self._reader

    async def prompt(self, question: str) -> str | None:
        """Show a question and wait for one line.

        Returns:
            The stripped line, or None at end of input.
        """
        self._out.write(question)
        self._out.flush()
        reader = await self._get_reader()
        line = await reader.readline()
        if not line:
            logger.debug("console_input_eof")
            return None
        return line.decode("utf-8", errors="replace").strip()
