# File: multilevel_parking/presentation/console.py
"""
Console shell: reads commands line by line and writes their output.
Malformed lines produce no output at all.
"""

from typing import Iterable, List, Optional, TextIO
import logging
import sys

from ..application.commands import Command, CommandParser, CommandProcessor
from ..application.parking_service import MalformedCommandError


class ConsoleShell:
    """Line-oriented front end over a CommandProcessor"""

    def __init__(
        self,
        processor: CommandProcessor,
        parser: Optional[CommandParser] = None,
        output: Optional[TextIO] = None
    ):
        self.processor = processor
        self.parser = parser or CommandParser()
        self.output = output or sys.stdout
        self.logger = logging.getLogger(self.__class__.__name__)

    def _parse(self, line: str) -> Optional[Command]:
        try:
            return self.parser.parse(line)
        except MalformedCommandError as e:
            self.logger.debug(f"Ignoring command {line!r}: {e}")
            return None

    def execute_line(self, line: str) -> List[str]:
        """
        Run one line and return the lines it renders
        Returns: [] for blank, malformed or exit input
        """
        line = line.strip()
        command = self._parse(line) if line else None
        if command is None or command.is_exit:
            return []
        return self.processor.process(command).lines

    def run(self, lines: Iterable[str]) -> int:
        """
        Process lines until the input ends or an exit command arrives
        Returns: number of non-blank lines read
        """
        processed = 0
        for raw in lines:
            line = raw.strip()
            if not line:
                continue
            processed += 1

            command = self._parse(line)
            if command is None:
                continue
            if command.is_exit:
                self.logger.info("Exit command received")
                break

            for out in self.processor.process(command).lines:
                self.output.write(out + "\n")

        self.output.flush()
        return processed
