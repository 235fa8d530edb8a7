import sys
import logging
from typing import Callable, Optional, Sequence, TextIO

from devrunner.runner.errors import ChooserAborted
from devrunner.runner.types import Endpoint

log = logging.getLogger(__name__)


class ConsoleChooser:
    """
    Asks the user on the console to pick one endpoint out of several.

    Pressing Enter picks the default (the first candidate). Entries that are
    not a listed number re-prompt.
    """

    def __init__(self, input_func: Callable[[str], str] = input, stream: Optional[TextIO] = None,
                 require_tty: bool = True) -> None:
        self._input = input_func
        self._stream = stream
        self._require_tty = require_tty

    def select_one(self, candidates: Sequence[Endpoint]) -> int:
        if not candidates:
            raise ChooserAborted("there are no endpoints to choose from")
        if self._require_tty and not self._stdin_is_terminal():
            raise ChooserAborted("cannot prompt for an endpoint: stdin is not a terminal")

        stream = self._stream or sys.stderr
        print("Multiple new GraphQL endpoints were found. Which one belongs to this subgraph?", file=stream)
        for index, endpoint in enumerate(candidates, start=1):
            print(f"  {index}) {endpoint}", file=stream)
        stream.flush()

        while True:
            try:
                answer = self._input(f"Select an endpoint [1-{len(candidates)}] (default 1): ").strip()
            except (EOFError, KeyboardInterrupt) as e:
                raise ChooserAborted("endpoint selection was aborted") from e
            except (OSError, ValueError) as e:
                raise ChooserAborted(f"could not read endpoint selection: {e}") from e

            if not answer:
                return 0
            if answer.isdigit() and 1 <= int(answer) <= len(candidates):
                return int(answer) - 1
            print(f"'{answer}' is not a valid choice.", file=stream)
            log.debug(f"Rejected endpoint choice: {answer!r}")

    @staticmethod
    def _stdin_is_terminal() -> bool:
        # stdin may be None (pythonw, detached) or already closed
        if sys.stdin is None:
            return False
        try:
            return sys.stdin.isatty()
        except (OSError, ValueError):
            return False
