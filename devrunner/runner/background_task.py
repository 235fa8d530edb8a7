import logging
import subprocess
from typing import Optional

from devrunner.runner.errors import SpawnFailureError
from devrunner.runner.process_utils import get_popen_kwargs
from devrunner.runner.types import CommandSpec

log = logging.getLogger(__name__)


class BackgroundTask:
    """
    Owns one child process launched on behalf of a subgraph.

    Termination is left to the owning `CommandRunner`, which signals every
    task through a shared process-table snapshot.
    """

    def __init__(self, child: subprocess.Popen) -> None:
        self._child = child

    @classmethod
    def create(cls, command_spec: CommandSpec) -> "BackgroundTask":
        """
        Launches the process described by `command_spec`.

        :raises SpawnFailureError: if the OS cannot create the process.
        """
        try:
            child = subprocess.Popen(
                list(command_spec.argv),
                stdin=subprocess.DEVNULL,
                **get_popen_kwargs(),
            )
        except (OSError, ValueError) as e:
            log.error(f"Failed to start `{' '.join(command_spec.argv)}`: {e}")
            raise SpawnFailureError(command_spec.argv, str(e)) from e

        log.debug(f"{command_spec.executable} started with PID: {child.pid}")
        return cls(child)

    def process_id(self) -> int:
        return self._child.pid

    def poll(self) -> Optional[int]:
        """
        Reaps the child if it has exited, without blocking.

        :return: The exit code, or None while the process is still running.
        """
        return self._child.poll()

    def __repr__(self) -> str:
        return f"BackgroundTask(pid={self.process_id()})"
