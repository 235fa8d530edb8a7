import time
import logging
import weakref
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set

from devrunner.config import effective_settings as config
from devrunner.runner import process_utils
from devrunner.runner.background_task import BackgroundTask
from devrunner.runner.errors import ChooserAborted, DiscoveryTimeoutError, DuplicateTaskError, ExecutableNotFoundError
from devrunner.runner.ports import Chooser, EndpointScanner, Notifier
from devrunner.runner.types import CommandSpec, Endpoint, SubgraphName

log = logging.getLogger(__name__)


def handle_notification_error(name: SubgraphName, error: Exception) -> None:
    """Teardown error handler: reports a failed notice and lets teardown go on."""
    log.warning(f"Could not announce removal of subgraph '{name}': {error}")


def _kill_tasks(tasks: Dict[SubgraphName, BackgroundTask], notifier: Notifier,
                process_table: process_utils.ProcessTable) -> None:
    """
    Announces removal of every tracked subgraph and kills its process.

    Per-task failures only produce warnings. The registry is emptied at the
    end, so a second pass does nothing.
    """
    if not tasks:
        return

    log.info(f"Dropping {len(tasks)} spawned background tasks")
    process_table.refresh()
    for name, task in tasks.items():
        try:
            notifier.remove_subgraph(name)
        except Exception as e:
            handle_notification_error(name, e)

        pid = task.process_id()
        process = process_table.process(pid)
        if process is None:
            log.debug(f"Process for subgraph '{name}' (PID {pid}) already exited.")
            continue
        if not process_utils.kill_process(process):
            log.warning(f"Could not drop process with PID {pid}")

    # Non-blocking: children that already exited are reaped, others are left alone.
    for task in tasks.values():
        task.poll()
    tasks.clear()
    log.info("Done dropping tasks")


class CommandRunner:
    """
    Launches and tracks one background process per subgraph.

    Use it as a context manager so every tracked process is killed on exit.
    A runner that is garbage collected, or still alive at interpreter exit,
    tears down its tasks as well.
    """

    def __init__(self, notifier: Notifier, chooser: Optional[Chooser] = None,
                 resolve_executable: Callable[[str], bool] = process_utils.resolve_executable,
                 process_table: Optional[process_utils.ProcessTable] = None,
                 discovery_timeout: Optional[float] = None, poll_interval: Optional[float] = None) -> None:
        if chooser is None:
            from devrunner.discovery.chooser import ConsoleChooser
            chooser = ConsoleChooser()

        self.notifier = notifier
        self.chooser = chooser
        self.resolve_executable = resolve_executable
        self.process_table = process_table or process_utils.ProcessTable()
        self.discovery_timeout = discovery_timeout if discovery_timeout is not None else config.DISCOVERY_TIMEOUT_SECONDS
        self.poll_interval = poll_interval if poll_interval is not None else config.DISCOVERY_POLL_INTERVAL
        self.tasks: Dict[SubgraphName, BackgroundTask] = {}

        # The finalizer must not reference self, or the runner would never be collected.
        self._finalizer = weakref.finalize(self, _kill_tasks, self.tasks, self.notifier, self.process_table)

    def __enter__(self) -> "CommandRunner":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.kill_tasks()

    def __contains__(self, name: object) -> bool:
        return name in self.tasks

    def __len__(self) -> int:
        return len(self.tasks)

    def spawn(self, name: SubgraphName, command_line: str) -> None:
        """
        Launches `command_line` in the background under `name`.

        :raises DuplicateTaskError: if `name` already has a process.
        :raises EmptyCommandError: if the command line is blank.
        :raises ExecutableNotFoundError: if the executable is not on the search path.
        :raises SpawnFailureError: if the OS cannot start the process.
        """
        if name in self.tasks:
            raise DuplicateTaskError(name)

        command_spec = CommandSpec.parse(command_line)
        if not self.resolve_executable(command_spec.executable):
            raise ExecutableNotFoundError(command_spec.executable)

        log.info(f"Starting `{command_line.strip()}`")
        task = BackgroundTask.create(command_spec)
        self.tasks[name] = task
        log.info(f"Subgraph '{name}' started with PID: {task.process_id()}")

    def spawn_and_discover_endpoint(self, name: SubgraphName, command_line: str, endpoint_scanner: EndpointScanner,
                                    known_endpoints: Iterable[Endpoint] = ()) -> Endpoint:
        """
        Launches `command_line` under `name` and returns the GraphQL endpoint
        the new process starts serving.

        Endpoints bound before the launch, plus `known_endpoints` claimed by
        other subgraphs, are never taken for the new one. If several new
        endpoints show up the chooser decides; if it cannot, scanning goes on.

        :raises DiscoveryTimeoutError: if nothing is resolved before the
            deadline. The spawned task stays registered.
        """
        baseline: Set[Endpoint] = set(endpoint_scanner.all_local_endpoints())
        baseline.update(known_endpoints)

        self.spawn(name, command_line)

        started = time.monotonic()
        while True:
            candidates = list(endpoint_scanner.all_local_graphql_endpoints_except(baseline))
            endpoint = self._pick_endpoint(candidates)
            if endpoint is not None:
                log.info(f"Found GraphQL endpoint {endpoint} for subgraph '{name}'")
                return endpoint

            remaining = self.discovery_timeout - (time.monotonic() - started)
            if remaining <= 0:
                break
            time.sleep(min(self.poll_interval, remaining))

        log.error(f"No GraphQL endpoint for subgraph '{name}' after {self.discovery_timeout:g} seconds")
        raise DiscoveryTimeoutError(name, self.discovery_timeout)

    def _pick_endpoint(self, candidates: Sequence[Endpoint]) -> Optional[Endpoint]:
        if not candidates:
            return None
        if len(candidates) == 1:
            return candidates[0]

        log.debug(f"{len(candidates)} candidate endpoints: {', '.join(map(str, candidates))}")
        try:
            index = self.chooser.select_one(candidates)
        except ChooserAborted as e:
            log.debug(f"Endpoint selection aborted: {e}")
            return None
        except Exception as e:
            log.debug(f"Endpoint selection failed: {e!r}")
            return None
        if not 0 <= index < len(candidates):
            log.debug(f"Chooser returned out-of-range index {index}")
            return None
        return candidates[index]

    def task_names(self) -> List[SubgraphName]:
        return list(self.tasks)

    def kill_tasks(self) -> None:
        """
        Kills every tracked process without waiting for it to exit.
        Calling it again, or on a runner with no tasks, does nothing.
        """
        _kill_tasks(self.tasks, self.notifier, self.process_table)
