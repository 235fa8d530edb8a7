# tests/fakes.py

from __future__ import annotations

from typing import AbstractSet, Dict, List, Optional, Sequence, Set

import psutil

from devrunner.runner.errors import ChooserAborted, NotificationError
from devrunner.runner.types import CommandSpec, Endpoint


class FakeScanner:
    """
    Scripted endpoint scanner.

    `polls` is served one entry per call to
    `all_local_graphql_endpoints_except`; the last entry repeats forever.
    """

    def __init__(self, local: Optional[Set[Endpoint]] = None, polls: Optional[List[List[Endpoint]]] = None) -> None:
        self.local = set(local or ())
        self.polls = list(polls or [[]])
        self.known_seen: List[AbstractSet[Endpoint]] = []
        self.local_calls = 0

    def all_local_endpoints(self) -> Set[Endpoint]:
        self.local_calls += 1
        return set(self.local)

    def all_local_graphql_endpoints_except(self, known: AbstractSet[Endpoint]) -> List[Endpoint]:
        self.known_seen.append(set(known))
        result = self.polls[0] if len(self.polls) == 1 else self.polls.pop(0)
        return [endpoint for endpoint in result if endpoint not in known]


class FakeChooser:
    """Returns scripted answers; an exception instance in the script is raised instead."""

    def __init__(self, *answers) -> None:
        self.answers = list(answers)
        self.calls: List[Sequence[Endpoint]] = []

    def select_one(self, candidates: Sequence[Endpoint]) -> int:
        self.calls.append(list(candidates))
        answer = self.answers.pop(0) if len(self.answers) > 1 else self.answers[0]
        if isinstance(answer, Exception):
            raise answer
        return answer


class FakeNotifier:
    def __init__(self, fail_for: Sequence[str] = ()) -> None:
        self.fail_for = set(fail_for)
        self.removed: List[str] = []

    def remove_subgraph(self, name: str) -> None:
        self.removed.append(name)
        if name in self.fail_for:
            raise NotificationError(f"socket closed while removing {name}")


class FakeProcess:
    def __init__(self, pid: int, kill_error: Optional[Exception] = None) -> None:
        self.pid = pid
        self.kill_error = kill_error
        self.killed = False

    def kill(self) -> None:
        if self.kill_error is not None:
            raise self.kill_error
        self.killed = True


class FakeProcessTable:
    def __init__(self, processes: Sequence[FakeProcess] = ()) -> None:
        self.processes: Dict[int, FakeProcess] = {proc.pid: proc for proc in processes}
        self.refreshes = 0

    def refresh(self) -> None:
        self.refreshes += 1

    def process(self, pid: int) -> Optional[FakeProcess]:
        return self.processes.get(pid)


class FakeBackgroundTask:
    """Stands in for BackgroundTask so no real process is started."""

    next_pid = 41000
    created: List[CommandSpec] = []

    def __init__(self, pid: int) -> None:
        self._pid = pid
        self.polls = 0

    @classmethod
    def create(cls, command_spec: CommandSpec) -> "FakeBackgroundTask":
        cls.created.append(command_spec)
        cls.next_pid += 1
        return cls(cls.next_pid)

    def process_id(self) -> int:
        return self._pid

    def poll(self) -> Optional[int]:
        self.polls += 1
        return None


ACCESS_DENIED = psutil.AccessDenied(pid=0)
ABORTED = ChooserAborted("stdin is not a terminal")
