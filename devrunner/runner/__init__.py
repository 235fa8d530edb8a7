"""
The runner package.
Launches subgraph commands as background processes and tracks them.

`CommandRunner` keeps one `BackgroundTask` per subgraph name, can correlate
a freshly launched process with the GraphQL endpoint it binds, and kills
every tracked process on teardown.
"""
from .command_runner import CommandRunner
from .errors import (
    ChooserAborted,
    DiscoveryTimeoutError,
    DuplicateTaskError,
    EmptyCommandError,
    ErrorKind,
    ExecutableNotFoundError,
    NotificationError,
    RunnerError,
    SpawnFailureError,
)
from .types import CommandSpec, Endpoint, SubgraphName

__all__ = [
    'CommandRunner',
    'CommandSpec', 'Endpoint', 'SubgraphName',
    'ErrorKind', 'RunnerError', 'DuplicateTaskError', 'EmptyCommandError',
    'ExecutableNotFoundError', 'SpawnFailureError', 'DiscoveryTimeoutError',
    'ChooserAborted', 'NotificationError',
]
