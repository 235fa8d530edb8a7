"""
Ports used by the command runner.

The runner depends on these Protocols rather than on the concrete scanner,
chooser and notification client, which keeps them swappable in tests.
"""

from typing import AbstractSet, Protocol, Sequence, Set

from devrunner.runner.types import Endpoint, SubgraphName


class EndpointScanner(Protocol):
    """Enumerates locally bound endpoints."""

    def all_local_endpoints(self) -> Set[Endpoint]: ...

    def all_local_graphql_endpoints_except(self, known: AbstractSet[Endpoint]) -> Sequence[Endpoint]: ...


class Chooser(Protocol):
    """
    Picks exactly one of the candidates and returns its index.
    Raises `ChooserAborted` when no choice can be made.
    """

    def select_one(self, candidates: Sequence[Endpoint]) -> int: ...


class Notifier(Protocol):
    """Write-only channel announcing subgraph removal to another component."""

    def remove_subgraph(self, name: SubgraphName) -> None: ...
