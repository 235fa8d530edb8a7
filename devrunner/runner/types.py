from dataclasses import dataclass
from ipaddress import ip_address
from typing import NewType, Tuple
from urllib.parse import urlsplit

from devrunner.runner.errors import EmptyCommandError

SubgraphName = NewType("SubgraphName", str)

# Wildcard bind addresses are reachable through loopback
_WILDCARD_HOSTS = {"0.0.0.0": "127.0.0.1", "::": "::1"}


@dataclass(frozen=True)
class Endpoint:
    """A fully-qualified URL a local service answers on."""
    url: str

    def __post_init__(self) -> None:
        parts = urlsplit(self.url)
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"'{self.url}' is not a fully-qualified URL")

    @classmethod
    def from_socket(cls, host: str, port: int, path: str = "/") -> "Endpoint":
        """Builds an http endpoint for a bound socket address."""
        host = _WILDCARD_HOSTS.get(host, host)
        try:
            if ip_address(host).version == 6:
                host = f"[{host}]"
        except ValueError:
            pass  # hostname
        if not path.startswith("/"):
            path = "/" + path
        return cls(f"http://{host}:{port}{path}")

    def origin(self) -> "Endpoint":
        """Returns the `scheme://host:port/` part of this endpoint."""
        parts = urlsplit(self.url)
        return Endpoint(f"{parts.scheme}://{parts.netloc}/")

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class CommandSpec:
    """An executable and the arguments to launch it with."""
    executable: str
    args: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, command_line: str) -> "CommandSpec":
        """
        Splits a command line on whitespace.

        :raises EmptyCommandError: if the line holds no tokens.
        """
        tokens = command_line.split()
        if not tokens:
            raise EmptyCommandError()
        return cls(tokens[0], tuple(tokens[1:]))

    @property
    def argv(self) -> Tuple[str, ...]:
        return (self.executable,) + self.args
