import time
import psutil
import logging
import requests
from typing import AbstractSet, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from devrunner.config import effective_settings as config
from devrunner.runner.types import Endpoint

log = logging.getLogger(__name__)

SocketAddress = Tuple[str, int]


#* --- Socket Enumeration ---
def _listening_from(connections: Iterable) -> Set[SocketAddress]:
    return {
        (conn.laddr.ip, conn.laddr.port)
        for conn in connections
        if conn.status == psutil.CONN_LISTEN and conn.laddr
    }


def get_listening_sockets() -> Set[SocketAddress]:
    """
    Returns the (ip, port) pairs of every TCP socket in LISTEN state.

    Some hosts refuse the system-wide query to unprivileged users; in that
    case each process is inspected on its own and the ones we may not look
    at are skipped.
    """
    try:
        return _listening_from(psutil.net_connections(kind="tcp"))
    except psutil.AccessDenied:
        log.debug("System-wide socket listing denied, falling back to per-process listing.")

    sockets: Set[SocketAddress] = set()
    for proc in psutil.process_iter():
        try:
            sockets.update(_listening_from(proc.net_connections(kind="tcp")))
        except (psutil.AccessDenied, psutil.NoSuchProcess):
            continue
    return sockets


def _prefer_ipv4_loopback(address: SocketAddress) -> Tuple[int, str]:
    ip, _ = address
    if ip in ("127.0.0.1", "0.0.0.0"):
        return 0, ip
    return (1 if ":" not in ip else 2), ip


#* --- Endpoint Scanner ---
class NetstatScanner:
    """
    Finds local endpoints by reading the host socket table, and GraphQL
    endpoints among them by sending each one a `__typename` query.

    Probing within one scan stops once `scan_budget` seconds are spent. The
    next scan starts at the port after the last one probed, so a socket that
    never answers cannot hide the ones after it.
    """

    def __init__(self, session: Optional[requests.Session] = None, probe_timeout: Optional[float] = None,
                 probe_paths: Optional[Sequence[str]] = None, scan_budget: Optional[float] = None) -> None:
        self.session = session or requests.Session()
        self.probe_timeout = probe_timeout if probe_timeout is not None else config.GRAPHQL_PROBE_TIMEOUT
        self.probe_paths = tuple(probe_paths or config.GRAPHQL_PROBE_PATHS)
        self.scan_budget = scan_budget if scan_budget is not None else config.GRAPHQL_SCAN_BUDGET
        self._next_port_index = 0

    def all_local_endpoints(self) -> Set[Endpoint]:
        return {Endpoint.from_socket(ip, port) for ip, port in get_listening_sockets()}

    def all_local_graphql_endpoints_except(self, known: AbstractSet[Endpoint]) -> List[Endpoint]:
        """
        Returns the GraphQL endpoints served on sockets not covered by `known`.

        A socket is covered when any known endpoint shares its origin, so a
        known `http://127.0.0.1:4000/graphql` also hides `http://127.0.0.1:4000/`.
        At most one endpoint is reported per port.
        """
        known_origins = {endpoint.origin() for endpoint in known}

        by_port: Dict[int, List[SocketAddress]] = {}
        for ip, port in get_listening_sockets():
            if Endpoint.from_socket(ip, port).origin() in known_origins:
                continue
            by_port.setdefault(port, []).append((ip, port))
        if not by_port:
            return []

        ports = sorted(by_port)
        start = self._next_port_index % len(ports)
        ports = ports[start:] + ports[:start]

        deadline = time.monotonic() + self.scan_budget
        found: List[Endpoint] = []
        for probed, port in enumerate(ports, start=1):
            for ip, _ in sorted(by_port[port], key=_prefer_ipv4_loopback):
                endpoint = self._find_graphql_path(ip, port, deadline)
                if endpoint is not None:
                    found.append(endpoint)
                    break
            if time.monotonic() >= deadline and probed < len(ports):
                log.debug(f"Scan budget of {self.scan_budget:g}s spent after {probed} of {len(ports)} ports.")
                self._next_port_index = start + probed
                break
        return sorted(found, key=str)

    def _find_graphql_path(self, ip: str, port: int, deadline: float) -> Optional[Endpoint]:
        for path in self.probe_paths:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return None
            endpoint = Endpoint.from_socket(ip, port, path)
            if self.is_graphql_endpoint(endpoint, timeout=min(self.probe_timeout, remaining)):
                return endpoint
        return None

    def is_graphql_endpoint(self, endpoint: Endpoint, timeout: Optional[float] = None) -> bool:
        """Returns True if `endpoint` answers a `__typename` query like a GraphQL server."""
        try:
            response = self.session.post(
                endpoint.url,
                json={"query": config.GRAPHQL_PROBE_QUERY},
                timeout=timeout if timeout is not None else self.probe_timeout,
            )
            response.raise_for_status()
            body = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            log.debug(f"{endpoint} did not answer the GraphQL probe: {e}")
            return False

        data = body.get("data") if isinstance(body, dict) else None
        return isinstance(data, dict) and "__typename" in data
