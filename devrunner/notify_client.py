import logging
import requests
from typing import Optional

from devrunner.config import effective_settings as config
from devrunner.runner.errors import NotificationError
from devrunner.runner.types import SubgraphName

log = logging.getLogger(__name__)


class NotificationClient:
    """
    Sends subgraph lifecycle notices to the component that tracks the
    running subgraphs. Notices are fire-and-forget: nothing is read back
    beyond the HTTP status.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None) -> None:
        self.base_url = (base_url or config.NOTIFY_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.NOTIFY_TIMEOUT
        self.session = session or requests.Session()

    def remove_subgraph(self, name: SubgraphName) -> None:
        """
        Announces that the subgraph `name` is being removed.

        :raises NotificationError: if the notice could not be delivered.
        """
        url = f"{self.base_url}/subgraphs"
        payload = {"event": "remove_subgraph", "subgraph": name}
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise NotificationError(f"could not notify '{url}' of removal of '{name}': {e}") from e
        log.debug(f"Sent removal notice for subgraph '{name}' to {url}.")
