import sys
import time
import logging
from typing import List, Optional

from devrunner.config import effective_settings as config
from devrunner.discovery import NetstatScanner
from devrunner.log import level_from_name, setup_logging
from devrunner.notify_client import NotificationClient
from devrunner.runner import CommandRunner, RunnerError, SubgraphName

log = logging.getLogger("devrunner")

USAGE = "usage: devrunner [--discover] [--verbose] <subgraph-name> <command...>"


def run(name: SubgraphName, command_line: str, discover: bool) -> int:
    """Runs one subgraph command until interrupted. Returns the exit status."""
    with CommandRunner(NotificationClient()) as runner:
        try:
            if discover:
                endpoint = runner.spawn_and_discover_endpoint(name, command_line, NetstatScanner())
                print(f"{name}: {endpoint}")
            else:
                runner.spawn(name, command_line)
        except RunnerError as e:
            log.error(f"error[{e.kind.value}]: {e.message}")
            return 1

        log.info("Press Ctrl+C to stop.")
        try:
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            log.info("Interrupted, stopping background tasks.")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """The console entry point."""
    args = list(sys.argv[1:] if argv is None else argv)

    # Flags are only read ahead of the subgraph name; the rest belongs to the command.
    discover = verbose = False
    while args and args[0] in ("--discover", "--verbose"):
        flag = args.pop(0)
        discover = discover or flag == "--discover"
        verbose = verbose or flag == "--verbose"

    setup_logging(logging.DEBUG if verbose else level_from_name(config.LOG_LEVEL))

    if len(args) < 2:
        print(USAGE, file=sys.stderr)
        return 2

    name, command_line = SubgraphName(args[0]), " ".join(args[1:])
    return run(name, command_line, discover)


if __name__ == "__main__":
    sys.exit(main())
