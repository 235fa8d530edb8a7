import sys
import shutil
import psutil
import logging
import subprocess
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)


#* --- Process Creation ---
def get_popen_kwargs() -> Dict[str, Any]:
    """
    Returns platform-specific keyword arguments for subprocess.Popen.

    On Windows the child's output would corrupt the console this tool draws
    on, so stdout/stderr are discarded and no console window is created.
    """
    if sys.platform == "win32":
        return {
            "stdout": subprocess.DEVNULL,
            "stderr": subprocess.DEVNULL,
            "creationflags": subprocess.CREATE_NO_WINDOW,
        }
    return {}


def resolve_executable(binary: str) -> bool:
    """Returns True if `binary` can be run from the host search path."""
    return shutil.which(binary) is not None


#* --- Process Table ---
class ProcessTable:
    """
    A snapshot of the host process table.

    The table is only re-read on `refresh()`, so a teardown pass looks every
    task up in the same view of the system.
    """

    def __init__(self) -> None:
        self._procs: Dict[int, psutil.Process] = {}

    def refresh(self) -> None:
        """Re-reads the process table from the OS."""
        self._procs = {proc.pid: proc for proc in psutil.process_iter()}
        log.debug(f"Process table refreshed: {len(self._procs)} processes.")

    def process(self, pid: int) -> Optional[psutil.Process]:
        """Returns the process with `pid` from the last snapshot, if present."""
        return self._procs.get(pid)

    def __len__(self) -> int:
        return len(self._procs)


def kill_process(proc: psutil.Process) -> bool:
    """
    Sends a kill signal to `proc`.

    :return: True if the signal was delivered, False otherwise.
    """
    try:
        proc.kill()
        return True
    except psutil.NoSuchProcess:
        log.debug(f"Process {proc.pid} no longer exists, nothing to kill.")
        return False
    except psutil.Error as e:
        log.debug(f"Kill request for PID {proc.pid} failed: {e}")
        return False
