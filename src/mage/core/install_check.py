"""Check whether the program behind a dotfile is installed."""

import logging
import subprocess

logger = logging.getLogger(__name__)


def check_installed(cmd: str) -> bool:
    """Run ``cmd`` through ``sh -c`` and report whether it exited with status zero.

    A shell that cannot be started counts as not installed. The result is
    only used for reporting.
    """
    try:
        result = subprocess.run(["sh", "-c", cmd], capture_output=True, check=False)
    except OSError as e:
        logger.debug("Install check %r could not run: %s", cmd, e)
        return False

    logger.debug("Install check %r exited with %d", cmd, result.returncode)
    return result.returncode == 0
