"""git subprocess helpers."""

import logging
import subprocess

log = logging.getLogger(__name__)


class GitError(RuntimeError):
    pass


def checkout_new_branch(branch: str, executable: str = "git") -> None:
    """Create and switch to branch.

    Blocks until git exits. stdin/stdout/stderr are inherited so git's own
    messages (e.g. "already exists") reach the terminal.
    """
    cmd = [executable, "checkout", "-b", branch]
    log.debug("Running %s", cmd)
    try:
        subprocess.run(cmd, check=True)
    except FileNotFoundError as exc:
        raise GitError(f"{executable} not found on PATH") from exc
    except subprocess.CalledProcessError as exc:
        raise GitError(f"Command failed: {' '.join(cmd)} (exit status {exc.returncode})") from exc
    except OSError as exc:
        raise GitError(f"Could not run {executable}: {exc}") from exc
