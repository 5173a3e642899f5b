from __future__ import annotations
import logging
import tempfile
from pathlib import Path
from subprocess import CalledProcessError, TimeoutExpired, run
from typing import List, Optional

from ..config.settings import DEFAULT_DIRECTORY, DEFAULT_GIT_TIMEOUT_SECONDS
from ..scanner.errors import AcquisitionError

logger = logging.getLogger(__name__)

# One header per commit (author email + unix time), followed by numstat lines.
LOG_FORMAT = "--pretty=format:%ae %at"


def _git(args: List[str], cwd: Optional[str] = None, timeout: Optional[float] = None) -> str:
    try:
        completed = run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=True,
        )
    except FileNotFoundError as exc:
        raise AcquisitionError("git executable not found on PATH") from exc
    except TimeoutExpired as exc:
        raise AcquisitionError(f"git {args[0]} timed out after {timeout}s") from exc
    except CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        message = f"git {args[0]} exited with code {exc.returncode}"
        if stderr:
            message = f"{message}: {stderr}"
        raise AcquisitionError(message, stderr=stderr) from exc
    return completed.stdout


def is_git_repo(repo_dir: str) -> bool:
    if not Path(repo_dir).is_dir():
        return False
    try:
        out = _git(["rev-parse", "--is-inside-work-tree"], cwd=repo_dir)
    except AcquisitionError:
        return False
    return out.strip().lower() == "true"


def clone_repository(repo_url: str, destination: str, timeout: Optional[float] = DEFAULT_GIT_TIMEOUT_SECONDS) -> None:
    logger.info(f"Cloning {repo_url} into {destination}")
    _git(["clone", "--quiet", "--", repo_url, destination], timeout=timeout)


def export_git_log(
    repo_dir: str,
    directory: str = DEFAULT_DIRECTORY,
    timeout: Optional[float] = DEFAULT_GIT_TIMEOUT_SECONDS,
) -> str:
    """
    Export non-merge commit history for ``directory`` with per-file numstats.

    Raises:
        AcquisitionError: git is missing, exits non-zero or times out
    """
    return _git(
        ["log", LOG_FORMAT, "--numstat", "--no-merges", "--", directory],
        cwd=repo_dir,
        timeout=timeout,
    )


def fetch_git_log(
    repo: str,
    directory: str = DEFAULT_DIRECTORY,
    timeout: Optional[float] = DEFAULT_GIT_TIMEOUT_SECONDS,
) -> str:
    """
    Return the log export for ``repo``.

    A local work tree is read in place; anything else is treated as a
    remote URL and cloned into a temporary directory that is removed
    afterwards, whether or not the export succeeds.
    """
    if is_git_repo(repo):
        logger.info(f"Reading history from local repository {repo}")
        return export_git_log(repo, directory, timeout=timeout)

    with tempfile.TemporaryDirectory(prefix="contrib-rank-") as workdir:
        clone_dir = str(Path(workdir) / "repo")
        clone_repository(repo, clone_dir, timeout=timeout)
        return export_git_log(clone_dir, directory, timeout=timeout)
