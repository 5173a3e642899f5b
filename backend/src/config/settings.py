import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_REPO_URL = "https://github.com/47Cid/chain-maker.git"
DEFAULT_DIRECTORY = "."
DEFAULT_GIT_TIMEOUT_SECONDS = 600.0

DEFAULT_COMMIT_WEIGHT = 0.5
DEFAULT_LINES_ADDED_WEIGHT = 0.3
DEFAULT_LINES_DELETED_WEIGHT = 0.2
DEFAULT_MERGE_WINDOW_SECONDS = 30 * 60


def _read_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {raw!r}")
    return value


def _read_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class ScoringConfig:
    """
    Policy constants for the impact score.

    score = commit_weight * scaled_commits
          + lines_added_weight * lines_added
          + lines_deleted_weight * lines_deleted

    Commits closer together than ``merge_window_seconds`` to the last
    counted commit collapse into one event.
    """

    commit_weight: float = DEFAULT_COMMIT_WEIGHT
    lines_added_weight: float = DEFAULT_LINES_ADDED_WEIGHT
    lines_deleted_weight: float = DEFAULT_LINES_DELETED_WEIGHT
    merge_window_seconds: int = DEFAULT_MERGE_WINDOW_SECONDS

    def __post_init__(self) -> None:
        if self.merge_window_seconds < 0:
            raise ValueError("merge_window_seconds must be >= 0")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ScoringConfig":
        env = os.environ if env is None else env
        return cls(
            commit_weight=_read_float(env, "CONTRIB_COMMIT_WEIGHT", DEFAULT_COMMIT_WEIGHT),
            lines_added_weight=_read_float(env, "CONTRIB_LINES_ADDED_WEIGHT", DEFAULT_LINES_ADDED_WEIGHT),
            lines_deleted_weight=_read_float(env, "CONTRIB_LINES_DELETED_WEIGHT", DEFAULT_LINES_DELETED_WEIGHT),
            merge_window_seconds=_read_int(env, "CONTRIB_MERGE_WINDOW_SECONDS", DEFAULT_MERGE_WINDOW_SECONDS),
        )


@dataclass(frozen=True)
class AnalysisSettings:
    """Where to read history from and how long git may take."""

    default_repo_url: str = DEFAULT_REPO_URL
    default_directory: str = DEFAULT_DIRECTORY
    git_timeout_seconds: float = DEFAULT_GIT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AnalysisSettings":
        env = os.environ if env is None else env
        timeout = _read_float(env, "CONTRIB_GIT_TIMEOUT_SECONDS", DEFAULT_GIT_TIMEOUT_SECONDS)
        if timeout <= 0:
            raise ValueError("CONTRIB_GIT_TIMEOUT_SECONDS must be positive")
        return cls(
            default_repo_url=env.get("CONTRIB_DEFAULT_REPO_URL") or DEFAULT_REPO_URL,
            default_directory=env.get("CONTRIB_DEFAULT_DIRECTORY") or DEFAULT_DIRECTORY,
            git_timeout_seconds=timeout,
        )
