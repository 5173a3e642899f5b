"""
Pytest configuration and fixtures
"""
from pathlib import Path
import os
import shutil
import subprocess
import sys
import pytest


# Define paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
BACKEND_ROOT = PROJECT_ROOT / "backend"

# Make ``backend.src`` importable without an editable install
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


# Path fixtures
@pytest.fixture(scope="session")
def project_root() -> Path:
    """Fixture providing path to project root"""
    return PROJECT_ROOT


@pytest.fixture(scope="session")
def fixtures_dir():
    """Path to fixtures directory with sample git log exports"""
    fixtures_path = Path(__file__).parent / "fixtures"

    if not fixtures_path.exists():
        raise FileNotFoundError(
            f"Fixtures directory not found at {fixtures_path}\n"
            "Please create the 'fixtures' folder and add test files."
        )

    return fixtures_path


@pytest.fixture(scope="session")
def sample_log_path(fixtures_dir):
    """Path to a small three-author log export"""
    return fixtures_dir / "sample_git_log.txt"


@pytest.fixture(scope="session")
def sample_log_text(sample_log_path):
    return sample_log_path.read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def _isolate_contrib_env(monkeypatch):
    """Keep a developer's .env / shell overrides out of the tests."""
    for name in (
        "CONTRIB_COMMIT_WEIGHT",
        "CONTRIB_LINES_ADDED_WEIGHT",
        "CONTRIB_LINES_DELETED_WEIGHT",
        "CONTRIB_MERGE_WINDOW_SECONDS",
        "CONTRIB_DEFAULT_REPO_URL",
        "CONTRIB_DEFAULT_DIRECTORY",
        "CONTRIB_GIT_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def run(cmd, cwd, env=None):
    subprocess.check_call(cmd, cwd=cwd, env=env, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)


def commit_as(repo_dir: Path, email: str, when: int, files: dict, message: str = "change") -> None:
    """Write ``files`` and commit them with a fixed author and timestamp."""
    for relative, content in files.items():
        target = repo_dir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    run(["git", "add", "."], repo_dir)
    date = f"{when} +0000"
    env = {
        "GIT_AUTHOR_DATE": date,
        "GIT_COMMITTER_DATE": date,
        "PATH": os.environ.get("PATH", ""),
        "HOME": str(repo_dir),
    }
    run(
        [
            "git",
            "-c", "user.name=Tester",
            "-c", f"user.email={email}",
            "-c", "commit.gpgsign=false",
            "commit", "-m", message, "-q",
        ],
        repo_dir,
        env=env,
    )
