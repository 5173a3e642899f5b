"""
Contribution Analysis Service

Runs the full ranking pipeline for the CLI and the HTTP API:
validate top-N, obtain the git log, parse it, score and rank authors.
"""

import logging
import re
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ...config.settings import AnalysisSettings, ScoringConfig
from ...local_analysis.contribution_analyzer import ContributionAnalyzer
from ...local_analysis.git_repo import fetch_git_log
from ...scanner.errors import ValidationError
from ...scanner.log_parser import parse_git_log, parse_git_log_lines
from ...scanner.models import RankingResult

logger = logging.getLogger(__name__)


def validate_top_n(value: Any) -> int:
    """Accept a positive integer (or its decimal string form)."""
    if isinstance(value, bool):
        raise ValidationError(f"Top-N must be a positive integer, got {value!r}")
    if isinstance(value, str):
        token = value.strip()
        if not re.fullmatch(r"[0-9]+", token):
            raise ValidationError(f"Top-N must be a positive integer, got {value!r}")
        value = int(token)
    if not isinstance(value, int) or value <= 0:
        raise ValidationError(f"Top-N must be a positive integer, got {value!r}")
    return value


def _read_stdin() -> str:
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        return sys.stdin.read()
    return buffer.read().decode("utf-8", errors="replace")


class ContributionAnalysisService:
    """
    Service for ranking repository contributors.

    Every entry point validates ``top_n`` before doing any I/O, so a bad
    request never triggers a clone.
    """

    def __init__(
        self,
        scoring: Optional[ScoringConfig] = None,
        settings: Optional[AnalysisSettings] = None,
    ):
        self.settings = settings or AnalysisSettings.from_env()
        self._analyzer = ContributionAnalyzer(scoring or ScoringConfig.from_env())

    def rank_log_text(self, log_text: str, top_n: Any) -> RankingResult:
        limit = validate_top_n(top_n)
        raw_stats = parse_git_log(log_text)
        return self._analyzer.analyze_contributions(raw_stats, top_n=limit)

    def rank_log_file(self, path: Union[str, Path], top_n: Any) -> RankingResult:
        """Rank from a saved log export; ``-`` reads standard input."""
        limit = validate_top_n(top_n)
        if str(path) == "-":
            raw_stats = parse_git_log(_read_stdin())
        else:
            # Undecodable bytes become U+FFFD, as for logs read from git itself.
            with open(path, "r", encoding="utf-8", errors="replace", newline="\n") as handle:
                raw_stats = parse_git_log_lines(handle)
        return self._analyzer.analyze_contributions(raw_stats, top_n=limit)

    def rank_repository(
        self,
        top_n: Any,
        repo: Optional[str] = None,
        directory: Optional[str] = None,
    ) -> RankingResult:
        """
        Clone (or open) ``repo`` and rank contributors under ``directory``.

        Raises:
            ValidationError: top_n is not a positive integer
            AcquisitionError: clone or log export failed
            FormatError: the exported log contains an unparseable line
        """
        limit = validate_top_n(top_n)
        repo = repo or self.settings.default_repo_url
        directory = directory or self.settings.default_directory

        logger.info(f"Analyzing {repo} (directory: {directory})")
        log_text = fetch_git_log(repo, directory, timeout=self.settings.git_timeout_seconds)
        raw_stats = parse_git_log(log_text)
        return self._analyzer.analyze_contributions(raw_stats, top_n=limit)

    def export_data(self, result: RankingResult) -> Dict[str, Any]:
        return self._analyzer.export_to_dict(result)
