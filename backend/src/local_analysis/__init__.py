"""
Local Analysis Module
Contributor ranking from local or cloned git history
"""

from .git_repo import clone_repository, export_git_log, fetch_git_log, is_git_repo

from .contribution_analyzer import (
    ContributionAnalyzer,
    rank_contributors,
    rank_scores,
    scaled_commit_count,
    score_author,
    score_authors,
)

__all__ = [
    # Git acquisition
    'clone_repository',
    'export_git_log',
    'fetch_git_log',
    'is_git_repo',

    # Contribution analysis
    'ContributionAnalyzer',
    'rank_contributors',
    'rank_scores',
    'scaled_commit_count',
    'score_author',
    'score_authors',
]

__version__ = '1.0.0'
