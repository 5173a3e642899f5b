import pytest

from backend.src.config.settings import (
    DEFAULT_REPO_URL,
    AnalysisSettings,
    ScoringConfig,
)


def test_scoring_defaults():
    config = ScoringConfig.from_env({})
    assert (config.commit_weight, config.lines_added_weight, config.lines_deleted_weight) == (0.5, 0.3, 0.2)
    assert config.merge_window_seconds == 1800


def test_scoring_overrides():
    config = ScoringConfig.from_env(
        {
            "CONTRIB_COMMIT_WEIGHT": "2",
            "CONTRIB_LINES_ADDED_WEIGHT": "0.25",
            "CONTRIB_LINES_DELETED_WEIGHT": " ",
            "CONTRIB_MERGE_WINDOW_SECONDS": "60",
        }
    )
    assert config.commit_weight == 2.0
    assert config.lines_added_weight == 0.25
    # blank falls back to the default
    assert config.lines_deleted_weight == 0.2
    assert config.merge_window_seconds == 60


@pytest.mark.parametrize(
    "env, name",
    [
        ({"CONTRIB_COMMIT_WEIGHT": "heavy"}, "CONTRIB_COMMIT_WEIGHT"),
        ({"CONTRIB_LINES_ADDED_WEIGHT": "nan"}, "CONTRIB_LINES_ADDED_WEIGHT"),
        ({"CONTRIB_MERGE_WINDOW_SECONDS": "1.5"}, "CONTRIB_MERGE_WINDOW_SECONDS"),
    ],
)
def test_scoring_invalid_values(env, name):
    with pytest.raises(ValueError, match=name):
        ScoringConfig.from_env(env)


def test_negative_window_rejected():
    with pytest.raises(ValueError):
        ScoringConfig(merge_window_seconds=-1)


def test_scoring_reads_process_environment(monkeypatch):
    monkeypatch.setenv("CONTRIB_MERGE_WINDOW_SECONDS", "0")
    assert ScoringConfig.from_env().merge_window_seconds == 0


def test_analysis_settings_defaults():
    settings = AnalysisSettings.from_env({})
    assert settings.default_repo_url == DEFAULT_REPO_URL
    assert settings.default_directory == "."
    assert settings.git_timeout_seconds == 600.0


def test_analysis_settings_overrides():
    settings = AnalysisSettings.from_env(
        {
            "CONTRIB_DEFAULT_REPO_URL": "https://example.com/r.git",
            "CONTRIB_DEFAULT_DIRECTORY": "pkg",
            "CONTRIB_GIT_TIMEOUT_SECONDS": "12.5",
        }
    )
    assert settings.default_repo_url == "https://example.com/r.git"
    assert settings.default_directory == "pkg"
    assert settings.git_timeout_seconds == 12.5


@pytest.mark.parametrize("raw", ["0", "-4"])
def test_analysis_settings_rejects_non_positive_timeout(raw):
    with pytest.raises(ValueError, match="CONTRIB_GIT_TIMEOUT_SECONDS"):
        AnalysisSettings.from_env({"CONTRIB_GIT_TIMEOUT_SECONDS": raw})
