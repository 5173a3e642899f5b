from __future__ import annotations

from typing import Optional


class ContributionError(Exception):
    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.code = code


class AcquisitionError(ContributionError):
    """Cloning the repository or exporting its log failed."""

    def __init__(self, message: str, *, stderr: Optional[str] = None) -> None:
        super().__init__(message, "acquisition_failed")
        self.stderr = stderr


class FormatError(ContributionError):
    """A log line could not be interpreted; the offending line is attached."""

    def __init__(self, message: str, code: str, *, line: str, line_number: int) -> None:
        super().__init__(f"{message} (line {line_number}: {line!r})", code)
        self.line = line
        self.line_number = line_number


class ValidationError(ContributionError):
    def __init__(self, message: str) -> None:
        super().__init__(message, "invalid_top_n")
