"""
errors.py
---------
Domain exceptions for the generation pipeline.

Each exception carries a stable `error_code` so the API layer and logs can
branch on the failure kind without string matching. Only
`GenerationUnavailable` and `InvalidRequest` are expected to reach the
HTTP boundary; the rest are recovered inside the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class PipelineError(Exception):
    """Base class for pipeline domain errors."""

    message: str
    error_code: str

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"


class GenerationUnavailable(PipelineError):
    """Raised once the retry policy for a generation call is exhausted."""

    def __init__(self, last_error: Optional[BaseException] = None, attempts: int = 0) -> None:
        detail = f"{type(last_error).__name__}: {last_error}" if last_error else "no response"
        super().__init__(
            message=f"Generation service unavailable after {attempts} attempt(s) ({detail})",
            error_code="generation_unavailable",
        )
        self.last_error = last_error
        self.attempts = attempts


class EmptyGeneration(PipelineError):
    def __init__(self, message: str = "No content generated by the model") -> None:
        super().__init__(message=message, error_code="empty_generation")


class ExtractionFailed(PipelineError):
    def __init__(self, message: str = "Failed to extract valid JSON from model response") -> None:
        super().__init__(message=message, error_code="extraction_failed")


class InvalidRequest(PipelineError):
    def __init__(self, message: str = "Invalid request format") -> None:
        super().__init__(message=message, error_code="invalid_request")
