# Copyright 2023 Google LLC. This software is provided as-is, without warranty
# or representation for any use or purpose. Your use of it is subject to your
# agreement with Google.
"""Errors raised by the risk analysis flows."""


class RiskAnalysisError(Exception):
    """Base class for errors raised locally by this package."""


class InvalidArgumentError(RiskAnalysisError, ValueError):
    """The job could not be built from the given arguments."""


class WaitTimeoutError(RiskAnalysisError, TimeoutError):
    """No matching notification arrived before the deadline."""

    def __init__(self, job_name: str, timeout: float):
        super().__init__(
            f"No notification for job {job_name} after {timeout} seconds.")
        self.job_name = job_name
        self.timeout = timeout


class WaitCancelledError(RiskAnalysisError):
    """The wait was cancelled before a matching notification arrived."""

    def __init__(self, job_name: str):
        super().__init__(f"Wait for job {job_name} was cancelled.")
        self.job_name = job_name
