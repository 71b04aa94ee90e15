"""Exceptions raised at the job/export boundary.

Rendering itself never raises for malformed-but-well-typed input; it falls
back to defaults and placeholders instead. These errors cover requests made
before the job is in a state that can satisfy them.
"""

from __future__ import annotations


class Pdf2SiteError(Exception):
    """Base class for rejected operations."""


class JobNotFoundError(Pdf2SiteError):
    def __init__(self, job_id: str) -> None:
        super().__init__(f"Job not found: {job_id}")
        self.job_id = job_id


class JobNotReadyError(Pdf2SiteError):
    def __init__(self, job_id: str, status: str) -> None:
        super().__init__(f"Job {job_id} not ready (status: {status})")
        self.job_id = job_id
        self.status = status


class OutputNotGeneratedError(Pdf2SiteError):
    def __init__(self, site_dir: object) -> None:
        super().__init__(f"Template not generated yet in {site_dir}. Generate template first.")
        self.site_dir = site_dir


__all__ = [
    "JobNotFoundError",
    "JobNotReadyError",
    "OutputNotGeneratedError",
    "Pdf2SiteError",
]
