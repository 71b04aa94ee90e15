"""Flat JSON job registry.

One ``jobs.json`` file per work directory records each conversion job's
title, status, page count and chosen template. Writes replace the whole file
atomically; a missing or unreadable file loads as an empty registry.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any

from pdf2site.errors import JobNotFoundError, JobNotReadyError
from pdf2site.io_utils import atomic_write_text

logger = logging.getLogger(__name__)

JOBS_FILENAME = "jobs.json"
STATUS_PENDING = "pending"
STATUS_COMPLETED = "completed"

_JOB_ID_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


@dataclass(frozen=True, slots=True)
class JobRecord:
    id: str
    title: str = ""
    status: str = STATUS_PENDING
    page_count: int | None = None
    template: str | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JobRecord:
        page_count = data.get("page_count", data.get("pageCount"))
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            status=str(data.get("status") or STATUS_PENDING),
            page_count=int(page_count) if isinstance(page_count, int) else None,
            template=data.get("template"),
        )


class JobStore:
    def __init__(self, work_dir: Path) -> None:
        self.work_dir = work_dir
        self.path = work_dir / JOBS_FILENAME

    def site_dir(self, job_id: str) -> Path:
        if not _JOB_ID_RE.match(job_id or ""):
            raise ValueError(f"Invalid job id: {job_id!r}")
        return self.work_dir / job_id

    def _load(self) -> dict[str, JobRecord]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            rows = data.get("jobs", []) if isinstance(data, dict) else []
            records = [JobRecord.from_dict(r) for r in rows if isinstance(r, dict) and "id" in r]
        except (OSError, ValueError) as exc:
            logger.warning("Job registry %s unreadable (%s); starting empty", self.path, exc)
            return {}
        return {r.id: r for r in records}

    def _save(self, records: dict[str, JobRecord]) -> None:
        payload = {"jobs": [asdict(r) for r in records.values()]}
        atomic_write_text(self.path, json.dumps(payload, ensure_ascii=False, indent=2) + "\n")

    def list_jobs(self) -> list[JobRecord]:
        return list(self._load().values())

    def get(self, job_id: str) -> JobRecord:
        record = self._load().get(job_id)
        if record is None:
            raise JobNotFoundError(job_id)
        return record

    def find(self, job_id: str) -> JobRecord | None:
        return self._load().get(job_id)

    def put(self, record: JobRecord) -> JobRecord:
        records = self._load()
        records[record.id] = record
        self._save(records)
        return record

    def update(self, job_id: str, **changes: Any) -> JobRecord:
        return self.put(replace(self.get(job_id), **changes))

    def mark_completed(self, job_id: str, page_count: int, title: str | None = None) -> JobRecord:
        existing = self.find(job_id) or JobRecord(id=job_id)
        updated = replace(
            existing,
            status=STATUS_COMPLETED,
            page_count=page_count,
            title=title if title is not None else existing.title,
        )
        return self.put(updated)

    def delete(self, job_id: str) -> bool:
        records = self._load()
        if records.pop(job_id, None) is None:
            return False
        self._save(records)
        return True

    def require_completed(self, job_id: str) -> JobRecord:
        """Return the job when it finished converting.

        Raises:
            JobNotFoundError: If the job is unknown
            JobNotReadyError: If conversion has not completed
        """
        record = self.get(job_id)
        if not record.is_completed:
            raise JobNotReadyError(job_id, record.status)
        return record


__all__ = [
    "JOBS_FILENAME",
    "JobRecord",
    "JobStore",
    "STATUS_COMPLETED",
    "STATUS_PENDING",
]
