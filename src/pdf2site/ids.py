from __future__ import annotations

import hashlib
import re


def compute_site_id(title: str, job_id: str | None = None) -> str:
    """Compute a deterministic 16-hex site id.

    site_id = sha1(<job-id>|<title>)[:16]
    If job_id is None, omit the leading job id and separator.
    """

    parts = [title] if job_id is None else [job_id, title]
    seed = "|".join(parts)
    digest = hashlib.sha1(seed.encode("utf-8")).hexdigest()
    return digest[:16]


def slugify(text: str, *, max_length: int | None = None) -> str:
    s = re.sub(r"[^A-Za-z0-9]+", "-", (text or "").lower()).strip("-")
    s = re.sub(r"-+", "-", s)
    if max_length is not None:
        s = s[:max_length].strip("-")
    return s
