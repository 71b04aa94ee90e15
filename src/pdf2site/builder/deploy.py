"""Deploy manifest for hosting providers that upload files by content hash.

The manifest lists every file of a generated site with its SHA1 digest and
size; a deploy client uploads the blobs it is missing and then posts the
manifest. The client itself lives outside this package.
"""

from __future__ import annotations

import hashlib
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from pdf2site.builder.archive import iter_site_files
from pdf2site.builder.writer import is_generated
from pdf2site.errors import OutputNotGeneratedError


@dataclass(frozen=True, slots=True)
class DeployFile:
    path: str  # relative POSIX path
    sha1: str
    size: int


def file_digest(path: Path) -> str:
    digest = hashlib.sha1()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            digest.update(chunk)
    return digest.hexdigest()


def build_deploy_manifest(site_dir: Path) -> list[DeployFile]:
    """List the site's files sorted by path.

    Raises:
        OutputNotGeneratedError: If the site has not been generated
    """

    if not is_generated(site_dir):
        raise OutputNotGeneratedError(site_dir)
    return [
        DeployFile(
            path=p.relative_to(site_dir).as_posix(),
            sha1=file_digest(p),
            size=p.stat().st_size,
        )
        for p in iter_site_files(site_dir)
    ]


def manifest_to_dict(files: list[DeployFile]) -> dict[str, Any]:
    return {"files": [asdict(f) for f in files]}


__all__ = ["DeployFile", "build_deploy_manifest", "file_digest", "manifest_to_dict"]
