"""CLI interface for pdf2site."""

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.logging import RichHandler

from pdf2site import __version__
from pdf2site.builder.archive import archive_filename, create_archive
from pdf2site.builder.deploy import build_deploy_manifest, manifest_to_dict
from pdf2site.builder.writer import write_output_tree
from pdf2site.errors import Pdf2SiteError
from pdf2site.ids import compute_site_id
from pdf2site.ingest.page_store import load_pages, page_stylesheets, resolve_page_count
from pdf2site.ingest.rasters import import_page_images
from pdf2site.model.job import DEFAULT_FREE_PAGES, DEFAULT_TITLE, TemplateJob
from pdf2site.render.site import generate as generate_site
from pdf2site.store import JobRecord, JobStore
from pdf2site.ui.progress import ProgressReporter

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="pdf2site",
    help="Turn converted PDF pages into self-contained interactive websites.",
    no_args_is_help=True,
)

WorkDirOption = Annotated[
    Path,
    typer.Option(
        "--work-dir",
        envvar="PDF2SITE_WORK_DIR",
        help="Directory holding jobs.json and one folder per job (default: ./pdf2site-work)",
    ),
]
DEFAULT_WORK_DIR = Path("pdf2site-work")


def _fail(exc: Exception) -> typer.Exit:
    typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(1)


def _read_hotspots(path: Path | None) -> list[dict[str, Any]]:
    if path is None:
        return []
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("hotspots", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of hotspots")
    return [h for h in data if isinstance(h, dict)]


@app.command("import-pages")
def import_pages(
    job_id: Annotated[str, typer.Argument(help="Job identifier (letters, digits, '-', '_')")],
    images: Annotated[
        list[Path],
        typer.Argument(
            help="Page images in page order",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    title: Annotated[str, typer.Option("--title", help="Document title")] = DEFAULT_TITLE,
    work_dir: WorkDirOption = DEFAULT_WORK_DIR,
) -> None:
    """Import rendered page images into a job's page store."""
    store = JobStore(work_dir)
    try:
        site_dir = store.site_dir(job_id)
        store.put(JobRecord(id=job_id, title=title))
        with ProgressReporter() as pr:
            pages = import_page_images(images, site_dir, title, on_progress=pr.emit)
        store.mark_completed(job_id, len(pages), title=title)
    except (Pdf2SiteError, ValueError) as exc:
        raise _fail(exc) from exc
    typer.echo(f"✅ Imported {len(pages)} pages into {site_dir}")


@app.command()
def generate(
    job_id: Annotated[str, typer.Argument(help="Job identifier")],
    template: Annotated[
        str,
        typer.Option(
            "--template",
            help="Template variant: presentation, flipbook or documentation",
        ),
    ] = "presentation",
    title: Annotated[
        str | None, typer.Option("--title", help="Site title (default: the job's title)")
    ] = None,
    pages: Annotated[
        int | None,
        typer.Option("--pages", help="Page count (default: recorded count, then page assets)"),
    ] = None,
    hotspots: Annotated[
        Path | None,
        typer.Option(
            "--hotspots",
            help="JSON file with a list of hotspots",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    lead_gate: Annotated[
        bool,
        typer.Option("--lead-gate/--no-lead-gate", help="Lock pages behind a contact form"),
    ] = False,
    free_pages: Annotated[
        int,
        typer.Option("--free-pages", help="Pages readable before the gate (default: 3)"),
    ] = DEFAULT_FREE_PAGES,
    webhook_url: Annotated[
        str | None,
        typer.Option("--webhook-url", help="URL receiving submitted leads as JSON"),
    ] = None,
    custom_css: Annotated[
        Path | None,
        typer.Option(
            "--custom-css",
            help="Stylesheet appended after the template styles",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    seo_base_url: Annotated[
        str | None,
        typer.Option("--seo-base-url", help="Public URL of the site (enables sitemap.xml)"),
    ] = None,
    seo_description: Annotated[
        str | None,
        typer.Option("--seo-description", help="Meta description (default: extracted from text)"),
    ] = None,
    analytics_endpoint: Annotated[
        str | None,
        typer.Option("--analytics-endpoint", help="URL receiving batched viewer events"),
    ] = None,
    work_dir: WorkDirOption = DEFAULT_WORK_DIR,
) -> None:
    """Generate the interactive site for a converted job."""
    store = JobStore(work_dir)
    try:
        record = store.require_completed(job_id)
        site_dir = store.site_dir(job_id)
        page_count = resolve_page_count(pages, record.page_count, site_dir)
        site_title = title or record.title or DEFAULT_TITLE
        logger.info("Generating %s for job %s (%d pages)", template, job_id, page_count)

        request: dict[str, Any] = {
            "template": template,
            "title": site_title,
            "pageCount": page_count,
            "hotspots": _read_hotspots(hotspots),
            "leadGate": {
                "enabled": lead_gate,
                "freePages": free_pages,
                "webhookUrl": webhook_url,
            },
            "siteId": compute_site_id(site_title, job_id),
            "stylesheets": page_stylesheets(site_dir),
        }
        if custom_css is not None:
            request["customCss"] = custom_css.read_text(encoding="utf-8")
        if seo_base_url or seo_description:
            request["seo"] = {"baseUrl": seo_base_url, "description": seo_description}
        if analytics_endpoint:
            request["analytics"] = {"endpoint": analytics_endpoint}

        job = TemplateJob.from_dict(request, pages=load_pages(site_dir, page_count))
        with ProgressReporter() as pr:
            tree = generate_site(job, on_progress=pr.emit)
            write_output_tree(tree, site_dir, on_progress=pr.emit)
        store.update(job_id, template=job.template.value)
    except (Pdf2SiteError, ValueError) as exc:
        raise _fail(exc) from exc
    typer.echo(f"✅ Generated {job.template.value} site ({page_count} pages) in {site_dir}")


@app.command()
def export(
    job_id: Annotated[str, typer.Argument(help="Job identifier")],
    out: Annotated[
        Path | None,
        typer.Option("--out", help="Archive path (default: <work-dir>/<title>-<id>.zip)"),
    ] = None,
    work_dir: WorkDirOption = DEFAULT_WORK_DIR,
) -> None:
    """Package a generated site as a zip archive."""
    store = JobStore(work_dir)
    try:
        record = store.get(job_id)
        dest = out or work_dir / archive_filename(record.title, job_id)
        create_archive(store.site_dir(job_id), dest)
    except (Pdf2SiteError, ValueError) as exc:
        raise _fail(exc) from exc
    typer.echo(f"✅ Wrote {dest}")


@app.command()
def manifest(
    job_id: Annotated[str, typer.Argument(help="Job identifier")],
    work_dir: WorkDirOption = DEFAULT_WORK_DIR,
) -> None:
    """Print the deploy manifest (path, sha1, size per file) as JSON."""
    store = JobStore(work_dir)
    try:
        store.get(job_id)
        files = build_deploy_manifest(store.site_dir(job_id))
    except (Pdf2SiteError, ValueError) as exc:
        raise _fail(exc) from exc
    typer.echo(json.dumps(manifest_to_dict(files), indent=2))


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"pdf2site version {__version__}")


def version_callback(value: bool) -> None:
    """Version callback for --version flag."""
    if value:
        typer.echo(f"pdf2site version {__version__}")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=False, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
    ] = "WARNING",
) -> None:
    """
    pdf2site - Turn converted PDF pages into interactive websites.

    Features:
    - Three layouts: slideshow presentation, page-turning flipbook, scrolling documentation
    - Clickable hotspots placed over pages by percentage geometry
    - Optional lead gate locking pages after a free preview
    - SEO metadata, sitemap and viewer analytics
    - Zip export and deploy manifest of the generated site

    For detailed usage, run: pdf2site generate --help
    """
    if not isinstance(logging.getLevelName(log_level.upper()), int):
        raise typer.BadParameter(f"Unknown log level: {log_level}", param_hint="--log-level")
    configure_logging(log_level)


if __name__ == "__main__":  # pragma: no cover - executed only via `python -m`
    app()
