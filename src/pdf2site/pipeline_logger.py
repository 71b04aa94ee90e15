"""Centralized decision logging for the site generation pipeline.

Generation favours graceful degradation over failure: unknown template names,
missing fragments and out-of-range hotspots all resolve to a fallback. These
helpers make every such decision visible in the logs without surfacing it to
the caller as an error.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing only
    from pdf2site.model.job import TemplateJob

logger = logging.getLogger(__name__)


def log_job_configuration(job: TemplateJob, page_count: int) -> None:
    """Log the resolved job configuration for debugging.

    Args:
        job: Job about to be rendered
        page_count: Effective page count after fallbacks
    """
    logger.info("Template job configuration:")
    logger.info("  Template: %s", job.template.value)
    logger.info("  Title: %r", job.title)
    logger.info("  Pages: %d (%d fragments supplied)", page_count, len(job.pages))
    logger.info("  Hotspots: %d", len(job.hotspots))
    if job.lead_gate.enabled:
        logger.info("  Lead gate: enabled, %d free pages", job.lead_gate.free_pages)
    else:
        logger.info("  Lead gate: disabled")
    logger.info("  Custom CSS: %s", "yes" if job.custom_css else "no")


def log_feature_decision(
    feature: str, decision: str, context: dict[str, Any] | None = None
) -> None:
    """Log a feature processing decision.

    Args:
        feature: Name of the feature making the decision
        decision: The decision made (e.g., "enabled", "disabled")
        context: Optional context information
    """
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        logger.info("%s: %s (%s)", feature, decision, context_str)
    else:
        logger.info("%s: %s", feature, decision)


def log_fallback(feature: str, defect: str, action: str, details: str | None = None) -> None:
    """Log a configuration or partial-data defect and the fallback applied.

    Args:
        feature: Component that met the defect (e.g., "Hotspots", "Template")
        defect: Kind of defect (e.g., "page_out_of_range", "unknown_template")
        action: Fallback taken (e.g., "skip", "placeholder", "default")
        details: Optional additional details
    """
    if details:
        logger.warning("%s fallback: %s -> %s (%s)", feature, defect, action, details)
    else:
        logger.warning("%s fallback: %s -> %s", feature, defect, action)


__all__ = [
    "log_fallback",
    "log_feature_decision",
    "log_job_configuration",
]
