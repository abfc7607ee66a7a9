"""Template management for newsletter and transactional email rendering."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, List

import structlog
from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

logger = structlog.get_logger(__name__)

TEMPLATE_SUBDIR = "email_templates"
JOB_CARD_TEMPLATE = "job_card.html"
WELCOME_TEMPLATE = "welcome.html"


def _unique_existing_paths(paths: Iterable[Path]) -> List[Path]:
    """Return a list of unique paths that exist on disk."""

    seen: set[Path] = set()
    existing_paths: List[Path] = []

    for path in paths:
        try:
            resolved = path.resolve()
        except OSError:
            resolved = path

        if resolved in seen:
            continue

        if resolved.exists():
            existing_paths.append(resolved)
            seen.add(resolved)

    return existing_paths


def _discover_template_directories() -> List[Path]:
    """Return candidate directories where email templates may live."""

    package_root = Path(__file__).resolve().parents[1]
    candidates = []

    # Highest priority: explicit environment override
    env_dir = os.getenv("EMAIL_TEMPLATES_DIR")
    if env_dir:
        candidates.append(Path(env_dir).expanduser())

    # Package data shipped alongside the sixfigjob package
    candidates.append(package_root / TEMPLATE_SUBDIR)

    resolved = _unique_existing_paths(candidates)

    if not resolved:
        logger.error(
            "template_dirs_missing",
            candidates=[str(candidate) for candidate in candidates],
            cwd=str(Path.cwd()),
        )

    return resolved


@lru_cache(maxsize=1)
def get_template_directories() -> List[Path]:
    """Discover and cache directories that contain email templates."""

    directories = _discover_template_directories()

    if not directories:
        raise FileNotFoundError("No email template directories found")

    logger.info(
        "template_dirs_resolved",
        paths=[str(directory) for directory in directories],
    )

    return directories


@lru_cache(maxsize=1)
def get_template_environment() -> Environment:
    """Create (or retrieve cached) Jinja2 environment."""

    directories = get_template_directories()
    loader = FileSystemLoader([str(path) for path in directories])
    return Environment(loader=loader, autoescape=select_autoescape(["html", "xml"]))


def render_template(name: str, **context: Any) -> str:
    """Render a named template, logging the search path when it is missing."""

    environment = get_template_environment()
    try:
        template = environment.get_template(name)
    except TemplateNotFound:
        logger.error(
            "template_not_found",
            requested=name,
            search_paths=[str(path) for path in get_template_directories()],
        )
        raise

    return template.render(**context)
