"""Mapping between remote file paths and document titles, paths and branches."""

import re
from datetime import datetime

MARKDOWN_EXTENSION = ".md"
BRANCH_PREFIX = "docs-update"
BRANCH_SLUG_MAX_LENGTH = 100
TITLE_MAX_LENGTH = 500


def is_markdown(filename: str) -> bool:
    """True for names ending in .md (any case)."""
    return filename.lower().endswith(MARKDOWN_EXTENSION)


def strip_markdown_extension(path: str) -> str:
    if is_markdown(path):
        return path[: -len(MARKDOWN_EXTENSION)]
    return path


def title_from_filename(filename: str) -> str:
    """
    Humanize a file name into a document title.

    The extension is dropped and runs of '-' or '_' become a single space:
    ``getting-started.md`` -> ``getting started``.
    """
    stem = strip_markdown_extension(filename)
    title = re.sub(r"[-_]+", " ", stem).strip()
    return (title or stem)[:TITLE_MAX_LENGTH]


def document_path_from_remote(remote_path: str) -> str:
    """``docs/intro.md`` -> ``docs/intro``."""
    return strip_markdown_extension(remote_path.strip("/"))


def remote_path_for(document_path: str, github_path: str | None = None) -> str:
    """Remote file path for a document: its linked path, else ``<path>.md``."""
    if github_path:
        return github_path
    return f"{document_path}{MARKDOWN_EXTENSION}"


def slugify(value: str) -> str:
    """Lowercase, with every run of non-alphanumerics collapsed to '-'."""
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


def branch_name(document_path: str, now: datetime) -> str:
    """
    Branch for one push of a document.

    The millisecond timestamp keeps repeated pushes of the same document from
    colliding.
    """
    slug = slugify(document_path)[:BRANCH_SLUG_MAX_LENGTH].rstrip("-") or "document"
    millis = int(now.timestamp() * 1000)
    return f"{BRANCH_PREFIX}-{slug}-{millis}"
