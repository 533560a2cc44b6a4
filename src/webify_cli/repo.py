"""Repository acquisition: resolve a target and clone it with the gh CLI."""

from __future__ import annotations

import re
import subprocess
from pathlib import Path

from .errors import CloneError
from .logs import get_logger

logger = get_logger("repo")

CLONE_TIMEOUT = 300

_GITHUB_URL = re.compile(r"(?:https?://)?github\.com/([^/]+)/([^/\s#?]+)")


def _strip_git_suffix(repo: str) -> str:
    return repo[: -len(".git")] if repo.endswith(".git") else repo


def parse_repository(target: str) -> tuple[str, str]:
    """Normalize a target to ``(gh_spec, repo_name)``.

    Accepts ``owner/repo``, ``repo`` (resolved by gh against the
    authenticated user) and GitHub URLs.
    """
    match = _GITHUB_URL.match(target)
    if match:
        owner, repo = match.group(1), _strip_git_suffix(match.group(2))
        return f"{owner}/{repo}", repo

    target = target.strip().rstrip("/")
    if not target or target.count("/") > 1:
        raise CloneError(f"Invalid repository: {target!r}")
    repo = _strip_git_suffix(target.split("/")[-1])
    return target, repo


def clone_repository(repository: str, dest: Path) -> Path:
    """Clone with ``gh repo clone``. A no-op when ``dest`` already exists."""
    if dest.exists():
        logger.debug("Reusing existing working copy at %s", dest)
        return dest

    dest.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Cloning %s", repository)
    try:
        result = subprocess.run(
            ["gh", "repo", "clone", repository, str(dest)],
            capture_output=True,
            text=True,
            timeout=CLONE_TIMEOUT,
        )
    except FileNotFoundError as e:
        raise CloneError("GitHub CLI (gh) is not installed. Install: https://cli.github.com") from e
    except subprocess.TimeoutExpired as e:
        raise CloneError(f"Cloning {repository} timed out after {CLONE_TIMEOUT}s") from e

    if result.returncode != 0:
        raise CloneError(f"gh repo clone failed: {result.stderr[:200]}")
    return dest


def resolve_repository(target: str, workdir: str | Path) -> tuple[str, Path]:
    """Resolve a target to ``(name, local_path)``, cloning into ``workdir`` if needed.

    An existing local directory is used in place.
    """
    local = Path(target)
    if local.is_dir():
        local = local.resolve()
        return local.name, local

    spec, name = parse_repository(target)
    path = clone_repository(spec, Path(workdir).resolve() / name)
    return name, path
