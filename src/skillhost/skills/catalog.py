"""Remote skill catalog mirroring and sync policy.

The catalog is a git repository of community skills mirrored into a local
directory. A marker file inside the mirror records the last successful
sync; the mirror is refreshed when the marker is missing or older than the
sync interval. The mirror is then scanned like any other skill directory.

Sync is not safe to run from several processes at once (no file locking).
"""

import logging
import os
import time
from datetime import datetime, timedelta
from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

from skillhost.config.constants import DEFAULT_CATALOG_DIR, DEFAULT_CATALOG_URL, ENV_CATALOG_DIR
from skillhost.skills.errors import SkillCatalogError, SkillInvalidArgumentError

logger = logging.getLogger(__name__)

CATALOG_SYNC_MARKER = ".skillhost-open-skills-sync"
CATALOG_SYNC_INTERVAL = timedelta(days=7)


def get_catalog_dir() -> Path:
    """Return the catalog mirror directory.

    ``SKILLHOST_OPEN_SKILLS_DIR`` overrides the default ``.skillhost/open-skills``.
    """
    env_dir = os.getenv(ENV_CATALOG_DIR)
    if env_dir:
        return Path(env_dir).expanduser()
    return Path(DEFAULT_CATALOG_DIR)


def _marker_path(directory: Path | str) -> Path:
    if directory is None:
        raise SkillInvalidArgumentError("Catalog directory is None")
    return Path(directory) / CATALOG_SYNC_MARKER


def should_sync(directory: Path | str, now: datetime | None = None) -> bool:
    """Check whether the catalog mirror is due for a refresh.

    Args:
        directory: Catalog mirror directory
        now: Current time (defaults to ``datetime.now()``)

    Returns:
        True if the marker is missing or unreadable, or older than the sync interval
    """
    marker = _marker_path(directory)

    try:
        last_sync = datetime.fromtimestamp(marker.stat().st_mtime)
    except OSError:
        return True

    if now is None:
        now = datetime.now()

    return now - last_sync > CATALOG_SYNC_INTERVAL


def mark_synced(directory: Path | str) -> Path:
    """Record a successful sync by (re)writing the marker file.

    Last writer wins.

    Returns:
        Path to the marker file
    """
    marker = _marker_path(directory)
    marker.parent.mkdir(parents=True, exist_ok=True)
    marker.write_text(f"Last sync: {int(time.time())}\n", encoding="utf-8")
    return marker


def is_git_repository(directory: Path | str) -> bool:
    """Check whether ``directory`` is the root of a git working tree."""
    try:
        repo = Repo(directory)
    except (InvalidGitRepositoryError, NoSuchPathError):
        return False
    repo.close()
    return True


def clone_catalog(target_dir: Path | str, repo_url: str = DEFAULT_CATALOG_URL) -> Path:
    """Clone the catalog into ``target_dir``. Idempotent.

    An existing git repository is left untouched. An existing non-empty
    directory that is not a repository is refused.

    Args:
        target_dir: Mirror directory
        repo_url: Catalog repository URL

    Returns:
        The target directory

    Raises:
        SkillCatalogError: If the clone fails or the directory cannot hold a clone
    """
    if target_dir is None:
        raise SkillInvalidArgumentError("Catalog target directory is None")

    target = Path(target_dir)
    target.mkdir(parents=True, exist_ok=True)

    if is_git_repository(target):
        logger.debug(f"Skill catalog already cloned at {target}")
        return target

    if any(target.iterdir()):
        logger.error(f"Skill catalog directory {target} is not empty and not a git repository")
        raise SkillCatalogError(
            f"Cannot clone skill catalog into {target}: directory is not empty "
            "and is not a git repository"
        )

    repo = None
    try:
        logger.info(f"Cloning skill catalog from {repo_url}...")
        repo = Repo.clone_from(repo_url, target, depth=1)
    except GitCommandError as e:
        logger.error(f"Failed to clone skill catalog: {e}")
        raise SkillCatalogError(f"Catalog clone failed: {e}") from e
    finally:
        if repo is not None:
            repo.close()

    logger.info(f"Cloned skill catalog into {target}")
    return target


def pull_catalog(repo_dir: Path | str) -> None:
    """Pull the latest catalog changes from ``origin``.

    Raises:
        SkillCatalogError: If ``repo_dir`` is not a repository or the pull fails
    """
    if repo_dir is None:
        raise SkillInvalidArgumentError("Catalog repository directory is None")

    repo = None
    try:
        repo = Repo(repo_dir)
        repo.remotes.origin.pull()
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise SkillCatalogError(f"Not a git repository: {repo_dir}") from e
    except (GitCommandError, AttributeError, ValueError) as e:
        logger.error(f"Failed to pull skill catalog: {e}")
        raise SkillCatalogError(f"Catalog pull failed: {e}") from e
    finally:
        if repo is not None:
            repo.close()

    logger.info(f"Pulled latest skill catalog into {repo_dir}")


def sync_catalog(
    directory: Path | str | None = None,
    repo_url: str = DEFAULT_CATALOG_URL,
    force: bool = False,
) -> bool:
    """Clone or pull the catalog mirror when it is due.

    Args:
        directory: Mirror directory (defaults to ``get_catalog_dir()``)
        repo_url: Catalog repository URL
        force: Sync even if the interval has not elapsed

    Returns:
        True if a sync ran, False if the mirror was still fresh

    Raises:
        SkillCatalogError: If clone or pull fails (the marker is not updated)
    """
    target = Path(directory) if directory is not None else get_catalog_dir()

    if not force and not should_sync(target):
        logger.debug(f"Skill catalog at {target} is up to date")
        return False

    if is_git_repository(target):
        pull_catalog(target)
    else:
        clone_catalog(target, repo_url)

    mark_synced(target)
    return True
