"""Config file discovery.

The search paths are injected by the caller: the CLI passes the home
directory and the working directory, tests pass temporary directories.
Nothing in this module reads ``Path.home()`` or ``Path.cwd()`` itself.
"""

from __future__ import annotations

from pathlib import Path

from catalyst.config.store import ConfigSource, LayerKind

CONFIG_FILENAME = ".catalyst.yml"


def find_project_config(start: Path, *, stop_at: Path | None = None) -> Path | None:
    """Walk up from *start* looking for ``.catalyst.yml``, similar to how git finds .git/.

    The walk stops before *stop_at* (typically the home directory, whose
    file is the user-wide layer rather than a project file).
    Returns the path to the config file, or None if not found.
    """
    current = start.resolve()
    boundary = stop_at.resolve() if stop_at is not None else None
    while True:
        if boundary is not None and current == boundary:
            break
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def config_sources(
    home: Path,
    project_dir: Path,
    *,
    override: Path | None = None,
) -> list[ConfigSource]:
    """Ordered layer sources: user-wide first, then project-local.

    The project layer is *override* when given, else the nearest
    ``.catalyst.yml`` above *project_dir*, else a not-yet-existing file in
    *project_dir* (so ``config set`` has somewhere to write).
    """
    user = home / CONFIG_FILENAME
    if override is not None:
        project = override
    else:
        project = find_project_config(project_dir, stop_at=home) or project_dir / CONFIG_FILENAME
    return [
        ConfigSource(kind=LayerKind.USER, path=user),
        ConfigSource(kind=LayerKind.PROJECT, path=project),
    ]
