"""Pure path arithmetic between package directories.

Nothing here touches the filesystem or the process working directory:
paths are normalized lexically so the same ``(base, target)`` pair always
yields the same answer.
"""

from __future__ import annotations

import posixpath
from pathlib import PurePosixPath


def normalize(path: str | PurePosixPath) -> PurePosixPath:
    """Lexically collapse ``.``, ``..`` and duplicate separators."""
    return PurePosixPath(posixpath.normpath(str(path)))


def relative_path(base: str | PurePosixPath, target: str | PurePosixPath) -> str:
    """Shortest relative path from directory *base* to *target*.

    Finds the longest common segment prefix, climbs one ``..`` per
    remaining *base* segment, then descends the rest of *target*.

    Examples:
        >>> relative_path("/work/Modules/Feature", "/work/Modules/Core")
        '../Core'
        >>> relative_path("/work/App", "/work/App/Packages/Kit")
        'Packages/Kit'
        >>> relative_path("/work", "/work")
        '.'
    """
    base_parts = normalize(base).parts
    target_parts = normalize(target).parts

    common = 0
    for left, right in zip(base_parts, target_parts):
        if left != right:
            break
        common += 1

    segments = [".."] * (len(base_parts) - common)
    segments.extend(target_parts[common:])
    if not segments:
        return "."
    return "/".join(segments)
