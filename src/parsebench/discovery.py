"""Recursive discovery of source files under root directories"""

import logging
import os
from collections.abc import Iterable

from parsebench.errors import DiscoveryError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ('.ts',)


def has_extension(path: str, extensions: Iterable[str]) -> bool:
    """Check the final suffix of path against the extension filter."""
    return os.path.splitext(path)[1] in extensions


def walk_root(root: str, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> list[str]:
    """Collect matching files below a single root.

    Directories are visited depth-first in lexical order. A root that is a
    regular file is returned as-is when it matches the filter.

    Raises:
        DiscoveryError: on any error while walking, including a missing root
    """
    extensions = tuple(extensions)

    if os.path.isfile(root):
        return [root] if has_extension(root, extensions) else []

    files: list[str] = []

    def _fail(err: OSError):
        raise DiscoveryError(root, err)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_fail):
        dirnames.sort()
        for name in sorted(filenames):
            if has_extension(name, extensions):
                files.append(os.path.join(dirpath, name))

    return files


def discover_files(roots: Iterable[str], extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> list[str]:
    """
    Collect matching files under every root, in the order the roots are given.

    Overlapping roots are not de-duplicated: a file reachable from two roots
    appears twice.

    Args:
        roots: Directory (or file) paths to walk
        extensions: File suffixes to keep, including the dot

    Returns:
        List of file paths

    Raises:
        DiscoveryError: if walking any root fails; no partial list is returned
    """
    extensions = tuple(extensions)
    files: list[str] = []
    for root in roots:
        found = walk_root(root, extensions)
        logger.debug(f'[DISCOVER] {root}: {len(found)} files')
        files.extend(found)
    return files
