"""
Request eligibility: method, mount prefix and the ``only`` filters.

Runs before anything touches the disk, so that a static stage mounted at
``/`` does not stat the filesystem for every API request that flows past.
"""

from typing import List, Sequence

ALLOWED_METHODS = frozenset({"GET", "HEAD"})


def subset(at: Sequence[str], segments: Sequence[str]) -> List[str]:
    """
    Segments left after stripping the mount prefix ``at``.

    Empty when ``segments`` does not start with all of ``at``:

        >>> subset(["public"], ["public", "images", "logo.png"])
        ['images', 'logo.png']
        >>> subset(["public"], ["private", "logo.png"])
        []
    """
    if len(segments) < len(at) or list(segments[:len(at)]) != list(at):
        return []
    return list(segments[len(at):])


def allowed(only: Sequence[str], only_matching: Sequence[str], segments: Sequence[str]) -> bool:
    """
    Whether the (prefix-stripped) segments may be served.

    ``only`` needs an exact match on the first segment, ``only_matching``
    a prefix match.
    """
    if not segments:
        return False
    if not only and not only_matching:
        return True

    first = segments[0]
    return first in only or any(first.startswith(prefix) for prefix in only_matching)
