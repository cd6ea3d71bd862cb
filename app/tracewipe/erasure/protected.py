"""Protected paths that must never be erased.

The erasure engine is fed by broad, pattern-based searches (anything named
``*history*``) that can match entries on virtual filesystems. Truncating or
unlinking those is meaningless at best and destabilizes the host at worst,
so the filesystem root and everything under /proc, /sys and /dev is vetoed
before any other check runs.

The predicate works on canonical path strings only and never touches the
filesystem.
"""

# Protected path prefixes. A path is protected when it equals a prefix or
# lies beneath it. "/" protects only the root itself.
PROTECTED_PREFIXES: tuple[str, ...] = (
    "/proc",
    "/sys",
    "/dev",
)

ROOT_PATH = "/"


def _is_under(path: str, prefix: str) -> bool:
    prefix = prefix.rstrip("/")
    if not prefix:
        return path == ROOT_PATH
    return path == prefix or path.startswith(prefix + "/")


def is_protected_path(path: str, extra: tuple[str, ...] = ()) -> bool:
    """Check if a canonical path is protected from erasure.

    Args:
        path: Canonical absolute path (symlinks already resolved).
        extra: Additional protected prefixes, e.g. from settings.

    Returns:
        True if the path is the filesystem root or lies under a protected
        prefix, False otherwise.
    """
    if path == ROOT_PATH:
        return True

    return any(_is_under(path, prefix) for prefix in (*PROTECTED_PREFIXES, *extra))
