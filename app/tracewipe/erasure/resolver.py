"""Candidate path canonicalization.

Turns a candidate path string into a canonical absolute path and, in a
separate step, inspects what lives there. The two steps are split so the
safety guard can veto a path before anything at that location is statted.

Absence is a normal outcome: a nonexistent path canonicalizes fine and
inspects as MISSING. Only paths whose symlinks cannot be followed (dangling
links, loops, permission denied) or malformed names are unresolvable.
"""

import logging
import os
import stat

from tracewipe.erasure.models import ResolvedTarget, TargetKind

logger = logging.getLogger(__name__)


class PathResolver:
    """Resolves candidate paths for the erasure engine."""

    def canonicalize(self, candidate: str) -> str | None:
        """Resolve a candidate path to its canonical absolute form.

        Args:
            candidate: Path string as produced by the target enumerator.

        Returns:
            Canonical path, or None if the candidate is a symlink that
            cannot be followed or the name is malformed.
        """
        try:
            expanded = os.path.abspath(os.path.expanduser(candidate))
            if os.path.islink(expanded):
                # Refuse links whose target cannot be statted
                os.stat(expanded)
            canonical = os.path.realpath(expanded)
        except (OSError, ValueError) as e:
            logger.debug("Cannot resolve %r: %s", candidate, e)
            return None

        # realpath gives up silently on loops in intermediate components
        if os.path.islink(canonical):
            logger.debug("Unresolved symlink left after canonicalizing %r", candidate)
            return None

        return canonical

    def inspect(self, canonical: str, *, via_symlink: bool = False) -> ResolvedTarget | None:
        """Describe the entry at a canonical path.

        Args:
            canonical: Path returned by canonicalize().
            via_symlink: Whether the original candidate was a symlink.

        Returns:
            ResolvedTarget (kind MISSING if nothing is there), or None if the
            entry cannot be statted.
        """
        try:
            st = os.lstat(canonical)
        except (FileNotFoundError, NotADirectoryError):
            return ResolvedTarget(path=canonical, kind=TargetKind.MISSING, via_symlink=via_symlink)
        except (OSError, ValueError) as e:
            logger.debug("Cannot stat %s: %s", canonical, e)
            return None

        if stat.S_ISREG(st.st_mode):
            kind = TargetKind.FILE
        elif stat.S_ISDIR(st.st_mode):
            kind = TargetKind.DIRECTORY
        else:
            kind = TargetKind.OTHER

        size = st.st_size if kind == TargetKind.FILE else 0
        return ResolvedTarget(path=canonical, kind=kind, size_bytes=size, via_symlink=via_symlink)

    @staticmethod
    def is_link(candidate: str) -> bool:
        """Check whether the candidate itself is a symbolic link.

        Symlinked parent directories such as a linked /home do not count;
        only the final path component is examined.

        Args:
            candidate: Original candidate path.

        Returns:
            True if the last component of the candidate is a symlink.
        """
        try:
            return os.path.islink(os.path.abspath(os.path.expanduser(candidate)))
        except ValueError:
            return False
