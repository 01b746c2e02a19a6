"""File change notification."""

from cestplane.watch.channel import ChangeChannel, ChangeKind, FileChange

__all__ = ["ChangeChannel", "ChangeKind", "FileChange"]
