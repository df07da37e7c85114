"""
dupfind — fast duplicate file finder for disk-space auditing.

Files are narrowed down by size, then by a fingerprint of their first 4 KB,
then by a fingerprint of their whole content. Nothing is ever modified.
"""

from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version("dupfind")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API — only what users should import directly
from dupfind.commands import DeduplicationCommand
from dupfind.core import (
    DeduplicationParams, DuplicateGroup, DuplicateReport, File, InvalidRootError)
from dupfind.utils.convert_utils import ConvertUtils

__all__ = [
    "DeduplicationCommand",
    "DeduplicationParams",
    "DuplicateGroup",
    "DuplicateReport",
    "File",
    "InvalidRootError",
    "ConvertUtils",
    "__version__",
]
