"""Filesystem convenience API with tagged-result and raising variants."""

__version__ = "0.1.0"

from filekit.config import ConflictPolicy, FilesConfig, always_overwrite, never_overwrite
from filekit.errors import CopyError, ErrorKind, FileError, FilekitError, IteratorError
from filekit.files import Files
from filekit.lines import BinaryLineIterator, LineIterator, TextLineIterator
from filekit.protocols import FileSystem
from filekit.result import Err, Ok, Result
from filekit.types import FileMode, FileStat, FileType

__all__ = [
    "__version__",
    "BinaryLineIterator",
    "ConflictPolicy",
    "CopyError",
    "Err",
    "ErrorKind",
    "FileError",
    "FileMode",
    "FileStat",
    "FileSystem",
    "FileType",
    "Files",
    "FilesConfig",
    "FilekitError",
    "IteratorError",
    "LineIterator",
    "Ok",
    "Result",
    "TextLineIterator",
    "always_overwrite",
    "never_overwrite",
]
