"""
Filesystem path → ``file://`` URI conversion.

Paths are parsed into a :class:`~pathlib.PurePath` first so the Windows
drive-letter handling is decided from the parsed form, independent of the
host platform.  Clients such as VS Code expect lower-cased drive letters
(``file:///c:/...``) while a plain conversion keeps the drive as written, so
:func:`url_from_path` folds the drive segment and leaves everything else as
the direct conversion produced it.
"""
from __future__ import annotations

import logging
import ntpath
import os
import re
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from urllib.parse import quote

logger = logging.getLogger(__name__)

_VERBATIM_PREFIX = '\\\\?\\'
_DEVICE_PREFIX = '\\\\.\\'

# C:  or  \\?\C:
_DRIVE_RE = re.compile(r'^(?:\\\\\?\\)?[A-Za-z]:')


class UnconvertiblePathError(ValueError):
    """Raised when a path cannot be expressed as a ``file://`` URI."""

    def __init__(self, path):
        super().__init__(f"can't convert path to url: {path}")
        self.path = path


def parse_path(path: str | os.PathLike) -> PurePath:
    """Parse *path* into a Windows or POSIX flavoured pure path.

    Drive-letter paths are always read as Windows paths, so ``C:\\foo\\bar.k``
    is recognised on any host.  Other strings follow the host convention.
    """
    if isinstance(path, PurePath):
        return path
    raw = os.fspath(path)
    if os.name == 'nt' or _DRIVE_RE.match(raw):
        return PureWindowsPath(raw)
    return PurePosixPath(raw)


def _simplify_prefix(path: PureWindowsPath) -> PureWindowsPath:
    """Rewrite verbatim prefixes to their plain form.

    ``\\\\?\\C:\\foo`` becomes ``C:\\foo`` and ``\\\\?\\UNC\\server\\share``
    becomes ``\\\\server\\share``.  Any other verbatim or device prefix
    (``\\\\.\\``, ``\\\\?\\Volume{...}``) has no ``file://`` form.
    """
    drive = path.drive
    if drive.startswith(_DEVICE_PREFIX):
        raise UnconvertiblePathError(path)
    if not drive.startswith(_VERBATIM_PREFIX):
        return path
    rest = str(path)[len(_VERBATIM_PREFIX):]
    if rest[:4].upper() == 'UNC\\':
        return PureWindowsPath('\\\\' + rest[4:])
    if _DRIVE_RE.match(rest):
        return PureWindowsPath(rest)
    raise UnconvertiblePathError(path)


def has_windows_drive(path: PurePath) -> bool:
    """True if *path* starts with a disk (``C:``) or verbatim disk (``\\\\?\\C:``) prefix."""
    if not isinstance(path, PureWindowsPath):
        return False
    return bool(_DRIVE_RE.match(path.drive))


def file_uri(path: str | os.PathLike) -> str:
    """Return the percent-encoded ``file://`` URI for an absolute *path*.

    Raises :class:`UnconvertiblePathError` for relative paths and for
    Windows device or volume paths that have no ``file://`` form.
    """
    parsed = parse_path(path)
    if isinstance(parsed, PureWindowsPath):
        parsed = _simplify_prefix(parsed)
    if not parsed.is_absolute():
        raise UnconvertiblePathError(path)

    drive = parsed.drive
    posix = parsed.as_posix()
    if len(drive) == 2 and drive[1] == ':':
        return 'file:///' + drive + quote(posix[2:])
    if drive:
        # UNC share: //server/share/... → file://server/share/...
        return 'file:' + quote(posix)
    return 'file://' + quote(posix)


def url_from_path(path: str | os.PathLike) -> str:
    """Return the ``file://`` URI for *path*, lower-casing a Windows drive letter.

    For paths without a drive letter this is exactly :func:`file_uri`.
    """
    parsed = parse_path(path)
    uri = file_uri(parsed)
    if not has_windows_drive(parsed):
        return uri

    head, sep, tail = uri.rpartition(':')
    if not sep:
        # A drive-letter URI always has a colon; pass it through untouched.
        return uri
    return head.lower() + sep + tail


def adjust_canonicalization(path: str | os.PathLike) -> str:
    """Return a comparison key for *path*.

    Strips a verbatim ``\\\\?\\`` prefix.  Windows-style paths are also folded
    to one case and one separator, so ``C:/Foo/a.k`` and ``c:\\foo\\A.K``
    compare equal.  POSIX paths are returned as given.
    """
    raw = str(path) if isinstance(path, PurePath) else os.fspath(path)
    if raw.startswith(_VERBATIM_PREFIX):
        raw = raw[len(_VERBATIM_PREFIX):]
    if isinstance(path, PureWindowsPath) or os.name == 'nt' or _DRIVE_RE.match(raw):
        return ntpath.normcase(raw)
    return raw
