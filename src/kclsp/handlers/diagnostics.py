"""Convert KCL compiler diagnostics into LSP Diagnostic objects."""
from __future__ import annotations

import logging

from lsprotocol import types as lsp

from kclsp.diagnostic import (
    Diagnostic,
    DiagnosticId,
    ErrorKind,
    Level,
    Message,
    Position,
    Suggestions,
    WarningKind,
)
from kclsp.uri import UnconvertiblePathError, adjust_canonicalization, url_from_path

logger = logging.getLogger(__name__)

_SEVERITIES = {
    Level.ERROR: lsp.DiagnosticSeverity.Error,
    Level.WARNING: lsp.DiagnosticSeverity.Warning,
    Level.NOTE: lsp.DiagnosticSeverity.Hint,
    Level.SUGGESTIONS: lsp.DiagnosticSeverity.Hint,
}


def lsp_position(pos: Position) -> lsp.Position:
    """Convert a compiler position to an LSP position.

    Compiler lines are 1-based, LSP lines 0-based.  A line of 0 (malformed
    input) saturates at 0 and a missing column becomes 0.
    """
    return lsp.Position(
        line=max(pos.line - 1, 0),
        character=max(pos.column or 0, 0),
    )


def lsp_range(start: Position, end: Position) -> lsp.Range:
    return lsp.Range(start=lsp_position(start), end=lsp_position(end))


def lsp_location(file_path: str, start: Position, end: Position) -> lsp.Location | None:
    """Return an LSP location for the span, or None if *file_path* has no URI."""
    try:
        uri = url_from_path(file_path)
    except UnconvertiblePathError:
        logger.debug('lsp_location: no URI for %r', file_path)
        return None
    return lsp.Location(uri=uri, range=lsp_range(start, end))


def level_to_severity(level: Level) -> lsp.DiagnosticSeverity:
    return _SEVERITIES[level]


def diagnostic_code(diag_id: DiagnosticId) -> str:
    """Return the LSP ``code`` for a compiler diagnostic identifier."""
    # TODO: switch to stable numeric codes once the compiler assigns them.
    if isinstance(diag_id, (ErrorKind, WarningKind)):
        return diag_id.value
    if diag_id is Suggestions.SUGGESTIONS:
        return 'suggestion'
    raise TypeError(f'not a diagnostic identifier: {diag_id!r}')


def _suggestion_data(replacements: tuple[str, ...] | None) -> dict | None:
    if replacements is None:
        return None
    kept = [r for r in replacements if r]
    # An all-empty replacement list is sent as a bare "" (clients rely on it).
    return {'suggested_replacement': kept if kept else ''}


def _related_information(related: list[Message]) -> list[lsp.DiagnosticRelatedInformation] | None:
    if not related:
        return None
    infos: list[lsp.DiagnosticRelatedInformation] = []
    for msg in related:
        start, end = msg.range
        location = lsp_location(msg.filename, start, end)
        if location is None:
            logger.debug('dropping related location in %r: %s', msg.filename, msg.message)
            continue
        infos.append(lsp.DiagnosticRelatedInformation(location=location, message=msg.message))
    return infos


def message_to_diagnostic(
    msg: Message,
    severity: lsp.DiagnosticSeverity,
    related: list[Message],
    code: str | None = None,
) -> lsp.Diagnostic:
    """Build the LSP ``Diagnostic`` for one compiler message.

    *related* are the other messages of the same compiler diagnostic; each one
    whose file converts to a URI becomes a ``relatedInformation`` entry.
    Suggested replacements, if any, travel in ``data``.
    """
    start, end = msg.range
    return lsp.Diagnostic(
        range=lsp_range(start, end),
        message=msg.message,
        severity=severity,
        code=code,
        related_information=_related_information(related),
        data=_suggestion_data(msg.suggested_replacement),
    )


def _code(diag: Diagnostic) -> str | None:
    return diagnostic_code(diag.code) if diag.code is not None else None


def _convert(diag: Diagnostic, idx: int, code: str | None) -> lsp.Diagnostic:
    msg = diag.messages[idx]
    related = diag.messages[:idx] + diag.messages[idx + 1:]
    return message_to_diagnostic(msg, level_to_severity(diag.level), related, code)


def get_diagnostics(diag: Diagnostic) -> dict[str, list[lsp.Diagnostic]]:
    """Return LSP diagnostics for every message of *diag*, keyed by file path."""
    code = _code(diag)
    by_file: dict[str, list[lsp.Diagnostic]] = {}
    for idx, msg in enumerate(diag.messages):
        by_file.setdefault(msg.filename, []).append(_convert(diag, idx, code))
    return by_file


def get_file_diagnostics(diag: Diagnostic, file_name: str) -> list[lsp.Diagnostic]:
    """Return LSP diagnostics for the messages of *diag* located in *file_name*."""
    code = _code(diag)
    wanted = adjust_canonicalization(file_name)
    return [
        _convert(diag, idx, code)
        for idx, msg in enumerate(diag.messages)
        if adjust_canonicalization(msg.filename) == wanted
    ]
