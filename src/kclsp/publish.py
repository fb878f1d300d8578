"""
Hand compiler diagnostics over to the LSP client.

A compile yields a batch of compiler diagnostics that may touch many files.
:func:`collect_diagnostics` folds the batch into one list per file and
:func:`publish_diagnostics` sends each list as a
``textDocument/publishDiagnostics`` notification through a pygls server.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable

from lsprotocol import converters
from lsprotocol import types as lsp

from kclsp.diagnostic import Diagnostic
from kclsp.handlers import get_diagnostics
from kclsp.uri import UnconvertiblePathError, url_from_path

if TYPE_CHECKING:
    from pygls.lsp.server import LanguageServer

logger = logging.getLogger(__name__)

_converter = converters.get_converter()


def collect_diagnostics(diagnostics: Iterable[Diagnostic]) -> dict[str, list[lsp.Diagnostic]]:
    """Merge the per-file LSP diagnostics of every item in *diagnostics*."""
    merged: dict[str, list[lsp.Diagnostic]] = {}
    for diag in diagnostics:
        for path, diags in get_diagnostics(diag).items():
            merged.setdefault(path, []).extend(diags)
    return merged


def publish_diagnostics(
    server: LanguageServer,
    diagnostics: Iterable[Diagnostic],
    files: Iterable[str] = (),
) -> dict[str, list[lsp.Diagnostic]]:
    """Publish *diagnostics* to the client, one notification per file.

    Every path in *files* that ends up without diagnostics is published with
    an empty list, clearing whatever the client showed for it before.  Files
    whose path has no ``file://`` URI are skipped.  Returns the published
    mapping keyed by URI.
    """
    by_path = collect_diagnostics(diagnostics)
    for path in files:
        by_path.setdefault(path, [])

    # Equivalent paths share a URI and must go out in a single notification.
    by_uri: dict[str, list[lsp.Diagnostic]] = {}
    for path, diags in by_path.items():
        try:
            uri = url_from_path(path)
        except UnconvertiblePathError:
            logger.warning('publish_diagnostics: skipping %r, no file URI', path)
            continue
        by_uri.setdefault(uri, []).extend(diags)

    for uri, diags in by_uri.items():
        logger.debug('publish_diagnostics: %s → %d diagnostics', uri, len(diags))
        server.text_document_publish_diagnostics(
            lsp.PublishDiagnosticsParams(uri=uri, diagnostics=diags)
        )
    return by_uri


def to_wire(obj: Any) -> Any:
    """Unstructure an lsprotocol value into its LSP JSON form."""
    return _converter.unstructure(obj)
