"""Minimal LSP server for Focus — semantic highlighting and on-type indentation."""

from __future__ import annotations

import logging

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_ON_TYPE_FORMATTING,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentOnTypeFormattingOptions,
    DocumentOnTypeFormattingParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    SemanticTokens,
    SemanticTokensLegend,
    SemanticTokensParams,
    TextDocumentSyncKind,
    PositionEncodingKind,
    TextEdit,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import PositionCodec

from focusedit.buffer import Buffer
from focusedit.indent import IndentUnit, indent_edit
from focusedit.outdent import outdent_edit
from focusedit.tokens import Edit, LexerState, TokenCategory

logger = logging.getLogger(__name__)

# Categories mapped onto the standard LSP semantic token types.  Whitespace and
# brackets are left to the client's default styling.
_SEMANTIC_TYPES = {
    TokenCategory.COMMENT: "comment",
    TokenCategory.ENTITY: "namespace",
    TokenCategory.FUNCTION: "function",
    TokenCategory.STRING: "string",
    TokenCategory.NUMBER: "number",
    TokenCategory.KEYWORD: "keyword",
    TokenCategory.CONSTANT: "enumMember",
    TokenCategory.IDENTIFIER: "variable",
    TokenCategory.OPERATOR: "operator",
}
TOKEN_TYPES = list(dict.fromkeys(_SEMANTIC_TYPES.values()))
LEGEND = SemanticTokensLegend(token_types=TOKEN_TYPES, token_modifiers=[])

server = LanguageServer("focusedit-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)


def _load(ls: LanguageServer, uri: str) -> Buffer:
    return Buffer(ls.workspace.get_text_document(uri).source)


def encode_semantic_tokens(buffer: Buffer, codec: PositionCodec | None = None) -> list[int]:
    """Encode highlighted tokens as LSP relative (line, start, length, type, mods) runs.

    Columns and lengths are counted in the client's units, UTF-16 unless
    *codec* says otherwise.
    """
    if codec is None:
        codec = PositionCodec(PositionEncodingKind.Utf16)
    data: list[int] = []
    prev_row = 0
    prev_col = 0
    for row in range(buffer.line_count):
        line = buffer.get_line(row)
        for tok in buffer.get_tokens(row):
            kind = _SEMANTIC_TYPES.get(tok.category)
            if kind is None:
                continue
            start = codec.client_num_units(line[: tok.start_column])
            delta_row = row - prev_row
            delta_col = start - prev_col if delta_row == 0 else start
            data.extend(
                [delta_row, delta_col, codec.client_num_units(tok.lexeme), TOKEN_TYPES.index(kind), 0]
            )
            prev_row = row
            prev_col = start
    return data


def _text_edit(edit: Edit) -> TextEdit:
    return TextEdit(
        range=Range(
            start=Position(line=edit.row, character=edit.start_column),
            end=Position(line=edit.row, character=edit.end_column),
        ),
        new_text=edit.text,
    )


def _diagnostic(
    buffer: Buffer, codec: PositionCodec, row: int, start: int, end: int, message: str
) -> Diagnostic:
    line = buffer.get_line(row)
    return Diagnostic(
        range=Range(
            start=Position(line=row, character=codec.client_num_units(line[:start])),
            end=Position(line=row, character=codec.client_num_units(line[:end])),
        ),
        message=message,
        severity=DiagnosticSeverity.Warning,
        source="focusedit",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Publish warnings for unmatched brackets and regions left open at end of file."""
    document = ls.workspace.get_text_document(uri)
    codec = document.position_codec
    buffer = Buffer(document.source)
    diagnostics: list[Diagnostic] = []

    for pos in buffer.unmatched_brackets():
        glyph = buffer.get_line(pos.row)[pos.column]
        diagnostics.append(
            _diagnostic(buffer, codec, pos.row, pos.column, pos.column + 1, f"unmatched '{glyph}'")
        )

    opened = buffer.open_region_start()
    if opened is not None:
        row, column = opened
        end_state = buffer.get_end_state(buffer.line_count - 1)
        what = "string" if end_state is LexerState.QUOTED_STRING else "block comment"
        diagnostics.append(
            _diagnostic(
                buffer, codec, row, column, len(buffer.get_line(row)), f"unterminated {what}"
            )
        )

    logger.debug("publishing %d diagnostics for %s", len(diagnostics), uri)
    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, LEGEND)
def semantic_tokens_full(ls: LanguageServer, params: SemanticTokensParams) -> SemanticTokens:
    document = ls.workspace.get_text_document(params.text_document.uri)
    buffer = Buffer(document.source)
    return SemanticTokens(data=encode_semantic_tokens(buffer, document.position_codec))


@server.feature(
    TEXT_DOCUMENT_ON_TYPE_FORMATTING,
    DocumentOnTypeFormattingOptions(first_trigger_character="}", more_trigger_character=["\n"]),
)
def on_type_formatting(
    ls: LanguageServer, params: DocumentOnTypeFormattingParams
) -> list[TextEdit]:
    """Outdent a typed ``}`` or indent the line opened by a typed newline."""
    buffer = _load(ls, params.text_document.uri)
    row = params.position.line
    if row >= buffer.line_count:
        return []

    if params.ch == "}":
        edit = outdent_edit(buffer, row)
    elif params.ch == "\n":
        unit = IndentUnit.from_options(
            params.options.insert_spaces, max(1, params.options.tab_size)
        )
        edit = indent_edit(buffer, row, unit)
    else:
        edit = None

    logger.debug("on-type %r at %d:%d -> %s", params.ch, row, params.position.character, edit)
    return [] if edit is None else [_text_edit(edit)]


def main() -> None:
    server.start_io()
