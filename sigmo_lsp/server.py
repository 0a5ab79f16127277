"""
A minimal pygls-based Language Server for Sigmo.

Features:
- Text synchronization and document store
- Diagnostics: reader errors, unbalanced parens/braces, unterminated strings
- Hover: builtin signatures, special form syntax and locally defined names
- Completion: special forms, builtins, locals; after 'ns/' suggest that namespace's names
- Signature Help: for builtins and special forms
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""
from __future__ import annotations

from typing import Dict, Optional, List
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_SIGNATURE_HELP,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SignatureHelp,
    SignatureHelpOptions,
    SignatureHelpParams,
    SignatureInformation,
    SymbolKind,
)

from sigmo.builtin.env_builtin import BUILTINS, ALIASES
from sigmo.errors import SigmoSyntaxError
from sigmo.reader.parser import read
from sigmo_lsp.indexer import build_index, qualified_names, DocumentIndex, SPECIAL_FORM_SYNTAX

SOURCE = "sigmo-ls"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


def builtin_signature(name: str) -> Optional[str]:
    """`name :: signature` for a builtin or alias, e.g. 'first :: list'."""
    target = ALIASES.get(name, name)
    if target not in BUILTINS:
        return None
    return f"{name} :: {BUILTINS[target][0]}"


# --- Diagnostics ---
def _mk_range(line: int, col: int) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + 1))


def collect_diagnostics(text: str) -> List[Diagnostic]:
    diags: List[Diagnostic] = []

    try:
        read(text)
    except SigmoSyntaxError as ex:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message=str(ex),
                severity=DiagnosticSeverity.Error,
                source=SOURCE,
            )
        )

    idx = build_index(text)
    if idx.paren_balance != 0:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message="Unbalanced parentheses detected",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )
    if idx.brace_balance != 0:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message="Unbalanced braces detected",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )
    if idx.has_unterminated_string:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message="Unterminated string literal",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )
    return diags


# --- Hover / completion content (server independent) ---
def hover_text(state: DocumentState, word: str) -> Optional[str]:
    if word in SPECIAL_FORM_SYNTAX:
        return SPECIAL_FORM_SYNTAX[word]
    sig = builtin_signature(word)
    if sig is not None:
        return sig
    sdef = state.index.symbols.get(word)
    if sdef is None:
        path, _, leaf = word.rpartition('/')
        sdef = state.index.ns_symbols.get(path, {}).get(leaf) if path else None
    if sdef is None:
        return None
    return f"{word}: {sdef.kind} (defined at {sdef.line + 1}:{sdef.col + 1})"


def completion_items(state: DocumentState, prefix: str) -> List[CompletionItem]:
    items: List[CompletionItem] = []

    # After an 'ns/' prefix, suggest names defined in that namespace
    ns = _detect_ns_prefix(prefix)
    if ns is not None and ns in state.index.ns_symbols:
        for leaf, sdef in state.index.ns_symbols[ns].items():
            items.append(CompletionItem(label=f"{ns}/{leaf}", kind=_completion_kind(sdef.kind)))
        return items

    for name, syntax in SPECIAL_FORM_SYNTAX.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Keyword, detail=syntax))
    for name in list(BUILTINS) + list(ALIASES):
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=builtin_signature(name)))
    for name, sdef in state.index.symbols.items():
        items.append(CompletionItem(label=name, kind=_completion_kind(sdef.kind)))
    for name in state.index.namespaces:
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Module))
    return items


def _completion_kind(kind: str) -> CompletionItemKind:
    return {
        "function": CompletionItemKind.Function,
        "macro": CompletionItemKind.Keyword,
    }.get(kind, CompletionItemKind.Variable)


def _symbol_kind(kind: str) -> SymbolKind:
    return {
        "function": SymbolKind.Function,
        "macro": SymbolKind.Function,
        "namespace": SymbolKind.Namespace,
    }.get(kind, SymbolKind.Variable)


def document_symbols(index: DocumentIndex) -> List[DocumentSymbol]:
    symbols: List[DocumentSymbol] = []
    entries = list(index.namespaces.items()) + list(index.symbols.items())
    for name in qualified_names(index):
        ns, _, leaf = name.rpartition("/")
        entries.append((name, index.ns_symbols[ns][leaf]))

    for name, sdef in entries:
        rng = Range(
            start=Position(line=sdef.line, character=sdef.col),
            end=Position(line=sdef.line, character=sdef.col + len(sdef.name)),
        )
        symbols.append(DocumentSymbol(name=name, kind=_symbol_kind(sdef.kind), range=rng, selection_range=rng))
    return symbols


# --- Helpers ---
DELIMITERS = " \t()[]{}\n\r"


def _get_line_prefix(text: str, pos: Position) -> str:
    # Return the text from start of line up to pos
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return ""
    return lines[pos.line][: pos.character]


def _detect_ns_prefix(prefix: str) -> Optional[str]:
    # 'core/ma' -> 'core'; 'core/math/' -> 'core/math'
    word = prefix
    for d in DELIMITERS:
        word = word.rsplit(d, 1)[-1]
    if '/' not in word:
        return None
    return word.rpartition('/')[0] or None


def _extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = end = pos.character
    while start > 0 and line[start - 1] not in DELIMITERS:
        start -= 1
    while end < len(line) and line[end] not in DELIMITERS:
        end += 1
    return line[start:end] or None


def _extract_callee_name(prefix: str) -> Optional[str]:
    # find last '(' and take the following token
    lp = prefix.rfind('(')
    if lp == -1:
        return None
    tail = prefix[lp + 1:].strip()
    for sep in (' ', '\t', ')'):
        tail = tail.split(sep, 1)[0]
    return tail or None


class SigmoLanguageServer(LanguageServer):
    CMD_NAME = SOURCE

    def __init__(self):
        super().__init__(self.CMD_NAME, "v0.1")
        self.documents: Dict[str, DocumentState] = {}

    def refresh(self, uri: str, text: str) -> None:
        self.documents[uri] = DocumentState(text=text, index=build_index(text))
        self.publish_diagnostics(uri, collect_diagnostics(text))


ls = SigmoLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(server: SigmoLanguageServer, params: DidOpenTextDocumentParams):
    server.refresh(params.text_document.uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(server: SigmoLanguageServer, params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    doc = server.workspace.get_text_document(uri)
    server.refresh(uri, doc.source)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(server: SigmoLanguageServer, params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    server.documents.pop(uri, None)
    server.publish_diagnostics(uri, [])


# --- Hover ---
@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(server: SigmoLanguageServer, params: HoverParams) -> Optional[Hover]:
    state = server.documents.get(params.text_document.uri)
    if not state:
        return None
    word = _extract_word_at(state.text, params.position)
    contents = hover_text(state, word) if word else None
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["(", "/"]))
def on_completion(server: SigmoLanguageServer, params: CompletionParams) -> CompletionList:
    state = server.documents.get(params.text_document.uri)
    if not state:
        return CompletionList(is_incomplete=False, items=[])
    prefix = _get_line_prefix(state.text, params.position)
    return CompletionList(is_incomplete=False, items=completion_items(state, prefix))


# --- Signature Help ---
@ls.feature(TEXT_DOCUMENT_SIGNATURE_HELP, SignatureHelpOptions(trigger_characters=["(", " "]))
def on_signature_help(server: SigmoLanguageServer, params: SignatureHelpParams) -> Optional[SignatureHelp]:
    state = server.documents.get(params.text_document.uri)
    if not state:
        return None
    callee = _extract_callee_name(_get_line_prefix(state.text, params.position))
    if not callee:
        return None
    label = SPECIAL_FORM_SYNTAX.get(callee) or builtin_signature(callee)
    if not label:
        return None
    return SignatureHelp(signatures=[SignatureInformation(label=label)], active_signature=0)


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(server: SigmoLanguageServer, params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = server.documents.get(params.text_document.uri)
    if not state:
        return None
    return document_symbols(state.index)


def main() -> None:
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
