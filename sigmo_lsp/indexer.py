"""
Lightweight indexer for Sigmo files without evaluating code.

We scan for forms and build an index for:
- definitions: (def name ...), (macro name ...)
- namespaces: (namespace a/b ...) and everything defined inside them
- namespace-qualified definitions: (def core/math/pi ...)
- imports: (import core/math) and (import "path/to/file.mo")

The scanner is tolerant: it never raises on partial/incomplete buffers. We
only extract enough structure to power LSP features (document symbols,
completion, hover and balance diagnostics).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import re

from sigmo.types.context import split_qualified

TOKEN_REGEX = re.compile(
    r"""\s+|;[^\n]*|'\(|[()\[\]{}]|"(?:\\.|[^"\\])*(?P<close>")?|[^\s()\[\]{}";]+"""
)

# Special form syntax for hover/completion
SPECIAL_FORM_SYNTAX: Dict[str, str] = {
    "lambda": "(lambda (params) body)",
    "def": "(def name value)",
    "set!": "(set! name value)",
    "do": "(do forms...)",
    "if": "(if test then [else])",
    "while": "(while test body...)",
    "for": "(for (name list) body)",
    "let": "(let (name value ...) body...)",
    "cond": "(cond (test expr) ...)",
    "guard": "(guard expr [handler])",
    "assert": "(assert test)",
    "namespace": "(namespace path body...)",
    "import": "(import name-or-path)",
    "macro": "(macro name (params) body...)",
    "input": "(input)",
}


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function" | "macro" | "namespace"
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    ns_symbols: Dict[str, Dict[str, SymbolDef]] = field(default_factory=dict)  # ns -> leaf -> def
    namespaces: Dict[str, SymbolDef] = field(default_factory=dict)
    imports: List[str] = field(default_factory=list)
    paren_balance: int = 0
    brace_balance: int = 0
    has_unterminated_string: bool = False


def _iter_tokens(text: str):
    for m in TOKEN_REGEX.finditer(text):
        tok = m.group(0)
        if tok.isspace() or tok.startswith(';') or tok in ('[', ']'):
            continue
        if tok.startswith('"') and m.group('close') is None:
            yield tok, m.start(), True
        else:
            yield tok, m.start(), False


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _record(idx: DocumentIndex, name: str, ns: Optional[str], sdef: SymbolDef) -> None:
    path, leaf = split_qualified(name)
    if path is None and ns:
        path = ns
    if path is None:
        idx.symbols[leaf] = sdef
    else:
        idx.ns_symbols.setdefault(path, {})[leaf] = sdef


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    scanned = list(_iter_tokens(text))
    tokens = [(t, s) for t, s, _ in scanned]
    idx.has_unterminated_string = any(u for _, _, u in scanned)

    # (depth at which the namespace form opened, namespace path)
    ns_stack: List[Tuple[int, str]] = []

    for i, (tok, start) in enumerate(tokens):
        if tok in ('(', "'("):
            idx.paren_balance += 1
        elif tok == ')':
            idx.paren_balance -= 1
            while ns_stack and idx.paren_balance < ns_stack[-1][0]:
                ns_stack.pop()
            continue
        elif tok == '{':
            idx.brace_balance += 1
            continue
        elif tok == '}':
            idx.brace_balance -= 1
            continue
        else:
            continue

        if i + 2 >= len(tokens):
            continue
        head = tokens[i + 1][0]
        target, target_start = tokens[i + 2]
        if target in ('(', ')', "'(", '{', '}'):
            continue
        current_ns = ns_stack[-1][1] if ns_stack else None
        line, col = _position_from_offset(text, target_start)

        if head == "import":
            idx.imports.append(target.strip('"'))
        elif head == "namespace":
            idx.namespaces[target] = SymbolDef(name=target, kind="namespace", line=line, col=col)
            ns_stack.append((idx.paren_balance, target))
        elif head in ("def", "macro") and not target.startswith('"'):
            kind = "macro" if head == "macro" else "var"
            if head == "def" and i + 4 < len(tokens):
                if tokens[i + 3][0] == '(' and tokens[i + 4][0] == "lambda":
                    kind = "function"
            _record(idx, target, current_ns, SymbolDef(name=target, kind=kind, line=line, col=col))

    return idx


def qualified_names(idx: DocumentIndex) -> List[str]:
    """Every namespace-qualified definition as 'ns/leaf'."""
    return [f"{ns}/{leaf}" for ns, syms in idx.ns_symbols.items() for leaf in syms]
