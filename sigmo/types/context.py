"""Runtime scopes for Sigmo.

A Context maps identifiers to values and links to a parent scope. The root
Context (created once per interpreter session) also owns the namespace tree:
namespace Contexts are created on first reference and kept for the session,
and identifiers containing '/' (e.g. core/math/pi) are resolved through it.
"""

from __future__ import annotations

import logging
from io import StringIO
from typing import Optional

from sigmo.types.value import Value, error

log = logging.getLogger(__name__)


def split_qualified(name: str) -> tuple[Optional[str], str]:
    """Split 'a/b/leaf' into ('a/b', 'leaf'); unqualified names give (None, name).

    A lone '/' (or a name with an empty path or leaf) is not qualified.
    """
    path, sep, leaf = name.rpartition("/")
    if not sep or not path or not leaf:
        return None, name
    return path, leaf


class Context:
    """Hierarchical identifier -> Value mapping with namespace support."""

    __slots__ = ("scope", "parent", "ns", "namespaces")

    def __init__(self, parent: Optional[Context] = None, ns: Optional[str] = None):
        self.scope: dict[str, Value] = {}
        self.parent: Context | None = parent
        # Only the root and namespace contexts store a path; lexical children
        # inherit theirs through the parent chain.
        self.ns: str | None = ns if ns is not None else ("" if parent is None else None)
        self.namespaces: dict[str, Context] = {}

    @property
    def root(self) -> Context:
        ctx = self
        while ctx.parent is not None:
            ctx = ctx.parent
        return ctx

    @property
    def namespace_path(self) -> str:
        ctx: Optional[Context] = self
        while ctx is not None:
            if ctx.ns is not None:
                return ctx.ns
            ctx = ctx.parent
        return ""

    def get(self, name: str) -> Value:
        """Look up `name` locally, then through each ancestor.

        Qualified names outside this context's own namespace are resolved at
        the root; a missing namespace is an error (nothing is created).
        """
        path, leaf = split_qualified(name)
        if path is not None and path != self.namespace_path:
            target = self.root.find_namespace(path)
            if target is None:
                return error(f"Unknown namespace '{path}'")
            return target.get(leaf)

        ctx: Optional[Context] = self
        while ctx is not None:
            if leaf in ctx.scope:
                return ctx.scope[leaf]
            ctx = ctx.parent
        return error(f"Unknown identifier '{name}'")

    def set(self, name: str, value: Value) -> Value:
        """Bind `name` in this local scope (declaration, not assignment).

        A qualified name for another namespace is handed up to the root,
        which creates any missing namespace segments.
        """
        path, leaf = split_qualified(name)
        if path is not None and path != self.namespace_path:
            if self.parent is not None:
                return self.parent.set(name, value)
            return self.namespace(path).set(leaf, value)
        self.scope[leaf] = value
        return value

    def set_existing(self, name: str, value: Value) -> Value:
        """Rebind the nearest existing binding of `name`; error if unbound."""
        ctx: Optional[Context] = self
        while ctx is not None:
            if name in ctx.scope:
                ctx.scope[name] = value
                return value
            ctx = ctx.parent
        return error(f"Unknown identifier '{name}'")

    def namespace(self, path: str) -> Context:
        """Resolve or lazily create the namespace chain named by `path`."""
        root = self.root
        cur = root
        segments = [s for s in path.split("/") if s]
        for i, segment in enumerate(segments):
            child = cur.namespaces.get(segment)
            if child is None:
                child = Context(cur, ns="/".join(segments[: i + 1]))
                cur.namespaces[segment] = child
                log.debug("created namespace %s", child.ns)
            cur = child
        return cur

    def find_namespace(self, path: str) -> Optional[Context]:
        cur = self.root
        for segment in path.split("/"):
            cur = cur.namespaces.get(segment)
            if cur is None:
                return None
        return cur

    def copy_locals(self) -> dict[str, Value]:
        """Snapshot of this local scope with every value independently copied."""
        return {k: v.copy() for k, v in self.scope.items()}

    def update(self, mapping: dict[str, Value]) -> None:
        """Bulk-bind a mapping of identifier -> value in the current frame."""
        self.scope.update(mapping)

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in self.scope.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.parent is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Context ns={self.namespace_path!r} locals={sorted(self.scope)!r}>"
