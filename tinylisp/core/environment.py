"""Lexically nested scopes. Each scope holds its own bindings and a reference to at most one parent: children point at
parents, never the other way around, so scopes form a forest of chains. A scope lives as long as something (usually the
evaluator's call frame) holds it.
"""


class Environment:
    """A single scope of name -> Expression bindings."""

    def __init__(self, parent=None):
        self.bindings = {}
        self.parent = parent

    @classmethod
    def extend(cls, parent):
        """Returns a new empty scope whose parent is parent (shared, not copied)."""
        return cls(parent)

    def get(self, name):
        """Looks name up in this scope, then up the parent chain. Returns None if name is unbound everywhere."""
        scope = self
        while scope is not None:
            if name in scope.bindings:
                return scope.bindings[name]
            scope = scope.parent
        return None

    def set(self, name, value):
        """Binds name in this scope only, shadowing any binding in an ancestor."""
        self.bindings[name] = value

    def __contains__(self, name):
        return self.get(name) is not None

    def __repr__(self):
        return f"Environment({sorted(self.bindings)}, parent={self.parent!r})"
