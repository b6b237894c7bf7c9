from typing import Any, Dict, Optional

from sanskriti.errors import LoxRuntimeError


class Environment:
    """Represents a scope mapping variable names to values.

    Lookups and assignments that miss in this scope continue in the
    enclosing (parent) scope; the outermost scope has no parent.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    def get(self, name: str, line: Optional[int] = None) -> Any:
        if name in self.values:
            return self.values[name]
        if self.parent:
            return self.parent.get(name, line)
        raise LoxRuntimeError('NameError', f"Undefined variable '{name}'.", line)

    def set(self, name: str, value: Any, line: Optional[int] = None):
        # Assign in the nearest scope that already binds the name; never create one
        if name in self.values:
            self.values[name] = value
        elif self.parent:
            self.parent.set(name, value, line)
        else:
            raise LoxRuntimeError('NameError', f"Undefined variable '{name}'.", line)

    def declare(self, name: str, value: Any):
        # Redeclaring in the same scope simply rebinds
        self.values[name] = value

    def depth(self) -> int:
        env, depth = self, 0
        while env.parent is not None:
            env = env.parent
            depth += 1
        return depth
