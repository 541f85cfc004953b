from typing import Any, Dict, Optional


class Environment:
    """A scope mapping identifiers to values, chained to its enclosing scope.

    Function values keep a reference to the environment they were defined
    in, so a binding added to that scope later is visible to every closure
    that captured it.
    """
    def __init__(self, outer: Optional['Environment'] = None):
        self.outer = outer
        self.store: Dict[str, Any] = {}

    def get(self, name: str) -> Optional[Any]:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name: str, value: Any) -> Any:
        # Always binds in this scope; an outer binding of the same name is shadowed.
        self.store[name] = value
        return value

    def enclosed(self) -> 'Environment':
        return Environment(outer=self)

    def __repr__(self) -> str:
        depth = 0
        env = self.outer
        while env is not None:
            depth += 1
            env = env.outer
        return f"<Environment names={sorted(self.store)} depth={depth}>"
