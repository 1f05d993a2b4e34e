from __future__ import annotations
from typing import Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


class Bindings(Generic[T]):
    """Persistent association list.

    Extending never modifies an existing environment, so an environment can be
    shared freely between scopes. Lookups scan front to back, which makes the
    most recently added binding for a name shadow older ones.
    """

    def __init__(self, key=None, val=None, next=None):
        self.key = key
        self.val = val
        self.next = next

    def is_empty(self) -> bool:
        return self.next is None

    def depth(self) -> int:
        if self.is_empty():
            return 0
        return 1 + self.next.depth()

    def get(self, k: str) -> T:
        env = self
        while not env.is_empty():
            if env.key == k:
                return env.val
            env = env.next
        raise LookupError(k)

    def lookup(self, k: str) -> Optional[T]:
        try:
            return self.get(k)
        except LookupError:
            return None

    def __contains__(self, k: str) -> bool:
        try:
            self.get(k)
        except LookupError:
            return False
        return True

    def extend(self, k: str, v: T) -> Bindings[T]:
        return Bindings(k, v, self)

    def append(self, other: Bindings[T]) -> Bindings[T]:
        """All bindings of self, followed by all bindings of other.

        Names bound in self shadow the same names in other.
        """
        if self.is_empty():
            return other
        if other.is_empty():
            return self
        env = other
        for k, v in reversed(list(self.items())):
            env = env.extend(k, v)
        return env

    def items(self) -> Iterator[tuple[str, T]]:
        env = self
        while not env.is_empty():
            yield env.key, env.val
            env = env.next

    def values(self) -> Iterator[T]:
        for _, v in self.items():
            yield v

    def __iter__(self) -> Iterator[str]:
        for k, _ in self.items():
            yield k

    def __repr__(self):
        return "(" + ", ".join(f"{k} : {v}" for k, v in self.items()) + ")"

    def __str__(self):
        return "{" + ", ".join(f"{k} : {v}" for k, v in self.items()) + "}"
