from __future__ import annotations
from typing import List, Set


class StackSet:
    """A stack that also answers membership in O(1); tracks the current DFS path."""

    def __init__(self) -> None:
        self.set: Set[str] = set()
        self.stack: List[str] = []

    def __len__(self) -> int:
        return len(self.stack)

    def has(self, value: str) -> bool:
        return value in self.set

    def push(self, value: str) -> None:
        self.stack.append(value)
        self.set.add(value)

    def pop(self) -> None:
        self.set.discard(self.stack.pop())

    def path(self, value: str) -> List[str]:
        return self.stack + [value]

    @classmethod
    def of(cls, value: str, cycle: bool = False) -> "StackSet":
        s = cls()
        if cycle:
            # source sits on the stack only, so the search may come back to it
            s.stack.append(value)
        else:
            s.push(value)
        return s
