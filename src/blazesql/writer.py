"""
Output sinks collecting SQL text and positional arguments.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Protocol


class Writer(Protocol):
    """
    Sink consumed by conditions and builders while rendering.
    """

    def write(self, text: str) -> None: ...

    def append(self, *args: Any) -> None: ...

    def extend(self, args: Iterable[Any]) -> None: ...


class SQLWriter:
    """
    Append-only text buffer paired with the bound arguments emitted so far.

    Arguments must be appended in the same order their placeholders are
    written, including those spliced in from nested renders.
    """

    def __init__(self) -> None:
        self._parts: List[str] = []
        self._args: List[Any] = []

    def write(self, text: str) -> None:
        self._parts.append(text)

    def append(self, *args: Any) -> None:
        self._args.extend(args)

    def extend(self, args: Iterable[Any]) -> None:
        self._args.extend(args)

    def reset(self) -> None:
        self._parts.clear()
        self._args.clear()

    @property
    def text(self) -> str:
        return "".join(self._parts)

    @property
    def args(self) -> List[Any]:
        return list(self._args)

    def __repr__(self) -> str:
        return f"SQLWriter(text={self.text!r}, args={self._args!r})"
