# src/comment_checks/core.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Protocol


class EventKind(Enum):
    BEGIN = "begin"
    CONTENT = "content"
    END = "end"


@dataclass(frozen=True, slots=True)
class CommentEvent:
    """
    One piece of a block comment as emitted by the token source.

    BEGIN and END carry the 1-based line they sit on; CONTENT may not.
    """
    kind: EventKind
    text: str
    line: Optional[int] = None

    def __post_init__(self):
        if self.kind is not EventKind.CONTENT and self.line is None:
            raise ValueError(f"{self.kind.value} event needs a line number")

    @staticmethod
    def begin(text: str, line: int) -> "CommentEvent":
        return CommentEvent(EventKind.BEGIN, text, line)

    @staticmethod
    def content(text: str, line: Optional[int] = None) -> "CommentEvent":
        return CommentEvent(EventKind.CONTENT, text, line)

    @staticmethod
    def end(text: str, line: int) -> "CommentEvent":
        return CommentEvent(EventKind.END, text, line)


@dataclass(frozen=True, slots=True)
class MethodBodySpan:
    """
    Interior of a method or constructor body: the 1-based lines strictly
    between the opening brace line and the closing brace line, inclusive
    on both ends. An empty interior has first == last + 1.
    """
    first: int
    last: int

    def __post_init__(self):
        if self.first < 1 or self.first > self.last + 1:
            raise ValueError(f"Bad method body span: {self.first}..{self.last}")

    @staticmethod
    def between(open_line: int, close_line: int) -> "MethodBodySpan":
        if close_line < open_line:
            raise ValueError(
                f"Closing brace at {close_line} precedes opening brace at {open_line}"
            )
        if close_line == open_line:
            return MethodBodySpan(open_line + 1, open_line)
        return MethodBodySpan(open_line + 1, close_line - 1)

    def __len__(self) -> int:
        return self.last - self.first + 1

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.first, self.last + 1))


class SourceLines:
    """Raw lines of one file, looked up by 1-based line number."""

    __slots__ = ("_lines",)

    def __init__(self, lines: Iterable[str]):
        self._lines = tuple(lines)

    def line(self, number: int) -> str:
        if number < 1 or number > len(self._lines):
            raise IndexError(f"Line {number} out of range 1..{len(self._lines)}")
        return self._lines[number - 1]

    def __len__(self) -> int:
        return len(self._lines)

    def __repr__(self) -> str:
        return f"SourceLines({len(self._lines)} lines)"


@dataclass(frozen=True, slots=True, order=True)
class Finding:
    line: int
    message: str


class FindingSink(Protocol):
    def log(self, line: int, message: str) -> None: ...


class ListSink:
    """Collects findings in the order they are reported."""

    def __init__(self):
        self.findings: List[Finding] = []

    def log(self, line: int, message: str) -> None:
        self.findings.append(Finding(line, message))

    def __len__(self) -> int:
        return len(self.findings)


@dataclass
class FileEvents:
    """Everything the token source produced for one file."""
    path: str
    lines: SourceLines
    comments: List[CommentEvent] = field(default_factory=list)
    methods: List[MethodBodySpan] = field(default_factory=list)


class CheckTool(Protocol):
    name: str

    def check(self, doc: FileEvents, sink: FindingSink) -> None: ...
