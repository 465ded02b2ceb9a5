from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterable, List, Optional, Tuple

from loguru import logger

from .config import RuleConfig
from .core import CommentEvent, EventKind, FileEvents, Finding, FindingSink


class MalformedEventError(RuntimeError):
    """Comment events arrived out of BEGIN -> CONTENT* -> END order."""


@dataclass(frozen=True, slots=True)
class CommentScan:
    """
    Scan state between comment events.

    - start_line: line of the BEGIN event, None while idle
    - buffer: text accumulated since BEGIN
    """
    start_line: Optional[int] = None
    buffer: str = ""

    IDLE: ClassVar["CommentScan"]

    @property
    def accumulating(self) -> bool:
        return self.start_line is not None


CommentScan.IDLE = CommentScan()


def step(
    config: RuleConfig, state: CommentScan, event: CommentEvent
) -> Tuple[CommentScan, Optional[Finding]]:
    if event.kind is EventKind.BEGIN:
        return CommentScan(event.line, event.text), None

    if not state.accumulating:
        raise MalformedEventError(
            f"{event.kind.value} event at line {event.line} outside of a comment"
        )

    text = state.buffer + event.text
    if event.kind is EventKind.CONTENT:
        return CommentScan(state.start_line, text), None

    # END: the only place where the pattern is evaluated
    logger.debug(f"Comment {state.start_line}..{event.line}: {text!r}")
    if config.matches(text) and state.start_line == event.line:
        return CommentScan.IDLE, Finding(event.line, config.message)
    return CommentScan.IDLE, None


def scan_comments(config: RuleConfig, events: Iterable[CommentEvent]) -> List[Finding]:
    """Fold `step` over a file's comment events, collecting the findings."""
    state = CommentScan.IDLE
    findings: List[Finding] = []
    for event in events:
        state, finding = step(config, state, event)
        if finding is not None:
            findings.append(finding)
    return findings


class SingleLineCommentCheck:
    """
    Flags block comments that begin and end on the same line and match the
    configured format. Holds the scan state of one file, so a new instance
    is needed for every file.
    """

    name = "SingleLineCommentCheck"

    def __init__(self, config: RuleConfig):
        self.config = config
        self.state = CommentScan.IDLE

    def visit(self, event: CommentEvent, sink: FindingSink) -> None:
        self.state, finding = step(self.config, self.state, event)
        if finding is not None:
            logger.debug(f"[FINDING] {self.name} at {finding.line}")
            sink.log(finding.line, finding.message)

    def finish(self) -> bool:
        """Return True if the file ended cleanly, False if a comment was left open."""
        if self.state.accumulating:
            logger.warning(f"Comment opened at line {self.state.start_line} was never closed")
            return False
        return True

    def check(self, doc: FileEvents, sink: FindingSink) -> None:
        for event in doc.comments:
            self.visit(event, sink)
        if not self.finish():
            raise MalformedEventError(f"{doc.path}: unterminated block comment")
