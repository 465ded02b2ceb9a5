from __future__ import annotations

from typing import List

from loguru import logger

from .core import FileEvents, Finding, FindingSink, MethodBodySpan, SourceLines

MESSAGE = "Comments in method body are prohibited."
COMMENT_MARKER = "//"
PRAGMA_MARKER = "@checkstyle"


def check_method_body(span: MethodBodySpan, lines: SourceLines) -> List[Finding]:
    """
    Report every `//` comment inside a method body, except checkstyle
    suppression pragmas. Bodies with a single interior line are skipped
    entirely.
    """
    if len(span) == 1:
        return []
    findings: List[Finding] = []
    for number in span:
        line = lines.line(number).strip()
        if not line.startswith(COMMENT_MARKER):
            continue
        comment = line[len(COMMENT_MARKER):].strip()
        if not comment.startswith(PRAGMA_MARKER):
            findings.append(Finding(number, MESSAGE))
    return findings


class MethodBodyCommentsCheck:
    name = "MethodBodyCommentsCheck"

    def visit(self, span: MethodBodySpan, lines: SourceLines, sink: FindingSink) -> None:
        for finding in check_method_body(span, lines):
            logger.debug(f"[FINDING] {self.name} at {finding.line}")
            sink.log(finding.line, finding.message)

    def check(self, doc: FileEvents, sink: FindingSink) -> None:
        for span in doc.methods:
            self.visit(span, doc.lines, sink)
