from __future__ import annotations
import argparse, json, platform, sys
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional

from loguru import logger

from . import __version__
from .config import ConfigError, RuleConfig, load_config
from .core import CheckTool, CommentEvent, EventKind, FileEvents, Finding, ListSink, MethodBodySpan, SourceLines
from .method_body import MethodBodyCommentsCheck
from .single_line import MalformedEventError, SingleLineCommentCheck


class DocumentError(ValueError):
    """An event dump that cannot be turned into comment events and spans."""


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _event(raw: Any) -> CommentEvent:
    try:
        kind = EventKind(raw["kind"])
        text, line = raw["text"], raw.get("line")
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DocumentError(f"Bad comment event {raw!r}: {e}") from e
    if not isinstance(text, str):
        raise DocumentError(f"Comment text must be a string in {raw!r}")
    if line is not None and not _is_int(line):
        raise DocumentError(f"Comment line must be an integer in {raw!r}")
    try:
        return CommentEvent(kind, text, line)
    except ValueError as e:
        raise DocumentError(f"Bad comment event {raw!r}: {e}") from e


def _span(raw: Any, lines: SourceLines) -> MethodBodySpan:
    try:
        open_line, close_line = raw["open"], raw["close"]
    except (KeyError, TypeError) as e:
        raise DocumentError(f"Bad method body {raw!r}: {e}") from e
    if not (_is_int(open_line) and _is_int(close_line)):
        raise DocumentError(f"Brace lines must be integers in {raw!r}")
    try:
        span = MethodBodySpan.between(open_line, close_line)
    except ValueError as e:
        raise DocumentError(f"Bad method body {raw!r}: {e}") from e
    if span.last > len(lines):
        raise DocumentError(f"Method body {raw!r} runs past the last line {len(lines)}")
    return span


def parse_document(raw: Any) -> FileEvents:
    if not isinstance(raw, dict):
        raise DocumentError(f"Document must be an object, got {type(raw).__name__}")
    if "path" not in raw or "lines" not in raw:
        raise DocumentError("Document needs 'path' and 'lines'")
    if not isinstance(raw["lines"], list) or not all(isinstance(ln, str) for ln in raw["lines"]):
        raise DocumentError("'lines' must be a list of strings")
    lines = SourceLines(raw["lines"])
    return FileEvents(
        path=str(raw["path"]),
        lines=lines,
        comments=[_event(ev) for ev in raw.get("comments", [])],
        methods=[_span(m, lines) for m in raw.get("methods", [])],
    )


def load_documents(dump: Path) -> List[FileEvents]:
    """Read a token source dump holding one document or a list of them."""
    try:
        data = json.loads(Path(dump).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise DocumentError(f"Cannot read {dump}: {e}") from e
    if isinstance(data, list):
        return [parse_document(d) for d in data]
    return [parse_document(data)]


class Analyzer:
    def __init__(self):
        # factories, so that stateful checks start fresh on every file
        self.tools: list[Callable[[], CheckTool]] = []

    def register(self, tool: Callable[[], CheckTool]) -> None:
        self.tools.append(tool)

    def run(self, doc: FileEvents) -> List[Finding]:
        sink = ListSink()
        for make in self.tools:
            tool = make()
            tool.check(doc, sink)
        logger.debug(f"{doc.path}: {len(sink)} finding(s)")
        return sink.findings


def build_analyzer(config: RuleConfig) -> Analyzer:
    analyzer = Analyzer()
    analyzer.register(lambda: SingleLineCommentCheck(config))
    analyzer.register(MethodBodyCommentsCheck)
    return analyzer


def print_info():
    print("Comment Checks")
    print(__version__)
    print("SingleLineCommentCheck,MethodBodyCommentsCheck")
    print(
        f"{platform.system()} {platform.release()} ({platform.machine()}), Python {platform.python_version()}"
    )


def setup_logging(debug: bool = False):
    logger.remove()
    logger.add(sys.stderr, format="[{level}] {message}", level="DEBUG" if debug else "INFO")
    logger.debug(f"Logging initialized (debug={debug})")


def parse_args(argv: Optional[Iterable[str]] = None):
    parser = argparse.ArgumentParser("comment-checks")
    parser.add_argument("dumps", nargs="*", type=Path, help="Token source dumps (JSON)")
    parser.add_argument("--config", type=Path, help="JSON file with rule properties")
    parser.add_argument("--format", help="Regexp a single-line block comment must match to be reported")
    parser.add_argument("--message", help="Message reported for such comments")
    parser.add_argument(
        "--info", action="store_true", help="Print checker info and exit"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(None if argv is None else list(argv))


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.debug)

    if args.info:
        print_info()
        return 0

    try:
        config = load_config(args.config, fmt=args.format, message=args.message)
    except ConfigError as e:
        logger.error(str(e))
        return 2

    analyzer = build_analyzer(config)
    failed = False
    total = 0
    for dump in args.dumps:
        try:
            docs = load_documents(dump)
        except DocumentError as e:
            logger.warning(f"Skipping {dump}: {e}")
            failed = True
            continue
        for doc in docs:
            try:
                findings = analyzer.run(doc)
            except MalformedEventError as e:
                logger.warning(f"Skipping {doc.path}: {e}")
                failed = True
                continue
            for f in findings:
                print(f"{doc.path}:{f.line}: {f.message}")
            total += len(findings)

    print(f"Findings: {total}")
    if failed:
        return 2
    return 1 if total else 0


if __name__ == "__main__":
    sys.exit(main())
