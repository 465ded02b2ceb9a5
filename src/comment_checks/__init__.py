__version__ = "0.1.0"

from .config import ConfigError, RuleConfig, load_config
from .core import CheckTool, CommentEvent, EventKind, FileEvents, Finding, FindingSink, ListSink, MethodBodySpan, SourceLines
from .method_body import MESSAGE, MethodBodyCommentsCheck, check_method_body
from .single_line import CommentScan, MalformedEventError, SingleLineCommentCheck, scan_comments, step

__all__ = [
    "CheckTool",
    "CommentEvent",
    "CommentScan",
    "ConfigError",
    "EventKind",
    "FileEvents",
    "Finding",
    "FindingSink",
    "ListSink",
    "MESSAGE",
    "MalformedEventError",
    "MethodBodyCommentsCheck",
    "MethodBodySpan",
    "RuleConfig",
    "SingleLineCommentCheck",
    "SourceLines",
    "check_method_body",
    "load_config",
    "scan_comments",
    "step",
]
