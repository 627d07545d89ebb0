"""pipesh package: an interactive command interpreter with pipelines."""

from .completion import Completion, CompletionEngine, PrefixIndex, longest_common_prefix
from .exceptions import (
    BuiltinExecutionError,
    ChdirError,
    CommandNotFound,
    ExternalCommandError,
    NumericArgumentRequired,
    PipeCreationError,
    RedirectionIOError,
    ShellError,
    ShellExit,
)
from .history import History
from .path_utils import PathResolver, find_executable
from .redirection import RedirectionSpec, extract_redirection
from .shell import CommandResult, Shell
from .shell_parser import Command, split_pipeline, tokenize

__all__ = [
    "Shell",
    "CommandResult",
    "Command",
    "tokenize",
    "split_pipeline",
    "RedirectionSpec",
    "extract_redirection",
    "PathResolver",
    "find_executable",
    "History",
    "Completion",
    "CompletionEngine",
    "PrefixIndex",
    "longest_common_prefix",
    "ShellError",
    "ShellExit",
    "CommandNotFound",
    "RedirectionIOError",
    "ChdirError",
    "NumericArgumentRequired",
    "PipeCreationError",
    "BuiltinExecutionError",
    "ExternalCommandError",
]
