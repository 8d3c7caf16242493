"""blockrun - find runnable code blocks in documents and run them.

Markdown documents yield one block per fenced, language-tagged code block.
Source files yield a whole-file block plus one block per section when the
file is split by gaps of two or more blank lines.

Usage:
    from pathlib import Path
    from blockrun import find_blocks, load_config, load_document

    config = load_config()
    document = load_document(Path("README.md"))
    for block in find_blocks(document, config.registry()):
        print(block.language_id, block.start_line, block.end_line)
"""

from blockrun.config import BlockRunConfig, load_config
from blockrun.detection import (
    Block,
    Document,
    DocumentKind,
    Line,
    block_at_line,
    block_title,
    find_blocks,
    resolve_language,
)
from blockrun.documents import load_document
from blockrun.executor import BlockExecutor, ExecutionResult, close_executor, get_executor
from blockrun.runners import BUILTIN_RUNNERS, RunnerDefinition, build_registry

__all__ = [
    "BlockRunConfig",
    "load_config",
    "Block",
    "Document",
    "DocumentKind",
    "Line",
    "block_at_line",
    "block_title",
    "find_blocks",
    "resolve_language",
    "load_document",
    "BlockExecutor",
    "ExecutionResult",
    "close_executor",
    "get_executor",
    "BUILTIN_RUNNERS",
    "RunnerDefinition",
    "build_registry",
]

__version__ = "0.1.0"
