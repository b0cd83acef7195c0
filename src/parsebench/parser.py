"""Adapter around the tree-sitter parser

The pipeline only needs two capabilities from a parser: turn bytes into a
tree, and release that tree when done. Node counting relies on the
child_count / child(i) navigation that tree-sitter nodes expose.
"""

import logging
from typing import Any, Protocol

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Parser

from parsebench.errors import ParseError

logger = logging.getLogger(__name__)

LANGUAGES = {
    'typescript': ts_typescript.language_typescript,
    'tsx': ts_typescript.language_tsx,
}

# default file suffix for each language
LANGUAGE_EXTENSIONS = {
    'typescript': ('.ts',),
    'tsx': ('.tsx',),
}


class TreeParser(Protocol):
    """Anything that can parse bytes into a navigable tree."""

    def parse(self, source: bytes) -> Any: ...

    def release(self, tree: Any) -> None: ...


class TreeSitterParser:
    """Tree-sitter parser bound to one language.

    Not thread-safe: each worker owns its own instance.
    """

    def __init__(self, language: str = 'typescript'):
        if language not in LANGUAGES:
            raise ValueError(f'unsupported language: {language}')
        self.language = language
        self._parser = Parser(Language(LANGUAGES[language]()))

    def parse(self, source: bytes):
        try:
            tree = self._parser.parse(source)
        except (ValueError, RuntimeError) as e:
            raise ParseError(str(e)) from e
        if tree is None:
            raise ParseError('parser returned no tree')
        return tree

    def release(self, tree) -> None:
        """Nothing to close explicitly.

        py-tree-sitter frees the native tree when its last reference is
        dropped, which the caller does right after this call.
        """
        return None


def count_elements(node) -> int:
    """
    Count every node of a tree, the given node included.

    Uses an explicit stack so deeply nested trees cannot hit the recursion
    limit. The result equals 1 + the sum of count_elements() over children.

    Args:
        node: Root node exposing child_count and child(i)

    Returns:
        Total number of nodes (>= 1)
    """
    count = 0
    stack = [node]
    while stack:
        current = stack.pop()
        count += 1
        for i in range(current.child_count):
            stack.append(current.child(i))
    return count
