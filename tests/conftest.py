"""Pytest configuration and shared fixtures for parsebench tests.

Provides an auto-use fixture isolating PARSEBENCH_* environment variables
and a fake parser so pipeline tests do not depend on a compiled grammar.
"""

import os

import pytest

from parsebench.errors import ParseError


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Auto-use fixture that clears parsebench environment configuration.

    Tests that need a value set it explicitly with monkeypatch.setenv.
    """
    for key in ('PARSEBENCH_WORKERS', 'PARSEBENCH_LOG_LEVEL'):
        monkeypatch.delenv(key, raising=False)


class FakeNode:
    """Minimal node exposing the navigation used by count_elements."""

    def __init__(self, children=None):
        self.children = children or []

    @property
    def child_count(self) -> int:
        return len(self.children)

    def child(self, i: int):
        return self.children[i]


class FakeTree:
    def __init__(self, root_node: FakeNode):
        self.root_node = root_node


class FakeParser:
    """Parser double: one child per non-empty line, each with one child per word.

    Content containing the marker b'@@broken@@' is rejected with ParseError.
    Released trees are recorded in the shared `released` list.
    """

    BROKEN = b'@@broken@@'

    def __init__(self, language: str = 'typescript', released: list | None = None):
        self.language = language
        self.released = released if released is not None else []

    def parse(self, source: bytes) -> FakeTree:
        if self.BROKEN in source:
            raise ParseError('syntax error near @@broken@@')
        lines = []
        for line in source.splitlines():
            words = line.split()
            if words:
                lines.append(FakeNode([FakeNode() for _ in words]))
        return FakeTree(FakeNode(lines))

    def release(self, tree: FakeTree) -> None:
        self.released.append(tree)


def _expected_count(content: bytes) -> int:
    lines = [line.split() for line in content.splitlines() if line.split()]
    return 1 + len(lines) + sum(len(words) for words in lines)


@pytest.fixture
def fake_node():
    """The FakeNode class, for building trees by hand."""
    return FakeNode


@pytest.fixture
def fake_parser():
    """A fresh FakeParser instance."""
    return FakeParser()


@pytest.fixture
def fake_parser_cls():
    """The FakeParser class, for patching or custom factories."""
    return FakeParser


@pytest.fixture
def expected_count():
    """Function returning the element count FakeParser produces for content."""
    return _expected_count


@pytest.fixture
def fake_parser_factory():
    """Factory compatible with WorkerPool, sharing one released-trees list."""
    released: list = []

    def factory(language: str) -> FakeParser:
        return FakeParser(language, released)

    factory.released = released
    return factory


@pytest.fixture
def source_tree(tmp_path):
    """Small directory of .ts files plus non-matching files.

    Layout:
        root/a.ts
        root/b.ts
        root/notes.md
        root/sub/c.ts
        root/sub/deep/d.ts
        root/sub/e.js
    """
    root = tmp_path / 'root'
    (root / 'sub' / 'deep').mkdir(parents=True)
    files = {
        'a.ts': b'const a = 1;\n',
        'b.ts': b'let b = 2;\nlet c = 3;\n',
        'notes.md': b'# notes\n',
        os.path.join('sub', 'c.ts'): b'export function f() {}\n',
        os.path.join('sub', 'deep', 'd.ts'): b'',
        os.path.join('sub', 'e.js'): b'var e;\n',
    }
    for name, content in files.items():
        (root / name).write_bytes(content)
    return root
