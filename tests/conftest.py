"""Pytest configuration and shared fixtures for the chat2md test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os
from pathlib import Path
from typing import Generator

import pytest
from hypothesis import Verbosity, settings

from utils import agent_turn, build_chat_page, user_turn

from chat2md.constants import ENV_PREFIX

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture(autouse=True)
def restore_root_logging() -> Generator[None, None, None]:
    """Restore root logger handlers and level after tests that run the CLI."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        yield
    finally:
        for handler in list(root.handlers):
            if handler not in handlers:
                root.removeHandler(handler)
                handler.close()
        for handler in handlers:
            if handler not in root.handlers:
                root.addHandler(handler)
        root.setLevel(level)


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty working directory with no chat2md environment or home config.

    Returns
    -------
    Path
        The working directory

    """
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key, raising=False)
    work_dir = tmp_path / "work"
    home_dir = tmp_path / "home"
    work_dir.mkdir()
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    monkeypatch.chdir(work_dir)
    return work_dir


@pytest.fixture
def chat_page() -> str:
    """A saved page with one user turn, one agent turn and one role-less container."""
    return build_chat_page(
        user_turn(1, "How do I sort a list?"),
        agent_turn(2, '<p>Use <code>sorted</code>:</p><pre><code class="language-python">sorted(xs)\n</code></pre>'),
        '<article data-testid="conversation-turn-3"><div>system notice</div></article>',
    )


@pytest.fixture
def chat_page_file(isolated_env: Path, chat_page: str) -> Path:
    """The ``chat_page`` fixture written to disk."""
    path = isolated_env / "conversation.html"
    path.write_text(chat_page, encoding="utf-8")
    return path


EXPECTED_TRANSCRIPT = (
    "agent: ChatGPT\n"
    "\n"
    "# user\n"
    "\n"
    "How do I sort a list?\n"
    "\n"
    "# agent\n"
    "\n"
    "Use `sorted`:\n"
    "\n"
    "```python\n"
    "sorted(xs)\n"
    "```\n"
)


@pytest.fixture
def expected_transcript() -> str:
    """Transcript expected for ``chat_page`` with default options."""
    return EXPECTED_TRANSCRIPT
