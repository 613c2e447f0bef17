"""Shared test fixtures — sample word diffs, commit logs, temp git repos."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest


@pytest.fixture
def simple_word_diff() -> str:
    """One file, one replaced word."""
    return (
        "diff --git a/x.txt b/x.txt\n"
        "index 111..222 100644\n"
        "--- a/x.txt\n"
        "+++ b/x.txt\n"
        "@@ -1,1 +1,1 @@\n"
        "-old\n"
        "+new\n"
    )


@pytest.fixture
def mixed_width_word_diff() -> str:
    """A change with context before and after, CJK text, and '~' breaks."""
    return (
        "diff --git a/greet.py b/greet.py\n"
        "index 1111111..2222222 100644\n"
        "--- a/greet.py\n"
        "+++ b/greet.py\n"
        "@@ -1,2 +1,2 @@\n"
        ' print("hello \n'
        '-world")\n'
        '+世界")\n'
        "~\n"
        " done\n"
        "~\n"
    )


@pytest.fixture
def two_file_word_diff() -> str:
    return (
        "diff --git a/a.md b/a.md\n"
        "index 1111111..2222222 100644\n"
        "--- a/a.md\n"
        "+++ b/a.md\n"
        "@@ -1 +1 @@\n"
        " keep\n"
        "~\n"
        "-gone\n"
        "+here\n"
        "~\n"
        "diff --git a/docs/b.md b/docs/b.md\n"
        "new file mode 100644\n"
        "index 0000000..3333333\n"
        "--- /dev/null\n"
        "+++ b/docs/b.md\n"
        "@@ -0,0 +1 @@\n"
        "+fresh\n"
        "~\n"
    )


@pytest.fixture
def sample_commit_log() -> str:
    return (
        "commit 5d9af644ceb59cd20af6b07d43e5019ae4c5a9db\n"
        "Author: Wu-Yijun <wu@example.com>\n"
        "Date:   Sun May 5 21:41:09 2024 -0700\n"
        "\n"
        "    test\n"
        "    second line\n"
        "    3rd line\n"
        "\n"
        "commit 9cb24a67498d18d9c0122c6fc11f271aa9228aaf\n"
        "Author: Wu-Yijun <wu@example.com>\n"
        "Date:   Sun May 5 21:39:45 2024 -0700\n"
        "\n"
        "    tst"
    )


def _git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git():
    """Run git in a directory and return stripped stdout."""
    return _git


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one tagged-style base commit."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    _git(tmp_path, "config", "user.email", "test@test.com")
    _git(tmp_path, "config", "user.name", "Test")
    _git(tmp_path, "config", "commit.gpgsign", "false")
    (tmp_path / "README.md").write_text("# Test\nhello world\n")
    (tmp_path / "CHANGELOG.md").write_text("## 1.0.1\n\n- Fixed greeting\n")
    _git(tmp_path, "add", ".")
    _git(tmp_path, "commit", "-m", "init")
    return tmp_path


@pytest.fixture
def repo_with_change(tmp_git_repo: Path) -> tuple[Path, str]:
    """tmp_git_repo plus a second commit; returns (root, base_sha)."""
    base_sha = _git(tmp_git_repo, "rev-parse", "HEAD")
    (tmp_git_repo / "README.md").write_text("# Test\nhello there\n")
    _git(tmp_git_repo, "commit", "-am", "Change greeting")
    return tmp_git_repo, base_sha
