"""Git Operations Package"""

from ai_commit.git.analyzer import GitAnalyzer, GitError

__all__ = [
    "GitAnalyzer",
    "GitError",
]
