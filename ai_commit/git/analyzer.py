"""Git Analyzer - Read staged changes and record commits."""

import subprocess


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class GitAnalyzer:
    """Thin wrapper over the git command line."""

    def __init__(self):
        self._verify_git_available()
        self._verify_in_repo()

    def _run_git(self, *args: str, input: str | None = None) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                input=input,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if we're not in a git repository."""
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError:
            raise GitError("Not inside a git repository")

    def get_staged_diff(self) -> str:
        """Diff text of everything staged for the next commit ("" when nothing is)."""
        return self._run_git('diff', '--staged')

    def commit(self, message: str) -> str:
        """Commit the staged changes. Message goes over stdin to keep it verbatim."""
        return self._run_git('commit', '-F', '-', input=message)
