"""
Tests for the command line: config actions and the generation flow.

Git is replaced by a fake; the endpoint by the ``endpoint`` fixture.

Run with:
    pytest tests/test_cli.py -v
"""

import pytest

from ai_commit.cli import main as cli_main
from ai_commit.cli.args import parse_args
from ai_commit.config import Config, ConfigManager
from ai_commit.git import GitError

OK_BODY = '{"choices":[{"message":{"role":"assistant","content":"fix: correct off-by-one"}}]}'


class FakeGit:
    """Replaces GitAnalyzer: serves a fixed diff and records commits."""
    diff = "diff --git a/x b/x\n+1\n"
    error: str | None = None
    commits: list[str] = []

    def __init__(self):
        if self.error:
            raise GitError(self.error)

    def get_staged_diff(self) -> str:
        return self.diff

    def commit(self, message: str) -> str:
        FakeGit.commits.append(message)
        return ""


@pytest.fixture
def fake_git(monkeypatch):
    FakeGit.diff = "diff --git a/x b/x\n+1\n"
    FakeGit.error = None
    FakeGit.commits = []
    monkeypatch.setattr(cli_main, "GitAnalyzer", FakeGit)
    return FakeGit


@pytest.fixture
def stored_key(config_path):
    ConfigManager().save(Config(api_key="sk-stored-secret"))
    return "sk-stored-secret"


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

class TestParseArgs:

    def test_overrides_default_to_none(self):
        args = parse_args([])
        assert args.command is None
        assert (args.language, args.prompt, args.url, args.model, args.api_key) == (None,) * 5

    def test_short_flags(self):
        args = parse_args(["-l", "ja", "-p", "be brief"])
        assert args.language == "ja"
        assert args.prompt == "be brief"

    def test_config_action_requires_name(self):
        with pytest.raises(SystemExit):
            parse_args(["config"])

    def test_unset_rejects_unknown_field(self):
        with pytest.raises(SystemExit):
            parse_args(["config", "unset", "colour"])


# ---------------------------------------------------------------------------
# config subcommand
# ---------------------------------------------------------------------------

class TestConfigCommand:

    @pytest.mark.parametrize("action, field, value", [
        ("set-api-key", "api_key", "sk-new"),
        ("set-url", "url", "http://localhost:11434/v1/chat/completions"),
        ("set-model", "model", "gpt-4o-mini"),
        ("set-language", "language", "es"),
        ("set-prompt", "prompt", "Reference the ticket number."),
    ])
    def test_set_persists_immediately(self, config_path, action, field, value):
        assert cli_main.main(["config", action, value]) == 0
        assert getattr(ConfigManager().load(), field) == value

    def test_set_keeps_other_fields(self, config_path):
        ConfigManager().save(Config(api_key="k", language="de"))
        cli_main.main(["config", "set-model", "m"])
        assert ConfigManager().load() == Config(api_key="k", language="de", model="m")

    def test_set_url_echoes_value(self, config_path, capsys):
        cli_main.main(["config", "set-url", "http://example.test"])
        assert "API URL set to: http://example.test" in capsys.readouterr().out

    def test_set_api_key_does_not_echo_key(self, config_path, capsys):
        cli_main.main(["config", "set-api-key", "sk-very-secret"])
        out = capsys.readouterr().out
        assert "API key set successfully." in out
        assert "sk-very-secret" not in out

    def test_unset(self, config_path):
        ConfigManager().save(Config(api_key="k", model="m"))
        assert cli_main.main(["config", "unset", "model"]) == 0
        assert ConfigManager().load() == Config(api_key="k")

    def test_show_hides_api_key(self, config_path, capsys):
        ConfigManager().save(Config(api_key="sk-very-secret", model="gpt-4o", language="fr"))
        assert cli_main.main(["config", "show"]) == 0
        out = capsys.readouterr().out

        assert str(config_path) in out
        assert "api_key = [set]" in out
        assert "sk-very-secret" not in out
        assert 'model = "gpt-4o"' in out
        assert 'language = "fr"' in out
        assert "url =" not in out
        assert "prompt =" not in out

    def test_show_without_key(self, config_path, capsys):
        cli_main.main(["config", "show"])
        assert "api_key = [not set]" in capsys.readouterr().out

    def test_malformed_config_reported(self, config_path, capsys):
        config_path.parent.mkdir(parents=True)
        config_path.write_text("= broken")
        assert cli_main.main(["config", "show"]) == 1
        assert "Could not parse" in capsys.readouterr().err

    def test_non_utf8_config_reported(self, config_path, capsys):
        config_path.parent.mkdir(parents=True)
        config_path.write_bytes(b'model = "\xff"\n')
        assert cli_main.main(["config", "show"]) == 1
        assert "Could not parse" in capsys.readouterr().err

    def test_set_non_utf8_value_reported(self, config_path, capsys):
        assert cli_main.main(["config", "set-prompt", "bad\udcff"]) == 1
        assert "not valid UTF-8" in capsys.readouterr().err
        assert not config_path.exists()


# ---------------------------------------------------------------------------
# Generation flow
# ---------------------------------------------------------------------------

class TestGenerate:

    def test_missing_api_key_no_network(self, config_path, fake_git, no_network, capsys):
        assert cli_main.main([]) == 0
        assert "API key not set" in capsys.readouterr().err

    def test_cli_api_key_is_enough(self, config_path, fake_git, endpoint, capsys):
        calls = endpoint(200, OK_BODY)
        assert cli_main.main(["--api-key", "sk-cli"]) == 0
        assert calls[0].get_header("Authorization") == "Bearer sk-cli"

    def test_empty_diff_no_network(self, stored_key, fake_git, no_network, capsys):
        fake_git.diff = ""
        assert cli_main.main([]) == 0
        assert "No staged changes to commit." in capsys.readouterr().out

    def test_prints_message(self, stored_key, fake_git, endpoint, capsys):
        endpoint(200, OK_BODY)
        assert cli_main.main([]) == 0
        assert capsys.readouterr().out == "fix: correct off-by-one\n"

    def test_overrides_reach_request(self, stored_key, fake_git, endpoint):
        calls = endpoint(200, OK_BODY)
        cli_main.main(["--url", "http://local.test/v1/chat", "--model", "llama3", "-l", "pt"])
        req = calls[0]
        assert req.full_url == "http://local.test/v1/chat"
        assert b'"model": "llama3"' in req.data
        assert b"commit messages in pt." in req.data

    def test_bad_status_exit_code(self, stored_key, fake_git, endpoint, capsys):
        endpoint(401, '{"error":"invalid key"}')
        assert cli_main.main([]) == 1
        captured = capsys.readouterr()
        assert "Error generating commit message" in captured.err
        assert "401" in captured.err
        assert "invalid key" in captured.err
        assert captured.out == ""

    @pytest.mark.parametrize("body", ['{"choices":[]}', "not json", "[" * 100000 + "]" * 100000], ids=["empty-choices", "not-json", "deeply-nested"])
    def test_bad_body_exit_code(self, stored_key, fake_git, endpoint, capsys, body):
        endpoint(200, body)
        assert cli_main.main([]) == 1
        assert "Error generating commit message" in capsys.readouterr().err

    def test_git_failure(self, stored_key, fake_git, no_network, capsys):
        fake_git.error = "Not inside a git repository"
        assert cli_main.main([]) == 1
        assert "Not inside a git repository" in capsys.readouterr().err

    def test_verbose_goes_to_stderr(self, stored_key, fake_git, endpoint, capsys):
        endpoint(200, OK_BODY)
        cli_main.main(["--verbose"])
        captured = capsys.readouterr()
        assert "client: gpt-3.5-turbo @ https://api.openai.com/v1/chat/completions" in captured.err
        assert "response: 0 tokens" in captured.err
        assert captured.out == "fix: correct off-by-one\n"
        assert "sk-stored-secret" not in captured.err


# ---------------------------------------------------------------------------
# Committing
# ---------------------------------------------------------------------------

class TestCommit:

    def test_commit_uses_message(self, stored_key, fake_git, endpoint):
        endpoint(200, OK_BODY)
        assert cli_main.main(["--commit"]) == 0
        assert fake_git.commits == ["fix: correct off-by-one"]

    def test_no_commit_by_default(self, stored_key, fake_git, endpoint):
        endpoint(200, OK_BODY)
        cli_main.main([])
        assert fake_git.commits == []

    def test_edit_then_commit(self, stored_key, fake_git, endpoint, monkeypatch):
        endpoint(200, OK_BODY)
        monkeypatch.setattr(cli_main, "edit_message", lambda msg: msg + "\n\n- tweak loop bound")
        assert cli_main.main(["--edit"]) == 0
        assert fake_git.commits == ["fix: correct off-by-one\n\n- tweak loop bound"]

    def test_edit_aborted(self, stored_key, fake_git, endpoint, monkeypatch):
        endpoint(200, OK_BODY)
        monkeypatch.setattr(cli_main, "edit_message", lambda msg: None)
        assert cli_main.main(["--edit"]) == 1
        assert fake_git.commits == []

    def test_no_commit_on_generation_error(self, stored_key, fake_git, endpoint):
        endpoint(500, "boom")
        assert cli_main.main(["--commit"]) == 1
        assert fake_git.commits == []


# ---------------------------------------------------------------------------
# Shell completion
# ---------------------------------------------------------------------------

class TestGenCompletion:

    def test_named_shell(self, capsys):
        assert cli_main.main(["--gen-completion", "fish"]) == 0
        out = capsys.readouterr().out
        assert "ai-commit" in out
        assert "complete" in out

    def test_shell_from_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("SHELL", "/usr/bin/zsh")
        assert cli_main.main(["--gen-completion"]) == 0
        assert "compdef" in capsys.readouterr().out

    def test_unknown_shell_from_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("SHELL", "/bin/ksh")
        assert cli_main.main(["--gen-completion"]) == 1
        assert "ksh" in capsys.readouterr().err

    def test_unknown_shell_argument_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--gen-completion", "ksh"])
