"""CLI Main Entry Point"""

import time

from ai_commit.config import ConfigError, ConfigManager, EffectiveParameters, MissingApiKeyError, Overrides, resolve
from ai_commit.git import GitAnalyzer, GitError
from ai_commit.llm import LLMError, get_client
from ai_commit.output import Spinner, print_diagnostic, print_error, print_success, print_warning

from ai_commit.cli.args import parse_args
from ai_commit.cli.commands import handle_config_command, print_completion_script
from ai_commit.cli.utils import edit_message


def _get_overrides(args) -> Overrides:
    return Overrides(
        api_key=args.api_key,
        url=args.url,
        model=args.model,
        language=args.language,
        prompt=args.prompt,
    )


def _print_verbose_stats(client, diff, response, elapsed):
    """Print request diagnostics to stderr. The API key is never shown."""
    request = client.build_request(diff)
    prompt_chars = sum(len(m.content) for m in request.messages)
    print_diagnostic("client", client.name)
    print_diagnostic("language", client.params.language)
    print_diagnostic("prompt", f"~{prompt_chars // 4} tokens ({prompt_chars} chars)")
    if response is not None:
        print_diagnostic("response", f"{response.tokens_used} tokens in {elapsed:.2f}s")
    else:
        print_diagnostic("response", f"failed after {elapsed:.2f}s")


def _commit(analyzer: GitAnalyzer, message: str, edit: bool) -> int:
    """Optionally edit the message, then commit with it."""
    if edit:
        edited = edit_message(message)
        if edited is None:
            print_warning("Empty message or editor failed; nothing committed.")
            return 1
        message = edited

    try:
        analyzer.commit(message)
    except GitError as e:
        print_error(str(e))
        return 1

    print_success("Changes committed.")
    return 0


def _generate_commit_flow(args, params: EffectiveParameters) -> int:
    """Read the staged diff, ask for a message, print it and maybe commit.

    Returns:
        int: Exit code
    """
    try:
        analyzer = GitAnalyzer()
        diff = analyzer.get_staged_diff()
    except GitError as e:
        print_error(str(e))
        return 1

    # No API call for a no-op diff
    if not diff:
        print("No staged changes to commit.")
        return 0

    client = get_client(params)
    response = None
    t0 = time.time()
    try:
        with Spinner(f"Asking {client.name} for a commit message..."):
            response = client.generate(diff)
    except LLMError as e:
        print_error("Error generating commit message:", str(e))
        return 1
    finally:
        if args.verbose:
            _print_verbose_stats(client, diff, response, time.time() - t0)

    message = response.content
    print(message)

    if args.commit or args.edit:
        return _commit(analyzer, message, args.edit)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    if args.gen_completion is not None:
        return print_completion_script(args.gen_completion or None)

    manager = ConfigManager()

    try:
        if args.command == 'config':
            return handle_config_command(args, manager)

        try:
            config = manager.load()
        except ConfigError as e:
            print_error(str(e))
            return 1

        try:
            params = resolve(_get_overrides(args), config)
        except MissingApiKeyError as e:
            # Guidance only; exit status stays 0 like a no-op run
            print_error(str(e))
            return 0

        return _generate_commit_flow(args, params)
    except KeyboardInterrupt:
        print_error("Interrupted.")
        return 130
