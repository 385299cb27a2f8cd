"""CLI Argument Parsing"""

import argparse
import argcomplete

from ai_commit import APP_NAME, __version__
from ai_commit.config import CONFIG_KEYS

# Shells argcomplete can emit a completion script for
COMPLETION_SHELLS = ('bash', 'zsh', 'fish', 'tcsh', 'powershell')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description='AI-powered commit message generator.',
        epilog=f'Example: {APP_NAME} --language fr | git commit -F -'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Generation overrides (win over the config file)
    parser.add_argument('-l', '--language', type=str, metavar='LANG', help='Language for the commit message. Overrides config.')
    parser.add_argument('-p', '--prompt', type=str, metavar='TEXT', help='Custom prompt for the AI model. Overrides config.')
    parser.add_argument('--url', type=str, help="Custom URL for the AI model's API. Overrides config.")
    parser.add_argument('--model', type=str, metavar='MODEL', help='The specific model to use for generation. Overrides config.')
    parser.add_argument('--api-key', type=str, metavar='KEY', help='API key for this run only. Overrides config.')

    # Commit options
    parser.add_argument('--commit', action='store_true', help='Commit the staged changes with the generated message')
    parser.add_argument('-e', '--edit', action='store_true', help='Edit the message in $EDITOR before committing (implies --commit)')

    # Output options
    parser.add_argument('--verbose', action='store_true', help='Show request diagnostics on stderr')
    parser.add_argument(
        '--gen-completion', nargs='?', const='', default=None, metavar='SHELL',
        choices=('', *COMPLETION_SHELLS),
        help='Print a tab completion script (shell defaults to $SHELL), e.g. eval "$(%(prog)s --gen-completion)"',
    )

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    config_parser = subparsers.add_parser('config', help='Manage configuration.', description='Manage configuration.')
    actions = config_parser.add_subparsers(dest='config_command', metavar='ACTION', required=True)

    p = actions.add_parser('set-api-key', help='Set the API key for the AI service.')
    p.add_argument('key')
    p = actions.add_parser('set-url', help='Set the API URL for a custom AI model endpoint.')
    p.add_argument('url')
    p = actions.add_parser('set-model', help='Set the default model to use for generation.')
    p.add_argument('model')
    p = actions.add_parser('set-language', help='Set the default language for commit messages.')
    p.add_argument('lang')
    p = actions.add_parser('set-prompt', help='Set a default prompt to guide the AI.')
    p.add_argument('prompt')
    p = actions.add_parser('unset', help='Remove a value from the configuration.')
    p.add_argument('field', choices=CONFIG_KEYS)
    actions.add_parser('show', help='Show the current configuration (hides API key for security).')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
