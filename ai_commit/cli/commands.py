"""CLI Commands"""

import argparse
import os

import argcomplete

from ai_commit import APP_NAME
from ai_commit.cli.args import COMPLETION_SHELLS
from ai_commit.config import CONFIG_KEYS, Config, ConfigError, ConfigManager
from ai_commit.output import bold, dim, print_error, print_success

# config action -> (Config field, argparse dest, confirmation template)
SET_ACTIONS = {
    'set-api-key': ('api_key', 'key', "API key set successfully."),
    'set-url': ('url', 'url', "API URL set to: {value}"),
    'set-model': ('model', 'model', "Default model set to: {value}"),
    'set-language': ('language', 'lang', "Default language set to: {value}"),
    'set-prompt': ('prompt', 'prompt', "Default prompt set."),
}


def display_config(config: Config, config_path) -> int:
    """Print the stored configuration. The API key is reported as present or absent only."""
    print(f"{bold('Current configuration file path:')} {config_path}")
    print(dim("---"))
    print(f"api_key = {'[set]' if config.api_key is not None else '[not set]'}")
    for key in CONFIG_KEYS:
        if key == 'api_key':
            continue
        value = getattr(config, key)
        if value is not None:
            print(f'{key} = "{value}"')
    print(dim("---"))
    return 0


def handle_config_command(args: argparse.Namespace, manager: ConfigManager) -> int:
    """Run one `config` action. Every change is written straight away."""
    action = args.config_command
    try:
        config = manager.load()

        if action == 'show':
            return display_config(config, manager.path)

        if action == 'unset':
            setattr(config, args.field, None)
            manager.save(config)
            print_success(f"{args.field} unset.")
            return 0

        field, dest, template = SET_ACTIONS[action]
        value = getattr(args, dest)
        setattr(config, field, value)
        manager.save(config)
    except ConfigError as e:
        print_error(str(e))
        return 1

    print_success(template.format(value=value))
    return 0


def print_completion_script(shell: str | None = None) -> int:
    """Print argcomplete's registration script for ``shell`` (default: from $SHELL)."""
    if shell is None:
        shell = os.path.basename(os.environ.get('SHELL', '')) or 'bash'
    if shell not in COMPLETION_SHELLS:
        print_error(f"Cannot generate completion for shell '{shell}'.",
                    f"Pass one of: {', '.join(COMPLETION_SHELLS)}")
        return 1
    print(argcomplete.shellcode([APP_NAME], shell=shell))
    return 0
