"""config command: show/set/unset project configuration."""

from __future__ import annotations

from reviewkit.core.config import (
    CONFIG_SCHEMA,
    save_config,
    set_config_value,
    unset_config_value,
)
from reviewkit.core.fallbacks import print_error
from reviewkit.utils import colorize


def cmd_config(args) -> int:
    """Handle config subcommands: show, set, unset."""
    action = getattr(args, "config_action", None)
    if action == "set":
        return _config_set(args)
    if action == "unset":
        return _config_unset(args)
    _config_show(args)
    return 0


def _config_show(args) -> None:
    """Print all config keys with current values and descriptions."""
    config = args._config

    print(colorize("\n  reviewkit configuration\n", "bold"))
    for key, schema in CONFIG_SCHEMA.items():
        value = config.get(key, schema.default)
        is_default = value == schema.default
        if isinstance(value, list):
            display = ", ".join(value) if value else "(empty)"
        else:
            display = str(value)

        default_tag = colorize(" (default)", "dim") if is_default else ""
        print(f"  {key:<22} {display}{default_tag}")
        print(colorize(f"  {'':22} {schema.description}", "dim"))
    print()


def _config_set(args) -> int:
    config = args._config
    key = args.config_key
    try:
        set_config_value(config, key, args.config_value)
    except (KeyError, ValueError) as e:
        print_error(str(e))
        return 2

    save_config(config, args._config_path)
    print(colorize(f"  Set {key} = {config[key]}", "green"))
    return 0


def _config_unset(args) -> int:
    config = args._config
    key = args.config_key
    try:
        unset_config_value(config, key)
    except KeyError as e:
        print_error(str(e))
        return 2

    save_config(config, args._config_path)
    print(colorize(f"  Reset {key} to default ({CONFIG_SCHEMA[key].default})", "green"))
    return 0
