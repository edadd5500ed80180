"""Command registration decorator"""

import argparse
from typing import Any, Dict, Optional

from .. import __version__
from .errors import OptionError


def arg(*args: str, **kwargs):
    """Helper to create argument adder"""
    def add_arg(parser):
        return parser.add_argument(*args, **kwargs)
    return add_arg


class OptionParser(argparse.ArgumentParser):
    """Parser that raises OptionError instead of printing usage and exiting"""

    def error(self, message):
        raise OptionError(message)


class Command:
    """Command registry and parser

    The tool has a single flat command line, so registering a command adds
    its arguments to the root parser instead of a subparser.
    """
    _plugins: dict[str, type] = {}
    parser: Optional[OptionParser] = None

    @classmethod
    def init_parser(cls):
        """Initialize argument parser"""
        cls.parser = OptionParser(
            prog="kubetail",
            description="Tail logs from multiple pods and containers at once",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  kubetail my-app                     # pods whose name contains my-app
  kubetail app1,app2 -c nginx         # several apps, nginx container only
  kubetail '^app[0-9]$' -e pattern    # regular expression
  kubetail -l app=web -t dev,prod     # label selector across two contexts
  kubetail my-app -j '.message'       # project a field of JSON logs
""")

        cls.parser.add_argument(
            "--version", action="version", version=f"%(prog)s {__version__}")
        cls.parser.add_argument(
            "-v", "--verbose", action="store_true", help="Enable verbose output")

    @classmethod
    def register(cls, name: str, help: str, args: list | None = None):
        """Decorator to register command"""
        def decorator(plugin_cls):
            if cls.parser is None:
                cls.init_parser()

            if name in cls._plugins:
                raise ValueError(f"Command '{name}' already registered")

            if help:
                cls.parser.description = help  # type: ignore
            for add_arg in args or []:
                add_arg(cls.parser)

            cls._plugins[name] = plugin_cls
            return plugin_cls
        return decorator

    @classmethod
    def get_command(cls, cmd: str):
        """Get command class by name"""
        return cls._plugins.get(cmd)

    @classmethod
    def parse_args(cls, argv=None, defaults: Optional[Dict[str, Any]] = None):
        """Parse command line arguments on top of configured defaults"""
        if cls.parser is None:
            cls.init_parser()
        if defaults:
            cls.parser.set_defaults(**defaults)  # type: ignore
        return cls.parser.parse_args(argv)  # type: ignore
