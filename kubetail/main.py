#!/usr/bin/env python3

"""
Kubetail - tail logs from multiple pods at once
"""

import os
import sys
from kubetail.core.config import TailConfig
from kubetail.core.decorators import Command
from kubetail.core.errors import KubeTailError
from kubetail.core.kubectl import KubeCommand
from kubetail.core.logger import Logger

# Import all commands to register them
from kubetail import commands


def silence_stdout():
    """Point stdout at /dev/null so the final flush does not raise again"""
    try:
        fileno = sys.stdout.fileno()
    except (AttributeError, OSError, ValueError):
        # Not backed by a file descriptor, nothing left to flush into a pipe
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fileno)


def main(argv=None) -> int:
    """Main entry point"""
    try:
        args = Command.parse_args(argv, defaults=TailConfig().load())
    except KubeTailError as e:
        Logger.error(str(e))
        return 1

    if not args.query and not args.selector:
        Command.parser.print_help()
        return 1

    kube = KubeCommand(
        namespace=args.namespace,
        verbose=args.verbose
    )

    command_class = Command.get_command("tail")

    try:
        return command_class(kube).execute(args)
    except KeyboardInterrupt:
        return 0
    except BrokenPipeError:
        silence_stdout()
        return 0
    except KubeTailError as e:
        Logger.error(str(e))
        return 1
    except Exception as e:
        Logger.error(f"Command failed: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
