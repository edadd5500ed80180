"""Tail logs from every container of every matching pod"""
import sys
from typing import Optional, TextIO

from ..core.colors import Colors, Palette
from ..core.decorators import Command, arg
from ..core.errors import OptionError
from ..core.kubectl import KubeCommand
from ..core.logger import Logger
from ..tail.aggregator import Aggregator
from ..tail.allocator import ColorAllocator
from ..tail.containers import ContainerExpander
from ..tail.launcher import COLOR_MODES, LaunchOptions, StreamLauncher
from ..tail.lifecycle import LifecycleManager
from ..tail.matcher import MATCH_MODES, TargetMatcher
from ..utils.parsers import parse_bool, parse_color_indices, parse_csv
from ..utils.validators import (validate_color_indices, validate_namespace,
                                validate_since, validate_tail)


@Command.register("tail", help="Tail logs from multiple pods and containers at once", args=[
    arg("query", nargs="?", help="Pod name, comma-separated names, or pattern"),
    arg("-l", "--selector", help="Label selector; the query is ignored when set"),
    arg("-c", "--container", action="append", default=[],
        help="Container name (repeatable, default: all containers)"),
    arg("-t", "--context", help="Comma-separated kubectl contexts"),
    arg("-n", "--namespace", help="Kubernetes namespace"),
    arg("-s", "--since", help="Only logs newer than a relative duration like 10s, 5m or 1h"),
    arg("--tail", type=int, help="Lines of recent log per source, -1 for all"),
    arg("-b", "--line-buffered", action="store_true", help="Flush output after every line"),
    arg("-e", "--regex", choices=MATCH_MODES, help="Match the query as substring or pattern"),
    arg("-j", "--jq", help="jq expression applied to each JSON log record"),
    arg("-k", "--colored-output", choices=COLOR_MODES, help="Color the pod label, the line, or nothing"),
    arg("-z", "--skip-colors", help="Comma-separated color indices to skip"),
    arg("--timestamps", action="store_true", help="Include timestamps"),
    arg("-d", "--dry-run", action="store_true", help="Print matching pods and containers, then exit"),
    arg("-p", "--previous", action="store_true", help="Logs of the previous container instance"),
    arg("-f", "--follow", choices=["true", "false"], help="Keep streaming new logs"),
    arg("--no-prefix", action="store_true", help="Do not prefix lines with pod and container"),
    arg("-i", "--show-color-index", action="store_true", help="Show the color index in the prefix"),
    arg("--validate-containers", action="store_true",
        help="Skip containers that a pod does not declare"),
])
class TailCommand:
    """Resolve pods, then stream and merge their logs"""

    def __init__(self, kube: KubeCommand, sink: Optional[TextIO] = None,
                 palette: Optional[Palette] = None):
        self.kube = kube
        self.sink = sink or sys.stdout
        self.palette = palette
        self.lifecycle: Optional[LifecycleManager] = None

    @staticmethod
    def palette_size(args) -> int:
        return getattr(args, "palette_size", 256)

    @staticmethod
    def check(result: tuple, option: str):
        ok, message = result
        if not ok:
            raise OptionError(f"{option}: {message}")

    def validate(self, args):
        self.check(validate_namespace(self.kube.namespace), "--namespace")
        self.check(validate_since(args.since), "--since")
        self.check(validate_tail(args.tail), "--tail")
        if args.regex not in MATCH_MODES:
            raise OptionError(f"--regex: invalid mode '{args.regex}'")
        if args.colored_output not in COLOR_MODES:
            raise OptionError(f"--colored-output: invalid mode '{args.colored_output}'")
        try:
            skip = parse_color_indices(args.skip_colors)
        except ValueError as e:
            raise OptionError(f"--skip-colors: {e}") from e
        self.check(validate_color_indices(skip, self.palette_size(args)), "--skip-colors")
        return skip

    def execute(self, args) -> int:
        skip_colors = self.validate(args)
        contexts = parse_csv(args.context)
        with_context = len(contexts) > 1

        if args.colored_output == "false":
            Colors.disable()
        palette = self.palette or Palette()

        targets = TargetMatcher(self.kube, contexts).match(
            args.query, args.regex, args.selector)
        refs = ContainerExpander(
            self.kube, args.container, args.validate_containers).expand_all(targets)
        if not refs:
            Logger.error("No containers left to tail")
            return 1

        allocator = ColorAllocator(skip_colors, self.palette_size(args))
        assignments = allocator.assign(refs, enabled=args.colored_output != "false")

        aggregator = Aggregator(self.sink, args.line_buffered, palette, with_context)
        aggregator.preview(assignments)
        if args.dry_run:
            return 0

        options = LaunchOptions(
            since=args.since,
            tail=args.tail,
            timestamps=args.timestamps,
            follow=parse_bool(args.follow),
            previous=args.previous,
            jq=args.jq,
            line_buffered=args.line_buffered,
            colored_output=args.colored_output,
            prefix=not args.no_prefix,
            show_color_index=args.show_color_index,
            with_context=with_context,
        )

        with LifecycleManager() as lifecycle:
            self.lifecycle = lifecycle.install()
            try:
                handles = StreamLauncher(self.kube, options, lifecycle, palette).launch_all(assignments)
                errors = aggregator.stream(handles, lifecycle)
            except KeyboardInterrupt:
                Logger.info(f"Stopping {len(lifecycle.processes)} log stream process(es)")
                return 0

        for error in errors:
            Logger.warn(str(error))
        if errors and len(errors) == len(handles):
            return 1
        return 0
