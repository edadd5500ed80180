"""Start one kubectl log stream per container"""
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.colors import Palette
from ..core.errors import KubectlError
from ..core.kubectl import KubeCommand
from ..core.logger import Logger
from .lifecycle import LifecycleManager
from .models import ColorAssignment, StreamHandle

COLOR_MODES = ("pod", "line", "false")


@dataclass
class LaunchOptions:
    since: str = "10s"
    tail: int = -1
    timestamps: bool = False
    follow: bool = True
    previous: bool = False
    jq: Optional[str] = None
    jq_binary: str = "jq"
    line_buffered: bool = False
    colored_output: str = "line"
    prefix: bool = True
    show_color_index: bool = False
    with_context: bool = False


def jq_args(expression: str, binary: str = "jq", unbuffered: bool = False) -> List[str]:
    """jq reading raw lines, skipping the ones that are not JSON"""
    cmd = [binary, "-R", "-r"]
    if unbuffered:
        cmd.append("--unbuffered")
    cmd.append(f"fromjson? | {expression}")
    return cmd


def decorate(assignment: ColorAssignment, options: LaunchOptions, palette: Palette) -> tuple[str, str, str]:
    """Label of a source and the text to put before and after each of its lines"""
    index = assignment.color_index
    label = assignment.container_ref.display_name(options.with_context)
    if options.show_color_index and index is not None:
        label = f"{label} #{index}"

    if options.colored_output == "false":
        index = None

    tag = f"[{label}] " if options.prefix else ""
    start, end = palette.start(index), palette.end(index)

    if options.colored_output == "line":
        return label, f"{start}{tag}", end
    if tag:
        return label, f"{start}{tag.rstrip()}{end} ", ""
    return label, "", ""


class StreamLauncher:
    """Spawn kubectl logs (and jq) for each colored container"""

    def __init__(self, kube: KubeCommand, options: LaunchOptions,
                 lifecycle: LifecycleManager, palette: Optional[Palette] = None):
        if options.colored_output not in COLOR_MODES:
            raise ValueError(f"Invalid color mode '{options.colored_output}'")
        self.kube = kube
        self.options = options
        self.lifecycle = lifecycle
        self.palette = palette or Palette()

    def command(self, assignment: ColorAssignment) -> List[str]:
        ref = assignment.container_ref
        kube = self.kube.with_context(ref.target.context)
        kube.namespace = ref.target.namespace
        return kube.logs_args(
            ref.target.pod_name, ref.container_name,
            since=self.options.since,
            tail=self.options.tail,
            timestamps=self.options.timestamps,
            follow=self.options.follow,
            previous=self.options.previous,
        )

    def spawn(self, argv: List[str], **kwargs) -> subprocess.Popen:
        Logger.verbose_log(f"Running: {' '.join(argv)}")
        try:
            process = subprocess.Popen(argv, **kwargs)
        except FileNotFoundError as e:
            raise KubectlError(f"{argv[0]} not found in PATH") from e
        return self.lifecycle.track(process)

    def launch(self, assignment: ColorAssignment) -> StreamHandle:
        label, prefix, suffix = decorate(assignment, self.options, self.palette)
        text = dict(text=True, bufsize=1, errors="replace")

        if not self.options.jq:
            process = self.spawn(
                self.command(assignment), stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE, stderr=subprocess.STDOUT, **text)
            return StreamHandle(assignment.container_ref, process, assignment,
                                label, prefix, suffix)

        process = self.spawn(
            self.command(assignment), stdin=subprocess.DEVNULL, stdout=subprocess.PIPE)
        try:
            jq = self.spawn(
                jq_args(self.options.jq, self.options.jq_binary, self.options.line_buffered),
                stdin=process.stdout, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, **text)
        finally:
            # jq owns the read end now; kubectl gets SIGPIPE if jq exits
            process.stdout.close()
        return StreamHandle(assignment.container_ref, process, assignment,
                            label, prefix, suffix, pipeline=[jq])

    def launch_all(self, assignments: Sequence[ColorAssignment]) -> List[StreamHandle]:
        handles = [self.launch(assignment) for assignment in assignments]
        Logger.verbose_log(f"Started {len(handles)} log stream(s)")
        return handles
