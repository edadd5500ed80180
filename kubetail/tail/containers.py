"""Expand pods into the containers to tail"""
from typing import Iterable, List, Sequence

from ..core.kubectl import KubeCommand
from ..core.logger import Logger
from .models import ContainerRef, Target


class ContainerExpander:
    """Pick containers per pod

    An explicit container list is trusted as given unless validate is set;
    an empty list means every container the pod declares.
    """

    def __init__(self, kube: KubeCommand, containers: Sequence[str] = (), validate: bool = False):
        self.kube = kube
        self.containers = list(containers)
        self.validate = validate

    def expand(self, target: Target) -> List[ContainerRef]:
        if self.containers and not self.validate:
            return [ContainerRef(target, name) for name in self.containers]

        available = self.kube.with_context(target.context).get_containers(target.pod_name)
        if not self.containers:
            return [ContainerRef(target, name) for name in available]

        refs = []
        for name in self.containers:
            if name in available:
                refs.append(ContainerRef(target, name))
            else:
                Logger.warn(f"Pod {target.pod_name} has no container '{name}', skipping")
        return refs

    def expand_all(self, targets: Iterable[Target]) -> List[ContainerRef]:
        refs: List[ContainerRef] = []
        for target in targets:
            refs.extend(self.expand(target))
        return refs
