# component_mapper/modules/graph.py
"""
DependencyGraph: declared dependency edges plus a reference-counted table of
installed components.

- declare()          -> registers `name -> dependencies` once; rejects 1-hop cycles
- install()          -> resolves the install order and installs it front to back
- remove()           -> drops a component whose count is 1 and releases its dependencies
- list_installed()   -> lazy (component, count) pairs in install order

Every public operation holds one lock over both tables, since install and
remove read and then write across them.
"""

from __future__ import annotations
import threading
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from component_mapper.modules import logger
from component_mapper.modules.config import config
from component_mapper.modules.resolver import DependencyResolver
from component_mapper.modules.results import (
    DeclareResult,
    InstallResult,
    InstallStep,
    RemoveResult,
    ResolveResult,
    Status,
)

LOG = logger.Logger("graph")


class DependencyGraph:
    def __init__(self, per_component_release: Optional[bool] = None):
        """
        per_component_release: when True, removing a component releases its
        dependencies whenever it has declared ones. The default (False, or the
        `[graph] per_component_release` setting) only releases them while more
        than one component is declared in the whole graph.
        """
        self._dependencies: Dict[str, Tuple[str, ...]] = {}
        self._installed: Dict[str, int] = {}
        self._lock = threading.RLock()
        self.resolver = DependencyResolver(self._dependencies)
        if per_component_release is None:
            per_component_release = config.getboolean("graph", "per_component_release", fallback=False)
        self.per_component_release = per_component_release

    # -------------------------
    # Declaration
    # -------------------------
    def declare(self, name: Optional[str], dependencies: Optional[Sequence[str]]) -> DeclareResult:
        if not name or dependencies is None:
            LOG.debug(f"Invalid declaration ignored: {name!r} -> {dependencies!r}")
            return DeclareResult(name or None, None, Status.INVALID)

        deps = tuple(dependencies)
        with self._lock:
            if name in self._dependencies:
                LOG.debug(f"{name} already declared as {self._dependencies[name]}; ignoring {deps}")
                return DeclareResult(name, deps, Status.ALREADY_DECLARED)

            folded = name.casefold()
            for dep in deps:
                if any(c.casefold() == folded for c in self._dependencies.get(dep, ())):
                    LOG.debug(f"Circular dependency: {dep} already depends on {name}")
                    return DeclareResult(name, deps, Status.CIRCULAR_DEPENDENCY)

            self._dependencies[name] = deps
            LOG.debug(f"Declared {name} -> {list(deps)}")
            return DeclareResult(name, deps, Status.DECLARED)

    # -------------------------
    # Resolution
    # -------------------------
    def resolve_install_order(self, name: str) -> ResolveResult:
        with self._lock:
            result = self.resolver.resolve(name)
        for cycle in result.cycles:
            LOG.debug(f"Cycle while resolving {name}: {' -> '.join(cycle)}")
        return result

    # -------------------------
    # Install / remove
    # -------------------------
    def install(self, name: Optional[str]) -> InstallResult:
        if not name:
            return InstallResult(name or None, Status.INVALID)

        with self._lock:
            resolved = self.resolve_install_order(name)
            if not resolved.ok:
                return InstallResult(name, Status.CIRCULAR_DEPENDENCY, cycles=resolved.cycles)

            order = resolved.order
            if name in self._installed:
                # a repeated request is counted on the component itself, dependencies are not walked again
                order = [name]

            result = InstallResult(name, Status.INSTALLED)
            for component in order:
                if component in self._installed:
                    # a satisfied link ends this request; the rest of the queue is left alone
                    self._installed[component] += 1
                    count = self._installed[component]
                    LOG.debug(f"{component} already installed, count now {count}")
                    result.steps.append(InstallStep(component, Status.ALREADY_INSTALLED, count))
                    break

                self._installed[component] = 1
                self._dependencies.setdefault(component, ())
                LOG.debug(f"Installed {component}")
                result.steps.append(InstallStep(component, Status.INSTALLED, 1))

            if name not in result.installed:
                result.status = Status.ALREADY_INSTALLED
            return result

    def remove(self, name: Optional[str]) -> RemoveResult:
        if not name:
            return RemoveResult(name or None, Status.INVALID)

        with self._lock:
            if not self._installed or name not in self._installed:
                return RemoveResult(name, Status.NOT_INSTALLED)

            if self._installed[name] > 1:
                LOG.debug(f"{name} still referenced {self._installed[name]} times")
                return RemoveResult(name, Status.STILL_NEEDED)

            result = RemoveResult(name, Status.REMOVED)
            if self._releases_dependencies(name):
                for dep in self._dependencies[name]:
                    if dep not in self._installed:
                        LOG.debug(f"{dep} is not installed; nothing to release for {name}")
                        continue
                    # no floor and no cascade: a dependency may sit at zero until removed explicitly
                    self._installed[dep] -= 1
                    result.released[dep] = self._installed[dep]

            del self._installed[name]
            LOG.debug(f"Removed {name}, released {result.released}")
            return result

    def _releases_dependencies(self, name: str) -> bool:
        if name not in self._dependencies:
            return False
        if self.per_component_release:
            return bool(self._dependencies[name])
        return len(self._dependencies) > 1

    # -------------------------
    # Queries
    # -------------------------
    def list_installed(self) -> Iterator[Tuple[str, int]]:
        with self._lock:
            snapshot = list(self._installed.items())
        yield from snapshot

    def dependencies_of(self, name: str) -> Optional[Tuple[str, ...]]:
        with self._lock:
            return self._dependencies.get(name)

    def reverse_dependencies(self, name: str) -> List[str]:
        with self._lock:
            return self.resolver.find_reverse_dependencies(name)

    def find_missing(self, name: str) -> List[str]:
        with self._lock:
            return self.resolver.find_missing(name, self._installed)

    def detect_cycles(self) -> List[List[str]]:
        with self._lock:
            return self.resolver.detect_cycles()

    def topo_sort(self) -> List[str]:
        with self._lock:
            return self.resolver.topo_sort()

    def components(self) -> List[str]:
        with self._lock:
            return list(self._dependencies)

    def is_installed(self, name: str) -> bool:
        with self._lock:
            return name in self._installed

    def install_count(self, name: str) -> int:
        with self._lock:
            return self._installed.get(name, 0)

    def __contains__(self, name) -> bool:
        with self._lock:
            return name in self._dependencies or name in self._installed

    def __len__(self) -> int:
        with self._lock:
            return len(self._dependencies)
