# component_mapper/modules/resolver.py
from __future__ import annotations
from typing import Iterable, List, Mapping, Sequence, Set

from component_mapper.modules.results import ResolveResult

_DONE = object()


class DependencyResolver:
    """
    Works out install orders over a dependency table.

    The table maps a component to the ordered tuple of its direct
    dependencies. A dependency does not need its own entry: an unknown name
    is a leaf. The resolver only reads the table; it never changes it.
    """

    def __init__(self, dependencies: Mapping[str, Sequence[str]]):
        self.dependencies = dependencies

    def resolve(self, component: str) -> ResolveResult:
        """
        Depth-first expansion of `component`: every direct dependency, in
        declared order, is expanded before the component itself is queued.
        A component already queued is never queued again, so diamonds
        collapse to a single entry.

        A dependency that is still on the expansion stack closes a cycle.
        The cycle is recorded on the result and that edge is not followed.
        """
        result = ResolveResult(component=component)
        self._expand(component, result, set())
        return result

    def _expand(self, component: str, result: ResolveResult, queued: Set[str]):
        # explicit stack of (component, remaining deps) frames; `path` mirrors it in order
        path = [component]
        visiting = {component}
        frames = [(component, iter(self.dependencies.get(component, ())))]
        while frames:
            current, deps = frames[-1]
            dep = next(deps, _DONE)
            if dep is _DONE:
                frames.pop()
                path.pop()
                visiting.discard(current)
                if current not in queued:
                    queued.add(current)
                    result.order.append(current)
                continue

            if dep in visiting:
                cycle = path[path.index(dep):] + [dep]
                if cycle not in result.cycles:
                    result.cycles.append(cycle)
                continue
            if dep in queued:
                continue
            path.append(dep)
            visiting.add(dep)
            frames.append((dep, iter(self.dependencies.get(dep, ()))))

    def find_missing(self, component: str, installed: Iterable[str]) -> List[str]:
        """Components from the install order of `component` that are not installed yet."""
        present = set(installed)
        return [c for c in self.resolve(component).order if c not in present]

    def find_reverse_dependencies(self, component: str) -> List[str]:
        """Declared components listing `component` as a direct dependency."""
        return [name for name, deps in self.dependencies.items() if component in deps]

    def topo_sort(self) -> List[str]:
        """Install order for every declared component, cyclic edges skipped."""
        result = ResolveResult(component="*")
        queued: Set[str] = set()
        for name in list(self.dependencies):
            if name not in queued:
                self._expand(name, result, queued)
        return result.order

    def detect_cycles(self) -> List[List[str]]:
        """Distinct cycles found by expanding each declared component in turn."""
        cycles: List[List[str]] = []
        seen = set()
        for name in list(self.dependencies):
            for cycle in self.resolve(name).cycles:
                key = _normalize(cycle)
                if key not in seen:
                    seen.add(key)
                    cycles.append(cycle)
        return cycles


def _normalize(cycle: List[str]):
    # a cycle [a, b, c, a] and its rotation [b, c, a, b] are the same loop
    ring = cycle[:-1]
    start = min(range(len(ring)), key=lambda i: ring[i])
    return tuple(ring[start:] + ring[:start])
