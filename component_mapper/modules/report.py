# component_mapper/modules/report.py
"""
Text rendering for DependencyGraph results.

describe() turns a result record into the lines a user sees; Reporter prints
them through a rich console. Keeping the wording here leaves the graph free
of any output.
"""

from __future__ import annotations
from typing import Iterable, List, Tuple, Union

from rich.console import Console
from rich.table import Table

from component_mapper.modules.results import (
    DeclareResult,
    InstallResult,
    RemoveResult,
    ResolveResult,
    Status,
)

Result = Union[DeclareResult, InstallResult, RemoveResult, ResolveResult]

STYLES = {
    Status.DECLARED: "cyan",
    Status.INSTALLED: "green",
    Status.REMOVED: "green",
    Status.ALREADY_INSTALLED: "yellow",
    Status.ALREADY_DECLARED: "yellow",
    Status.STILL_NEEDED: "yellow",
    Status.NOT_INSTALLED: "yellow",
    Status.INVALID: "red",
    Status.CIRCULAR_DEPENDENCY: "red",
}


def _join(names) -> str:
    return " ".join(names or ())


def _cycle_lines(cycles) -> List[str]:
    return [f"Circular dependency: {' -> '.join(c)}" for c in cycles]


def describe_declare(result: DeclareResult) -> List[str]:
    if result.status is Status.INVALID:
        return [f"Invalid dependency definition. Ignoring command. Component: {result.component}"]
    if result.status is Status.ALREADY_DECLARED:
        return [f"Dependency already defined. Ignoring command. Component: {result.component}, "
                f"Dependencies: {_join(result.dependencies)}"]
    if result.status is Status.CIRCULAR_DEPENDENCY:
        return [f"Circular dependency. Ignoring command. Component: {result.component}, "
                f"Dependencies: {_join(result.dependencies)}"]
    # successful declarations are silent
    return []


def describe_install(result: InstallResult) -> List[str]:
    if result.status is Status.INVALID:
        return ["Invalid component. Ignoring command."]
    if result.status is Status.CIRCULAR_DEPENDENCY:
        return [f"Cannot install {result.component}."] + _cycle_lines(result.cycles)

    lines = []
    for step in result.steps:
        if step.status is Status.ALREADY_INSTALLED:
            lines.append(f"{step.component} is already installed.")
        else:
            lines.append(f"Installing {step.component}")
    return lines


def describe_remove(result: RemoveResult) -> List[str]:
    if result.status is Status.INVALID:
        return ["Invalid component. Ignoring command."]
    if result.status is Status.NOT_INSTALLED:
        return [f"{result.component} is not installed."]
    if result.status is Status.STILL_NEEDED:
        return [f"{result.component} is still needed."]
    return [f"Removing {result.component}"]


def describe_resolve(result: ResolveResult) -> List[str]:
    lines = [f"Install order for {result.component}: {_join(result.order)}"]
    return lines + _cycle_lines(result.cycles)


def describe(result: Result) -> List[str]:
    if isinstance(result, DeclareResult):
        return describe_declare(result)
    if isinstance(result, InstallResult):
        return describe_install(result)
    if isinstance(result, RemoveResult):
        return describe_remove(result)
    if isinstance(result, ResolveResult):
        return describe_resolve(result)
    raise TypeError(f"Unsupported result type: {type(result).__name__}")


def describe_installed(pairs: Iterable[Tuple[str, int]]) -> List[str]:
    return [f"{name} {count}" for name, count in pairs]


class Reporter:
    def __init__(self, console: Console = None, table: bool = False):
        self.console = console or Console()
        self.table = table

    def _style(self, result: Result):
        status = getattr(result, "status", None)
        if status is None:
            return "red" if result.cycles else "cyan"
        return STYLES.get(status)

    def emit(self, result: Result):
        style = self._style(result)
        for line in describe(result):
            self.console.print(line, style=style, markup=False, highlight=False)

    def show_installed(self, pairs: Iterable[Tuple[str, int]]):
        pairs = list(pairs)
        if not self.table:
            for line in describe_installed(pairs):
                self.console.print(line, markup=False, highlight=False)
            return

        tbl = Table(title="Installed components")
        tbl.add_column("Component", style="bold")
        tbl.add_column("References", justify="right")
        for name, count in pairs:
            tbl.add_row(name, str(count))
        self.console.print(tbl)
