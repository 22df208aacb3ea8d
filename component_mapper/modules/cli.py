# component_mapper/modules/cli.py
"""
Command loop for the component mapper.

Reads one command per line from a script file or stdin and feeds it to a
DependencyGraph, printing each command followed by its report:

  DEPEND <name> <dep> [<dep> ...]   declare direct dependencies
  INSTALL <name>                    install with dependencies
  REMOVE <name>                     remove if no longer needed
  ORDER <name>                      show the install order without installing
  LIST                              show installed components and counts
  END                               stop reading

Verbs are case-insensitive; blank lines and lines starting with '#' are skipped.

Usage examples:
  component-mapper commands.txt
  component-mapper --table --verbose < commands.txt
"""

from __future__ import annotations
import argparse
import os
import sys
import traceback
from typing import Iterable, List, Optional, TextIO

from rich.console import Console

from component_mapper.modules import graph as graph_mod
from component_mapper.modules import logger
from component_mapper.modules.config import config
from component_mapper.modules.graph import DependencyGraph
from component_mapper.modules.report import Reporter

LOG = logger.Logger("cli")


def make_console(no_color: bool, quiet: bool) -> Console:
    if no_color:
        return Console(color_system=None, force_terminal=False, markup=False, quiet=quiet)
    return Console(quiet=quiet)


class CLI:
    def __init__(self, console: Console, graph: Optional[DependencyGraph] = None, table: bool = False):
        self.console = console
        self.graph = graph if graph is not None else DependencyGraph()
        self.reporter = Reporter(console=console, table=table)
        self.commands = {
            "DEPEND": self.cmd_depend,
            "INSTALL": self.cmd_install,
            "REMOVE": self.cmd_remove,
            "LIST": self.cmd_list,
            "ORDER": self.cmd_order,
        }

    # -----------------------
    # commands
    # -----------------------
    def cmd_depend(self, args: List[str]):
        if not args:
            self.reporter.emit(self.graph.declare(None, None))
            return
        self.reporter.emit(self.graph.declare(args[0], args[1:]))

    def cmd_install(self, args: List[str]):
        self.reporter.emit(self.graph.install(args[0] if args else None))

    def cmd_remove(self, args: List[str]):
        self.reporter.emit(self.graph.remove(args[0] if args else None))

    def cmd_list(self, args: List[str]):
        self.reporter.show_installed(self.graph.list_installed())

    def cmd_order(self, args: List[str]):
        if not args:
            self.console.print("Invalid component. Ignoring command.", style="red", markup=False)
            return
        self.reporter.emit(self.graph.resolve_install_order(args[0]))

    # -----------------------
    # loop
    # -----------------------
    def execute(self, line: str) -> bool:
        """Run one command line. Returns False once END is read."""
        line = line.strip()
        if not line or line.startswith("#"):
            return True

        self.console.print(line, style="bold", markup=False, highlight=False)
        verb, *args = line.split()
        verb = verb.upper()
        if verb == "END":
            return False

        handler = self.commands.get(verb)
        if handler is None:
            self.console.print(f"Unknown command: {verb}. Ignoring command.", style="red", markup=False)
            LOG.debug(f"Unknown command line: {line!r}")
            return True

        handler(args)
        return True

    def run(self, lines: Iterable[str]) -> int:
        for line in lines:
            if not self.execute(line):
                break
        return 0


# -----------------------
# CLI wiring and argparse setup
# -----------------------
def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="component-mapper", description="Component dependency mapper")
    ap.add_argument("script", nargs="?", help="File with one command per line (default: stdin)")
    ap.add_argument("--no-color", action="store_true", help="Disable color output")
    ap.add_argument("--quiet", action="store_true", help="Quiet mode; no report output")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log graph decisions")
    ap.add_argument("--conf", help="Path to component-mapper.conf")
    ap.add_argument("--table", action="store_true", help="Render LIST as a table")
    ap.add_argument("--per-component-release", action="store_true",
                    help="On REMOVE, release dependencies of the removed component whenever it declares any")
    return ap


def _open_script(path: Optional[str]) -> TextIO:
    if not path or path == "-":
        return sys.stdin
    return open(path, "r", encoding="utf-8")


def main(argv: Optional[List[str]] = None):
    argv = argv if argv is not None else sys.argv[1:]
    args = build_argparser().parse_args(argv)

    if args.conf:
        config.locations = [os.path.abspath(args.conf)]
        config.reload()
    level = "debug" if args.verbose else config.get("logging", "level", fallback="info")
    LOG.set_level(level)
    graph_mod.LOG.set_level(level)

    console = make_console(args.no_color, args.quiet)
    table = args.table or config.getboolean("cli", "table", fallback=False)
    release = True if args.per_component_release else None
    graph = DependencyGraph(per_component_release=release)

    cli = CLI(console=console, graph=graph, table=table)
    try:
        stream = _open_script(args.script)
        try:
            return cli.run(stream)
        finally:
            if stream is not sys.stdin:
                stream.close()
    except OSError as e:
        console.print(f"Cannot read {args.script}: {e}", style="red", markup=False)
        return 2
    except Exception as e:
        console.print(f"Unhandled CLI error: {e}", style="red", markup=False)
        LOG.error(traceback.format_exc())
        return 3


if __name__ == "__main__":
    raise SystemExit(main())
