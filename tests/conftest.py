import io
import os
import sys

import pytest
from rich.console import Console

# make the package importable without installing it
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from component_mapper.modules.graph import DependencyGraph


@pytest.fixture
def graph():
    return DependencyGraph(per_component_release=False)


@pytest.fixture
def app_graph(graph):
    """App -> [Lib1, Lib2], both libraries declared with no dependencies."""
    graph.declare("App", ["Lib1", "Lib2"])
    graph.declare("Lib1", [])
    graph.declare("Lib2", [])
    return graph


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)


def output_of(console):
    return console.file.getvalue()
