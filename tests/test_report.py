import pytest

from conftest import output_of
from component_mapper.modules import report
from component_mapper.modules.results import (
    DeclareResult,
    InstallResult,
    InstallStep,
    RemoveResult,
    ResolveResult,
    Status,
)


def test_successful_declaration_is_silent():
    assert report.describe(DeclareResult("A", ("B",), Status.DECLARED)) == []


@pytest.mark.parametrize("status, fragment", [
    (Status.INVALID, "Invalid dependency definition"),
    (Status.ALREADY_DECLARED, "already defined"),
    (Status.CIRCULAR_DEPENDENCY, "Circular dependency"),
])
def test_declaration_failures_have_distinct_messages(status, fragment):
    lines = report.describe(DeclareResult("A", ("B", "C"), status))
    assert len(lines) == 1
    assert fragment in lines[0]


def test_install_steps_are_reported_in_order(app_graph):
    lines = report.describe(app_graph.install("App"))
    assert lines == ["Installing Lib1", "Installing Lib2", "Installing App"]
    assert report.describe(app_graph.install("App")) == ["App is already installed."]


def test_install_cycle_lists_the_loop():
    res = InstallResult("A", Status.CIRCULAR_DEPENDENCY, cycles=[["A", "B", "A"]])
    lines = report.describe(res)
    assert lines[0] == "Cannot install A."
    assert lines[1] == "Circular dependency: A -> B -> A"


@pytest.mark.parametrize("status, expected", [
    (Status.INVALID, "Invalid component. Ignoring command."),
    (Status.NOT_INSTALLED, "App is not installed."),
    (Status.STILL_NEEDED, "App is still needed."),
    (Status.REMOVED, "Removing App"),
])
def test_remove_messages(status, expected):
    assert report.describe(RemoveResult("App", status)) == [expected]


def test_resolve_message():
    lines = report.describe(ResolveResult("App", order=["Lib", "App"]))
    assert lines == ["Install order for App: Lib App"]


def test_unknown_result_type():
    with pytest.raises(TypeError):
        report.describe(object())


def test_reporter_prints_lines(console):
    r = report.Reporter(console=console)
    r.emit(InstallResult("App", Status.INSTALLED, steps=[InstallStep("App", Status.INSTALLED, 1)]))
    r.show_installed([("App", 1), ("Lib", 2)])
    assert output_of(console).splitlines() == ["Installing App", "App 1", "Lib 2"]


def test_reporter_table(console):
    r = report.Reporter(console=console, table=True)
    r.show_installed([("App", 1)])
    out = output_of(console)
    assert "Installed components" in out
    assert "App" in out
