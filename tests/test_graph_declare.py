from component_mapper.modules.results import Status


def test_declare_stores_dependencies_in_order(graph):
    res = graph.declare("App", ["Lib2", "Lib1", "Lib2"])
    assert res.status is Status.DECLARED
    assert graph.dependencies_of("App") == ("Lib2", "Lib1", "Lib2")


def test_declare_keeps_first_definition(graph):
    graph.declare("App", ["Lib1"])
    res = graph.declare("App", ["Lib2"])
    assert res.status is Status.ALREADY_DECLARED
    assert graph.dependencies_of("App") == ("Lib1",)


def test_declare_rejects_invalid_input(graph):
    assert graph.declare("", ["A"]).status is Status.INVALID
    assert graph.declare(None, ["A"]).status is Status.INVALID
    assert graph.declare("A", None).status is Status.INVALID
    assert len(graph) == 0


def test_empty_dependency_list_is_valid(graph):
    assert graph.declare("A", []).status is Status.DECLARED
    assert graph.dependencies_of("A") == ()


def test_declare_rejects_immediate_cycle(graph):
    graph.declare("A", ["B"])
    res = graph.declare("B", ["A"])
    assert res.status is Status.CIRCULAR_DEPENDENCY
    assert graph.dependencies_of("B") is None
    assert graph.components() == ["A"]


def test_cycle_check_looks_up_dependency_keys_exactly(graph):
    graph.declare("A", ["b"])
    # "a" is not a declared key ("A" is), so nothing is compared
    assert graph.declare("B", ["a"]).status is Status.DECLARED
    assert graph.dependencies_of("B") == ("a",)


def test_cycle_check_matches_name_case_insensitively(graph):
    graph.declare("Core", ["app"])
    assert graph.declare("App", ["Core"]).status is Status.CIRCULAR_DEPENDENCY


def test_deeper_cycles_are_accepted_at_declaration(graph):
    graph.declare("A", ["B"])
    graph.declare("B", ["C"])
    assert graph.declare("C", ["A"]).status is Status.DECLARED


def test_dependencies_need_not_exist(graph):
    graph.declare("A", ["Missing"])
    assert "Missing" not in graph.components()
    assert "Missing" not in graph
