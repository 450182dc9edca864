from archscope.graph import calculate_file_importance, summarize_health
from archscope.types import (
    AnalysisResult,
    Cluster,
    ComponentData,
    ComponentRecord,
    DependencyGraph,
    ExecutionContext,
    ImportEdge,
    NodeKind,
    SourceNode,
)


def make_graph(edge_pairs, node_ids):
    nodes = [SourceNode(id=n, display_name=n, directory="lib", kind=NodeKind.LIB) for n in node_ids]
    edges = [ImportEdge(s, t) for s, t in edge_pairs]
    return DependencyGraph(nodes=nodes, edges=edges, clusters=[
        Cluster(id="lib", label="lib", node_ids=list(node_ids)),
    ], project_path="/p", generated_at="t")


class TestFileImportance:
    """Test fan-in/fan-out metrics."""

    def test_hub_and_leaf(self):
        importers = [f"user{i}" for i in range(5)]
        graph = make_graph([(u, "core") for u in importers], importers + ["core", "orphan"])

        importance = {i.node_id: i for i in calculate_file_importance(graph)}

        assert importance["core"].imported_by_count == 5
        assert importance["core"].is_hub
        assert importance["core"].impact_score == 50
        assert importance["user0"].imports_count == 1
        assert importance["user0"].impact_score == 2
        assert importance["orphan"].is_leaf
        assert importance["orphan"].file == "lib/orphan"

    def test_sorted_by_impact_and_capped(self):
        importers = [f"n{i}" for i in range(12)]
        graph = make_graph([(u, "core") for u in importers], importers + ["core"])

        importance = calculate_file_importance(graph)

        assert importance[0].node_id == "core"
        assert importance[0].impact_score == 100
        scores = [i.impact_score for i in importance]
        assert scores == sorted(scores, reverse=True)


class TestHealth:
    """Test codebase health summary."""

    def test_empty_result(self):
        result = AnalysisResult(project_path="/p", project_name="p", generated_at="t")
        health = summarize_health(result)

        assert health.total_files == 0
        assert health.complexity == "simple"
        assert health.organization == "excellent"
        assert health.hub_files == [] and health.largest_files == []

    def test_summary(self):
        graph = make_graph([("a", "b")], ["a", "b", "c"])
        components = ComponentData(components=[
            ComponentRecord("Big", "components/Big.tsx", "components",
                            ExecutionContext.INTERACTIVE, [], 600),
            ComponentRecord("Small", "components/Small.tsx", "components",
                            ExecutionContext.NON_INTERACTIVE, [], 10),
        ], directories=[], project_path="/p", generated_at="t")
        result = AnalysisResult(project_path="/p", project_name="p", generated_at="t",
                                components=components, dependency_graph=graph)

        health = summarize_health(result).to_dict()

        assert health["totalFiles"] == 3
        assert health["totalLines"] == 610
        assert health["totalComponents"] == 2
        assert health["isolatedFiles"] == ["lib/c"]
        assert health["largestFiles"][0] == {"file": "components/Big.tsx", "lines": 600}
