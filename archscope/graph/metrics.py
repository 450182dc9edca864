"""
Structural metrics computed from an analysis result.
"""
from collections import Counter
from typing import List

from ..types import AnalysisResult, CodebaseHealth, DependencyGraph, FileImportance, SourceNode


HUB_THRESHOLD = 5


def _node_file(node: SourceNode) -> str:
    return f"{node.directory}/{node.display_name}"


def _import_counts(graph: DependencyGraph):
    imported_by = Counter(edge.target_node_id for edge in graph.edges)
    imports = Counter(edge.source_node_id for edge in graph.edges)
    return imported_by, imports


def calculate_file_importance(graph: DependencyGraph) -> List[FileImportance]:
    """Fan-in/fan-out per file, most impactful first."""
    imported_by, imports = _import_counts(graph)
    importance = []

    for node in graph.nodes:
        fan_in = imported_by[node.id]
        fan_out = imports[node.id]
        importance.append(FileImportance(
            file=_node_file(node),
            node_id=node.id,
            imported_by_count=fan_in,
            imports_count=fan_out,
            is_hub=fan_in >= HUB_THRESHOLD,
            is_leaf=fan_in == 0 and fan_out == 0,
            impact_score=min(100, fan_in * 10 + fan_out * 2),
        ))

    importance.sort(key=lambda i: (-i.impact_score, i.file))
    return importance


def _complexity(total_files: int, total_lines: int) -> str:
    if total_files > 200 or total_lines > 50000:
        return "very-complex"
    if total_files > 100 or total_lines > 20000:
        return "complex"
    if total_files > 50 or total_lines > 10000:
        return "moderate"
    return "simple"


def _organization(total_files: int, cluster_count: int) -> str:
    files_per_cluster = total_files / (cluster_count or 1)
    if files_per_cluster > 30:
        return "needs-work"
    if files_per_cluster > 20:
        return "fair"
    if files_per_cluster > 10:
        return "good"
    return "excellent"


def summarize_health(result: AnalysisResult) -> CodebaseHealth:
    graph = result.dependency_graph
    components = result.components.components if result.components else []

    total_files = len(graph.nodes) if graph else 0
    total_lines = sum(c.line_count for c in components)

    hub_files: List[str] = []
    isolated_files: List[str] = []
    if graph:
        imported_by, imports = _import_counts(graph)
        by_id = {node.id: node for node in graph.nodes}
        hubs = sorted(
            ((node_id, count) for node_id, count in imported_by.items() if count >= HUB_THRESHOLD),
            key=lambda item: (-item[1], item[0]),
        )
        hub_files = [_node_file(by_id[node_id]) for node_id, _ in hubs[:10]]
        isolated_files = [
            _node_file(node) for node in graph.nodes
            if node.id not in imported_by and node.id not in imports
        ][:10]

    largest = sorted(components, key=lambda c: (-c.line_count, c.path))[:5]

    return CodebaseHealth(
        total_files=total_files,
        total_lines=total_lines,
        total_components=len(components),
        total_routes=len(result.routes.routes) if result.routes else 0,
        total_entities=len(result.schema.entities) if result.schema else 0,
        complexity=_complexity(total_files, total_lines),
        organization=_organization(total_files, len(graph.clusters) if graph else 0),
        hub_files=hub_files,
        isolated_files=isolated_files,
        largest_files=[{"file": c.path, "lines": c.line_count} for c in largest],
    )
