import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from ..analyzers.patterns import extract_local_imports
from ..config import settings
from ..scanner import ProjectScanner, node_kind, read_text, relative_posix
from ..types import Cluster, DependencyGraph, ImportEdge, SourceNode
from ..utils.logger import app_logger


# Appended to an import target, first existing file wins
RESOLUTION_SUFFIXES = (
    '', '.ts', '.tsx', '.js', '.jsx',
    '/index.ts', '/index.tsx', '/index.js', '/index.jsx',
)

WRAPPER_SEGMENTS = {'src', 'app'}


def base_node_id(relative_path: str) -> str:
    """`lib/utils/format.ts` -> `lib_utils_format`."""
    return re.sub(r"\.[^.]+$", "", re.sub(r"[/\\]", "_", relative_path))


def cluster_label(directory: str) -> str:
    """Last two meaningful directory segments, ignoring `src`/`app` wrappers."""
    parts = [p for p in directory.split('/') if p and p != '.']
    meaningful = [p for p in parts if p not in WRAPPER_SEGMENTS][-2:]
    return '/'.join(meaningful) or 'root'


def resolve_import(target: str, from_file: Path, project_path: Path, alias_prefix: str) -> Optional[str]:
    """Resolve an import specifier to an existing file path, or None."""
    if alias_prefix and target.startswith(alias_prefix):
        base = os.path.join(str(project_path), target[len(alias_prefix):])
    else:
        base = os.path.join(str(from_file.parent), target)
    base = os.path.normpath(base)

    for suffix in RESOLUTION_SUFFIXES:
        candidate = base + suffix
        if os.path.isfile(candidate):
            return candidate
    return None


class DependencyGraphBuilder:
    """Builds the file-level import graph of a project."""

    def __init__(self, project_path: str, max_files: Optional[int] = None,
                 alias_prefix: Optional[str] = None, scanner: ProjectScanner = None):
        self.project_path = Path(project_path).resolve()
        self.alias_prefix = settings.alias_prefix if alias_prefix is None else alias_prefix
        self.scanner = scanner or ProjectScanner(str(self.project_path), max_files=max_files)
        self.logger = app_logger.bind(component="dependency_graph")

    def _create_nodes(self, source_files: List[Path]) -> Dict[str, SourceNode]:
        """Create one node per file, keyed by normalised absolute path."""
        nodes: Dict[str, SourceNode] = {}
        used_ids = set()

        for file_path in source_files:
            relative_path = relative_posix(file_path, self.project_path)
            node_id = base_node_id(relative_path)
            if node_id in used_ids:
                # lib/a.ts and lib/a.tsx share a base id
                node_id = f"{node_id}_{file_path.suffix.lstrip('.')}"
                counter = 2
                while node_id in used_ids:
                    node_id = f"{base_node_id(relative_path)}_{file_path.suffix.lstrip('.')}_{counter}"
                    counter += 1
            used_ids.add(node_id)

            nodes[os.path.normpath(str(file_path))] = SourceNode(
                id=node_id,
                display_name=file_path.stem,
                directory=Path(relative_path).parent.as_posix(),
                kind=node_kind(relative_path),
            )

        return nodes

    def _create_edges(self, nodes: Dict[str, SourceNode]) -> List[ImportEdge]:
        edges: Dict[ImportEdge, None] = {}

        for file_key, source in nodes.items():
            content = read_text(Path(file_key))
            if content is None:
                continue

            for target in extract_local_imports(content, self.alias_prefix):
                resolved = resolve_import(target, Path(file_key), self.project_path, self.alias_prefix)
                if resolved is None:
                    continue
                target_node = nodes.get(resolved)
                if target_node is None or target_node.id == source.id:
                    continue
                edges.setdefault(ImportEdge(source.id, target_node.id), None)

        return list(edges)

    def _create_clusters(self, nodes: List[SourceNode]) -> List[Cluster]:
        members: Dict[str, List[str]] = {}
        for node in nodes:
            members.setdefault(cluster_label(node.directory), []).append(node.id)

        clusters = [
            Cluster(id=label.replace('/', '_'), label=label, node_ids=node_ids)
            for label, node_ids in members.items()
            if len(node_ids) > 1
        ]
        clusters.sort(key=lambda c: (-len(c.node_ids), c.label))
        return clusters

    def build(self) -> DependencyGraph:
        source_files = self.scanner.collect_source_files()
        nodes = self._create_nodes(source_files)
        edges = self._create_edges(nodes)
        node_list = list(nodes.values())
        clusters = self._create_clusters(node_list)

        self.logger.info(
            f"Built graph with {len(node_list)} nodes, {len(edges)} edges, {len(clusters)} clusters"
        )

        return DependencyGraph(
            nodes=node_list,
            edges=edges,
            clusters=clusters,
            project_path=str(self.project_path),
            generated_at=datetime.now(timezone.utc).isoformat(),
        )
