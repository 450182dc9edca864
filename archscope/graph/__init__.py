"""
Import dependency graph and metrics derived from it.
"""

from .dependency_graph import DependencyGraphBuilder, resolve_import
from .metrics import calculate_file_importance, summarize_health

__all__ = [
    'DependencyGraphBuilder',
    'resolve_import',
    'calculate_file_importance',
    'summarize_health',
]
