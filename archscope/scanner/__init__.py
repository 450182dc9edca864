"""
Project traversal and file classification.
"""

from .project_scanner import (
    ProjectScanner,
    find_schema_file,
    is_component_file,
    is_route_handler,
    is_source_file,
    node_kind,
    read_text,
    relative_posix,
)

__all__ = [
    'ProjectScanner',
    'find_schema_file',
    'is_component_file',
    'is_route_handler',
    'is_source_file',
    'node_kind',
    'read_text',
    'relative_posix',
]
