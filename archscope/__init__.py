"""
archscope - static architecture analysis of web project source trees.

Extracts API routes, UI components, schema entities and the file import graph
from a project directory by pattern-based text scanning.
"""

from .analyzer import CodebaseAnalyzer, InvalidProjectPathError, analyze_codebase, validate_project_path

__version__ = "0.1.0"

__all__ = [
    'CodebaseAnalyzer',
    'InvalidProjectPathError',
    'analyze_codebase',
    'validate_project_path',
]
