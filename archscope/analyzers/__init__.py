"""
Text-scanning extractors for routes, components and schema entities.
"""

from .component_analyzer import ComponentAnalyzer
from .route_analyzer import RouteAnalyzer
from .schema_parser import SchemaAnalyzer, SchemaParser, infer_relationships

__all__ = [
    'ComponentAnalyzer',
    'RouteAnalyzer',
    'SchemaAnalyzer',
    'SchemaParser',
    'infer_relationships',
]
