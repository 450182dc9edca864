from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field
from enum import Enum


class HttpMethod(str, Enum):
    """HTTP methods recognised in route handler files."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class AuthTier(str, Enum):
    """Access-control tier inferred from route handler text."""
    PUBLIC = "public"
    PROTECTED = "protected"
    ADMIN = "admin"


class ExecutionContext(str, Enum):
    """Whether a UI component runs in the browser."""
    INTERACTIVE = "interactive"
    NON_INTERACTIVE = "non-interactive"


class NodeKind(str, Enum):
    """Coarse role of a source file in the dependency graph."""
    COMPONENT = "component"
    LIB = "lib"
    API = "api"
    PAGE = "page"
    OTHER = "other"


class Cardinality(str, Enum):
    """Multiplicity of a relationship between two schema entities."""
    ONE_TO_ONE = "one-to-one"
    ONE_TO_MANY = "one-to-many"
    MANY_TO_MANY = "many-to-many"


# ============================================
# Routes
# ============================================

@dataclass
class RouteRecord:
    """One exported HTTP method of one route handler file."""
    path: str
    method: HttpMethod
    feature: str
    auth_tier: AuthTier
    source_file: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "path": self.path,
            "method": self.method.value,
            "feature": self.feature,
            "authTier": self.auth_tier.value,
            "sourceFile": self.source_file,
        }


@dataclass
class RouteData:
    """Routes found in a project."""
    routes: List[RouteRecord]
    project_path: str
    generated_at: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "routes": [route.to_dict() for route in self.routes],
            "generatedAt": self.generated_at,
            "projectPath": self.project_path,
        }


# ============================================
# Components
# ============================================

@dataclass
class ComponentRecord:
    """A UI component file."""
    name: str
    path: str
    directory: str
    execution_context: ExecutionContext
    dependency_names: List[str]
    line_count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "path": self.path,
            "directory": self.directory,
            "executionContext": self.execution_context.value,
            "dependencyNames": list(self.dependency_names),
            "lineCount": self.line_count,
        }


@dataclass
class DirectoryInfo:
    """Number of components found in one directory."""
    path: str
    label: str
    component_count: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "path": self.path,
            "label": self.label,
            "componentCount": self.component_count,
        }


@dataclass
class ComponentData:
    """Components found in a project."""
    components: List[ComponentRecord]
    directories: List[DirectoryInfo]
    project_path: str
    generated_at: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "components": [component.to_dict() for component in self.components],
            "directories": [directory.to_dict() for directory in self.directories],
            "generatedAt": self.generated_at,
            "projectPath": self.project_path,
        }


# ============================================
# Schema
# ============================================

@dataclass
class SchemaField:
    """A field line inside a schema entity block."""
    name: str
    type_name: str
    is_relation: bool = False
    is_optional: bool = False
    is_array: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "typeName": self.type_name,
            "isRelation": self.is_relation,
            "isOptional": self.is_optional,
            "isArray": self.is_array,
        }


@dataclass
class SchemaEntity:
    """A named record type declared in the schema file."""
    name: str
    fields: List[SchemaField] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "fields": [f.to_dict() for f in self.fields],
        }


@dataclass
class RelationshipRecord:
    """Inferred relationship between two schema entities."""
    from_entity: str
    to_entity: str
    cardinality: Cardinality
    field_name: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "fromEntity": self.from_entity,
            "toEntity": self.to_entity,
            "cardinality": self.cardinality.value,
            "fieldName": self.field_name,
        }


@dataclass
class SchemaData:
    """Entities and relationships parsed from a schema file."""
    entities: List[SchemaEntity]
    relationships: List[RelationshipRecord]
    schema_file: str
    project_path: str
    generated_at: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "entities": [entity.to_dict() for entity in self.entities],
            "relationships": [rel.to_dict() for rel in self.relationships],
            "schemaFile": self.schema_file,
            "generatedAt": self.generated_at,
            "projectPath": self.project_path,
        }


# ============================================
# Dependency graph
# ============================================

@dataclass(frozen=True)
class SourceNode:
    """A source file in the import graph."""
    id: str
    display_name: str
    directory: str
    kind: NodeKind

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "displayName": self.display_name,
            "directory": self.directory,
            "kind": self.kind.value,
        }


@dataclass(frozen=True)
class ImportEdge:
    """A resolved import from one source file to another."""
    source_node_id: str
    target_node_id: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "sourceNodeId": self.source_node_id,
            "targetNodeId": self.target_node_id,
        }


@dataclass
class Cluster:
    """Nodes grouped under a shared directory label."""
    id: str
    label: str
    node_ids: List[str]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "label": self.label,
            "nodeIds": list(self.node_ids),
        }


@dataclass
class DependencyGraph:
    """File-level import graph."""
    nodes: List[SourceNode]
    edges: List[ImportEdge]
    clusters: List[Cluster]
    project_path: str
    generated_at: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "clusters": [cluster.to_dict() for cluster in self.clusters],
            "generatedAt": self.generated_at,
            "projectPath": self.project_path,
        }


# ============================================
# Aggregate
# ============================================

@dataclass
class AnalysisResult:
    """Merged output of all extraction passes."""
    project_path: str
    project_name: str
    generated_at: str
    routes: Optional[RouteData] = None
    components: Optional[ComponentData] = None
    schema: Optional[SchemaData] = None
    dependency_graph: Optional[DependencyGraph] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "routes": self.routes.to_dict() if self.routes else None,
            "components": self.components.to_dict() if self.components else None,
            "schema": self.schema.to_dict() if self.schema else None,
            "dependencyGraph": self.dependency_graph.to_dict() if self.dependency_graph else None,
            "projectPath": self.project_path,
            "projectName": self.project_name,
            "generatedAt": self.generated_at,
        }


# ============================================
# Metrics
# ============================================

@dataclass
class FileImportance:
    """Fan-in and fan-out of one file in the import graph."""
    file: str
    node_id: str
    imported_by_count: int
    imports_count: int
    is_hub: bool
    is_leaf: bool
    impact_score: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "file": self.file,
            "nodeId": self.node_id,
            "importedByCount": self.imported_by_count,
            "importsCount": self.imports_count,
            "isHub": self.is_hub,
            "isLeaf": self.is_leaf,
            "impactScore": self.impact_score,
        }


@dataclass
class CodebaseHealth:
    """Size and structure summary of an analysed project."""
    total_files: int
    total_lines: int
    total_components: int
    total_routes: int
    total_entities: int
    complexity: str
    organization: str
    hub_files: List[str]
    isolated_files: List[str]
    largest_files: List[Dict[str, Any]]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "totalFiles": self.total_files,
            "totalLines": self.total_lines,
            "totalComponents": self.total_components,
            "totalRoutes": self.total_routes,
            "totalEntities": self.total_entities,
            "complexity": self.complexity,
            "organization": self.organization,
            "hubFiles": list(self.hub_files),
            "isolatedFiles": list(self.isolated_files),
            "largestFiles": list(self.largest_files),
        }


@dataclass
class SourceFile:
    """Contents of one project file served to a consumer."""
    content: str
    language: str
    file_name: str
    file_path: str
    size: int
    lines: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "content": self.content,
            "language": self.language,
            "fileName": self.file_name,
            "filePath": self.file_path,
            "size": self.size,
            "lines": self.lines,
        }
