import asyncio
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional

from .analyzers import ComponentAnalyzer, RouteAnalyzer, SchemaAnalyzer
from .config import settings
from .graph import DependencyGraphBuilder
from .types import AnalysisResult, ComponentData, DependencyGraph, RouteData, SchemaData
from .utils.logger import app_logger


class InvalidProjectPathError(ValueError):
    """Project path is missing, does not exist or is not a directory."""


def validate_project_path(project_path: Optional[str]) -> Path:
    """Resolve and check a project path before any scanning."""
    if not project_path or not isinstance(project_path, str):
        raise InvalidProjectPathError("Project path is required")

    resolved = Path(project_path).resolve()
    if not resolved.exists():
        raise InvalidProjectPathError(f"Path does not exist: {resolved}")
    if not resolved.is_dir():
        raise InvalidProjectPathError(f"Path is not a directory: {resolved}")
    return resolved


def read_project_name(project_path: Path) -> str:
    """`name` from package.json if present, else the directory name."""
    package_json = project_path / "package.json"
    if package_json.is_file():
        try:
            with open(package_json, 'r', encoding='utf-8') as f:
                name = json.load(f).get("name")
            if isinstance(name, str) and name:
                return name
        except (OSError, ValueError, AttributeError) as e:
            app_logger.debug(f"Ignoring unreadable package.json: {e}")
    return project_path.name


class CodebaseAnalyzer:
    """Runs the four extraction passes over one project and merges the results."""

    def __init__(self, project_path: str, max_files: Optional[int] = None,
                 alias_prefix: Optional[str] = None):
        self.project_path = validate_project_path(project_path)
        self.max_files = settings.max_files if max_files is None else max_files
        self.alias_prefix = settings.alias_prefix if alias_prefix is None else alias_prefix
        self.logger = app_logger.bind(component="analyzer")

    def analyze_routes(self) -> RouteData:
        return RouteAnalyzer(str(self.project_path)).analyze()

    def analyze_components(self) -> ComponentData:
        return ComponentAnalyzer(str(self.project_path), alias_prefix=self.alias_prefix).analyze()

    def analyze_schema(self) -> Optional[SchemaData]:
        return SchemaAnalyzer(str(self.project_path)).analyze()

    def analyze_dependencies(self) -> DependencyGraph:
        return DependencyGraphBuilder(
            str(self.project_path),
            max_files=self.max_files,
            alias_prefix=self.alias_prefix,
        ).build()

    async def _run_pass(self, name: str, func: Callable[[], Any]) -> Any:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, func)
        except Exception as e:
            self.logger.error(f"{name} pass failed: {e}")
            return None

    async def analyze(self) -> AnalysisResult:
        """Analyze the project. Passes run concurrently; a failed pass yields None."""
        self.logger.info(f"Analyzing codebase: {self.project_path}")

        routes, components, schema, graph = await asyncio.gather(
            self._run_pass("routes", self.analyze_routes),
            self._run_pass("components", self.analyze_components),
            self._run_pass("schema", self.analyze_schema),
            self._run_pass("dependencies", self.analyze_dependencies),
        )

        result = AnalysisResult(
            project_path=str(self.project_path),
            project_name=read_project_name(self.project_path),
            generated_at=datetime.now(timezone.utc).isoformat(),
            routes=routes if routes and routes.routes else None,
            components=components if components and components.components else None,
            schema=schema if schema and schema.entities else None,
            dependency_graph=graph if graph and graph.nodes else None,
        )

        self.logger.info(f"Analysis of {result.project_name} complete")
        return result


def analyze_codebase(project_path: str, **kwargs) -> AnalysisResult:
    """Synchronous wrapper around CodebaseAnalyzer.analyze."""
    return asyncio.run(CodebaseAnalyzer(project_path, **kwargs).analyze())
