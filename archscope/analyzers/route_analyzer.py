from datetime import datetime, timezone
from pathlib import Path
from typing import List

from ..scanner import ProjectScanner, is_route_handler, read_text, relative_posix
from ..types import RouteData, RouteRecord
from ..utils.logger import app_logger
from .patterns import detect_methods, infer_auth_tier


API_DIRS = (
    ('app', 'api'),
    ('src', 'app', 'api'),
    ('pages', 'api'),
    ('src', 'pages', 'api'),
)


def route_path_for(relative_file: str) -> str:
    """Logical URL path of a route handler, from its location in the tree.

    `app/api/users/[id]/route.ts` -> `/api/users/[id]`.
    """
    parts = relative_file.split('/')[:-1]
    if 'api' in parts:
        parts = parts[parts.index('api'):]
    return '/' + '/'.join(parts)


def feature_for(route_path: str) -> str:
    """First segment after `/api/`, else the first segment, else `root`."""
    parts = [p for p in route_path.split('/') if p]
    if len(parts) >= 2 and parts[0] == 'api':
        return parts[1]
    return parts[0] if parts else 'root'


class RouteAnalyzer:
    """Extracts API routes from route handler files."""

    def __init__(self, project_path: str, scanner: ProjectScanner = None):
        self.project_path = Path(project_path).resolve()
        # no ignore list inside API roots, `build` and `dist` are valid route segments
        self.scanner = scanner or ProjectScanner(str(self.project_path), ignored_dirs=set())
        self.logger = app_logger.bind(component="route_analyzer")

    def find_route_files(self) -> List[Path]:
        route_files = []
        for api_dir in API_DIRS:
            directory = self.project_path.joinpath(*api_dir)
            if directory.is_dir():
                route_files.extend(self.scanner.find_files(directory, is_route_handler))
        return route_files

    def analyze_file(self, route_file: Path) -> List[RouteRecord]:
        """Routes exposed by one handler file, one per exported method."""
        content = read_text(route_file)
        if content is None:
            return []

        source_file = relative_posix(route_file, self.project_path)
        path = route_path_for(source_file)
        feature = feature_for(path)
        auth_tier = infer_auth_tier(content)

        return [
            RouteRecord(
                path=path,
                method=method,
                feature=feature,
                auth_tier=auth_tier,
                source_file=source_file,
            )
            for method in detect_methods(content)
        ]

    def analyze(self) -> RouteData:
        routes: List[RouteRecord] = []
        for route_file in self.find_route_files():
            routes.extend(self.analyze_file(route_file))

        routes.sort(key=lambda r: (r.path, r.method.value))
        self.logger.info(f"Found {len(routes)} routes")

        return RouteData(
            routes=routes,
            project_path=str(self.project_path),
            generated_at=datetime.now(timezone.utc).isoformat(),
        )
