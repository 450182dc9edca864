from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from ..config import settings
from ..scanner import ProjectScanner, is_component_file, read_text, relative_posix
from ..types import ComponentData, ComponentRecord, DirectoryInfo
from ..utils.logger import app_logger
from .patterns import component_dependency_names, infer_execution_context


COMPONENT_DIRS = (
    ('components',),
    ('src', 'components'),
    ('app',),
    ('src', 'app'),
)


def count_lines(content: str) -> int:
    return content.count('\n') + 1


class ComponentAnalyzer:
    """Classifies UI component files and the components they import."""

    def __init__(self, project_path: str, scanner: ProjectScanner = None,
                 alias_prefix: Optional[str] = None):
        self.project_path = Path(project_path).resolve()
        self.scanner = scanner or ProjectScanner(str(self.project_path))
        self.alias_prefix = settings.alias_prefix if alias_prefix is None else alias_prefix
        self.logger = app_logger.bind(component="component_analyzer")

    def find_component_files(self) -> List[Path]:
        component_files = []
        for component_dir in COMPONENT_DIRS:
            directory = self.project_path.joinpath(*component_dir)
            if directory.is_dir():
                component_files.extend(self.scanner.find_files(directory, is_component_file))
        return component_files

    def analyze_file(self, file_path: Path) -> Optional[ComponentRecord]:
        content = read_text(file_path)
        if content is None:
            return None

        relative_path = relative_posix(file_path, self.project_path)
        directory = Path(relative_path).parent.as_posix()

        return ComponentRecord(
            name=file_path.stem,
            path=relative_path,
            directory=directory,
            execution_context=infer_execution_context(content),
            dependency_names=component_dependency_names(content, self.alias_prefix),
            line_count=count_lines(content),
        )

    def analyze(self) -> ComponentData:
        components: List[ComponentRecord] = []
        for file_path in self.find_component_files():
            component = self.analyze_file(file_path)
            if component is not None:
                components.append(component)

        counts = Counter(c.directory for c in components)
        directories = [
            DirectoryInfo(path=path, label=path.split('/')[-1] or path, component_count=count)
            for path, count in counts.items()
        ]
        directories.sort(key=lambda d: (-d.component_count, d.path))
        components.sort(key=lambda c: (c.directory, c.name))

        self.logger.info(f"Found {len(components)} components in {len(directories)} directories")

        return ComponentData(
            components=components,
            directories=directories,
            project_path=str(self.project_path),
            generated_at=datetime.now(timezone.utc).isoformat(),
        )
