import os
from pathlib import Path
from typing import List, Set, Optional, Iterator, Tuple

from ..config import settings
from ..types import NodeKind
from ..utils.logger import app_logger


IGNORED_DIRS = {
    'node_modules', '.next', '.git', 'dist', 'build', '__tests__', '__mocks__'
}

SOURCE_EXTENSIONS = ('.ts', '.tsx', '.js', '.jsx')
COMPONENT_EXTENSIONS = ('.tsx', '.jsx')
ROUTE_HANDLER_NAMES = ('route.ts', 'route.js')

# Checked in order, first existing file wins
SCHEMA_PATHS = (
    'prisma/schema.prisma',
    'schema.prisma',
    'prisma/schema/schema.prisma',
)

LOGGER = app_logger.bind(component="scanner")


def is_route_handler(file_path: Path) -> bool:
    """Check if a file is a route handler by its reserved name."""
    return file_path.name in ROUTE_HANDLER_NAMES


def is_component_file(file_path: Path) -> bool:
    """Check if a file looks like a UI component: UI extension, capitalised name."""
    if file_path.suffix not in COMPONENT_EXTENSIONS:
        return False
    return file_path.stem[:1].isupper()


def is_source_file(file_path: Path) -> bool:
    return file_path.suffix in SOURCE_EXTENSIONS


def find_schema_file(root_path: Path) -> Optional[Path]:
    """Return the first conventional schema file that exists under root."""
    for schema_path in SCHEMA_PATHS:
        candidate = root_path / schema_path
        if candidate.is_file():
            return candidate
    return None


def node_kind(relative_path: str) -> NodeKind:
    """Determine the graph node kind from the directories of a relative path."""
    segments = set(Path(relative_path).parent.parts)

    if 'components' in segments:
        return NodeKind.COMPONENT
    if 'lib' in segments or 'utils' in segments:
        return NodeKind.LIB
    if 'api' in segments:
        return NodeKind.API
    if 'app' in segments or 'pages' in segments:
        return NodeKind.PAGE
    return NodeKind.OTHER


def read_text(file_path: Path) -> Optional[str]:
    """Read a file as UTF-8 text, returning None if it cannot be read.

    Undecodable bytes are replaced rather than discarding the file.
    """
    try:
        with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()
    except OSError as e:
        LOGGER.debug(f"Skipping unreadable file {file_path}: {e}")
        return None


def relative_posix(file_path: Path, root_path: Path) -> str:
    """Path relative to root with forward slashes."""
    return Path(os.path.relpath(file_path, root_path)).as_posix()


class ProjectScanner:
    """Bounded, deterministic walker over a project tree."""

    def __init__(self, root_path: str, max_files: Optional[int] = None,
                 ignored_dirs: Optional[Set[str]] = None, max_depth: Optional[int] = None):
        self.root_path = Path(root_path).resolve()
        self.max_files = settings.max_files if max_files is None else max_files
        self.max_depth = settings.max_depth if max_depth is None else max_depth

        if ignored_dirs is None:
            ignored_dirs = IGNORED_DIRS | set(settings.extra_ignored_dirs_list)
        self.ignored_dirs = set(ignored_dirs)
        self.logger = LOGGER

    def walk(self, start: Optional[Path] = None) -> Iterator[Path]:
        """Yield every file below start (default: root), skipping ignored directories.

        Each directory yields its own files in name order before descending into
        its subdirectories, also in name order. Symlinked directories are followed
        but each real directory is entered only once.
        """
        start = self.root_path if start is None else Path(start)
        if not start.is_dir():
            return

        visited: Set[Tuple[int, int]] = set()
        yield from self._walk_dir(start, 0, visited)

    def _walk_dir(self, directory: Path, depth: int, visited: Set[Tuple[int, int]]) -> Iterator[Path]:
        if depth > self.max_depth:
            self.logger.warning(f"Maximum depth reached at {directory}")
            return

        try:
            stat = directory.stat()
            key = (stat.st_dev, stat.st_ino)
            if key in visited:
                self.logger.debug(f"Skipping already visited directory: {directory}")
                return
            visited.add(key)

            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            self.logger.debug(f"Cannot list directory {directory}: {e}")
            return

        subdirs = []
        for entry in entries:
            try:
                if entry.is_dir():
                    if entry.name not in self.ignored_dirs:
                        subdirs.append(Path(entry.path))
                elif entry.is_file():
                    yield Path(entry.path)
            except OSError:
                continue

        for subdir in subdirs:
            yield from self._walk_dir(subdir, depth + 1, visited)

    def find_files(self, start: Path, predicate) -> List[Path]:
        """All files under start accepted by predicate."""
        return [path for path in self.walk(start) if predicate(path)]

    def collect_source_files(self) -> List[Path]:
        """Collect generic source files, stopping once max_files is reached."""
        self.logger.info(f"Scanning directory: {self.root_path}")

        source_files = []
        for file_path in self.walk():
            if len(source_files) >= self.max_files:
                self.logger.warning(
                    f"File cap of {self.max_files} reached, remaining files are not scanned"
                )
                break
            if is_source_file(file_path):
                source_files.append(file_path)

        self.logger.info(f"Found {len(source_files)} source files")
        return source_files
