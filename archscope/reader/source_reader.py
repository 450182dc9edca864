import os
from pathlib import Path
from typing import Optional

from ..types import SourceFile
from ..utils.logger import app_logger


# Tried when the requested path does not exist as given
EXTENSIONS_TO_TRY = ('.tsx', '.ts', '.jsx', '.js', '.mjs', '.cjs', '.json', '.css', '.scss', '.md')
INDEX_FILES = ('index.tsx', 'index.ts', 'index.jsx', 'index.js')

EXT_TO_LANG = {
    '.ts': 'typescript',
    '.tsx': 'typescript',
    '.js': 'javascript',
    '.jsx': 'javascript',
    '.json': 'json',
    '.css': 'css',
    '.scss': 'scss',
    '.html': 'html',
    '.md': 'markdown',
    '.py': 'python',
    '.prisma': 'prisma',
    '.sql': 'sql',
    '.yml': 'yaml',
    '.yaml': 'yaml',
    '.env': 'shell',
    '.sh': 'shell',
    '.bash': 'shell',
}

logger = app_logger.bind(component="source_reader")


class FileAccessDenied(PermissionError):
    """Requested file lies outside the project directory."""


class SourceFileNotFound(FileNotFoundError):
    """No file matches the requested path, with or without probing."""


def _probe(path: Path) -> Optional[Path]:
    if path.is_file():
        return path
    for ext in EXTENSIONS_TO_TRY:
        candidate = Path(str(path) + ext)
        if candidate.is_file():
            return candidate
    for index_file in INDEX_FILES:
        candidate = path / index_file
        if candidate.is_file():
            return candidate
    return None


def read_project_file(project_path: str, file_path: str) -> SourceFile:
    """Read one file of a project for display.

    Relative paths are taken from the project root. Raises FileAccessDenied if the
    path escapes the project and SourceFileNotFound if nothing matches.
    """
    project_root = Path(project_path).resolve()
    requested = Path(file_path)
    if not requested.is_absolute():
        requested = project_root / requested
    resolved = Path(os.path.abspath(requested))

    if resolved != project_root and project_root not in resolved.parents:
        raise FileAccessDenied("Access denied: file is outside project directory")

    found = _probe(resolved)
    if found is None:
        raise SourceFileNotFound(f"File not found: {file_path}")

    # Symlinks inside the project may still point elsewhere
    real = found.resolve()
    if project_root not in real.parents:
        raise FileAccessDenied("Access denied: file is outside project directory")

    with open(found, 'r', encoding='utf-8', errors='replace') as f:
        content = f.read()

    logger.debug(f"Read {found}")
    return SourceFile(
        content=content,
        language=EXT_TO_LANG.get(found.suffix.lower(), 'plaintext'),
        file_name=found.name,
        file_path=str(found),
        size=found.stat().st_size,
        lines=content.count('\n') + 1,
    )
