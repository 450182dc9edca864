from .source_reader import FileAccessDenied, SourceFileNotFound, read_project_file

__all__ = [
    'FileAccessDenied',
    'SourceFileNotFound',
    'read_project_file',
]
