"""Filesystem primitives backing the local publish transport."""

from .filesystem import FileSystemStorage, copy_file, ensure_dir, list_subdirectories, remove_tree  # noqa: F401
