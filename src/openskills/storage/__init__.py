"""Storage utilities for openskills."""

from openskills.storage.paths import (
    ensure_directory,
    expand_path,
    get_global_config_path,
    get_openskills_home,
    get_search_dirs,
    get_skills_dir,
    is_project_dir,
)

__all__ = [
    "ensure_directory",
    "expand_path",
    "get_global_config_path",
    "get_openskills_home",
    "get_search_dirs",
    "get_skills_dir",
    "is_project_dir",
]
