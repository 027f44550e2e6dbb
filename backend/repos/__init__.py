"""
Repository layer for Studio.

All SQL lives here and ONLY here. No database access outside this module.
"""

from backend.repos.file_repo import FileRepo
from backend.repos.project_repo import ProjectRepo
from backend.repos.user_repo import UserRepo

__all__ = [
    "UserRepo",
    "ProjectRepo",
    "FileRepo",
]
