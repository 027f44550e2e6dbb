"""
Pydantic models for Studio.

All data shapes defined here. No imports from db, repos, or routes.
"""

from backend.models.auth import LoginRequest, LogoutResponse, RegisterRequest
from backend.models.file import (
    CreateFileRequest,
    FileResponse,
    ProjectFile,
    TreeResponse,
    UpdateFileRequest,
)
from backend.models.github import (
    GitHubRepo,
    GitHubStatusResponse,
    SetGitHubTokenRequest,
    SetGitHubTokenResponse,
)
from backend.models.project import (
    CreateProjectRequest,
    Project,
    ProjectResponse,
    UpdateProjectRequest,
)
from backend.models.user import User, UserPublic

__all__ = [
    # User models
    "User",
    "UserPublic",
    # Auth models
    "RegisterRequest",
    "LoginRequest",
    "LogoutResponse",
    # Project models
    "Project",
    "CreateProjectRequest",
    "UpdateProjectRequest",
    "ProjectResponse",
    # File models
    "ProjectFile",
    "CreateFileRequest",
    "UpdateFileRequest",
    "FileResponse",
    "TreeResponse",
    # GitHub models
    "GitHubRepo",
    "GitHubStatusResponse",
    "SetGitHubTokenRequest",
    "SetGitHubTokenResponse",
]
