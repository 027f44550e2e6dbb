"""GitHub routes: token status, token storage, repository listing."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from backend.auth import get_current_user
from backend.models.github import (
    GitHubRepo,
    GitHubStatusResponse,
    SetGitHubTokenRequest,
    SetGitHubTokenResponse,
)
from backend.models.user import User
from backend.repos.user_repo import UserRepo
from backend.services.github import GitHubAuthError, GitHubError, github_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/github", tags=["github"])
user_repo = UserRepo()


@router.get("/status", status_code=200)
async def github_status(user: User = Depends(get_current_user)) -> GitHubStatusResponse:
    """Whether the current user has stored a GitHub token."""
    return GitHubStatusResponse(has_token=bool(user.github_token))


@router.post("/token", status_code=200)
async def set_github_token(
    req: SetGitHubTokenRequest,
    user: User = Depends(get_current_user),
) -> SetGitHubTokenResponse:
    """Store a personal access token for the current user."""
    token = req.token.strip()
    if not token:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Token is required.")
    await user_repo.set_github_token(user.id, token)
    return SetGitHubTokenResponse()


@router.get("/repos", status_code=200)
async def list_github_repos(user: User = Depends(get_current_user)) -> list[GitHubRepo]:
    """
    List the user's GitHub repositories.

    A token GitHub rejects is forgotten, so the client asks for a new one.
    """
    if not user.github_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="GitHub token not set.")

    try:
        repos = await github_service.list_repos(user.github_token)
    except GitHubAuthError as e:
        logger.info("GitHub rejected token for user %s, clearing it", user.id)
        await user_repo.clear_github_token(user.id)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid GitHub token.") from e
    except GitHubError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to fetch repositories.",
        ) from e

    return [GitHubRepo.model_validate(r) for r in repos]
