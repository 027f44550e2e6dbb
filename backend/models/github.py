"""GitHub integration models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class GitHubStatusResponse(BaseModel):
    has_token: bool


class SetGitHubTokenRequest(BaseModel):
    """What the client sends to store a personal access token."""

    model_config = {"extra": "forbid"}

    token: str = Field(min_length=1, max_length=500)


class SetGitHubTokenResponse(BaseModel):
    success: bool = True


class GitHubRepo(BaseModel):
    """The subset of a GitHub repository listing the dashboard shows."""

    model_config = {"extra": "ignore"}

    id: int
    name: str
    full_name: str
    description: str | None = None
    html_url: str
    private: bool = False
    language: str | None = None
    stargazers_count: int = 0
    updated_at: str | None = None
