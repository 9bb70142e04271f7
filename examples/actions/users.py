"""User lookup actions."""

from __future__ import annotations

from dataclasses import dataclass

from actiongen import action


@dataclass
class GetUserRequest:
    id: int


@dataclass
class GetUserResponse:
    name: str
    email: str


@dataclass
class RenameUserRequest:
    id: int
    name: str
    notify: bool = False


@action
def get_user(req: GetUserRequest) -> GetUserResponse:
    if req.id == 0:
        raise ValueError("invalid user id")
    return GetUserResponse(name=f"User-{req.id}", email="user@example.com")


def rename_user(req: RenameUserRequest) -> tuple[GetUserResponse, Exception]:
    """Rename a user, reporting failures as the second result.

    @action
    """
    if not req.name:
        return GetUserResponse(name="", email=""), ValueError("name must not be empty")
    return GetUserResponse(name=req.name, email="user@example.com"), None
