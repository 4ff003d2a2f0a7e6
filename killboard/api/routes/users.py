"""
User endpoints.

Static paths (`/search`, `/searchByDetails`, `/deleteByKills`) are declared
before `/{user_id}` so they are not captured by the id route.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, status

from killboard.api.dependencies import get_user_repository
from killboard.api.security import require_trusted_origin
from killboard.api.validation import UserPayload
from killboard.domain.models import User
from killboard.repositories.users import UserRepository

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[User])
async def list_users(repo: UserRepository = Depends(get_user_repository)):
    return await repo.list_all()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserPayload, repo: UserRepository = Depends(get_user_repository)
):
    user_id = await repo.create(
        payload.username, payload.password, payload.first_name, payload.last_name
    )
    return {"message": "User created", "id": user_id}


@router.get("/search", response_model=List[User])
async def search_users(
    username: str = Query(""),
    repo: UserRepository = Depends(get_user_repository),
):
    return await repo.search_by_username(username)


@router.get("/searchByDetails", response_model=List[User])
async def search_users_by_details(
    username: str = Query(""),
    first_name: str = Query(""),
    last_name: str = Query(""),
    repo: UserRepository = Depends(get_user_repository),
):
    return await repo.search_by_details(username, first_name, last_name)


@router.delete("/deleteByKills", dependencies=[Depends(require_trusted_origin)])
async def delete_users_below_kills(
    kills: int = Query(..., ge=0),
    repo: UserRepository = Depends(get_user_repository),
):
    deleted = await repo.remove_below_kill_threshold(kills)
    return {"message": "Users deleted", "affected_rows": deleted}


@router.put("/{user_id}")
async def replace_user(
    user_id: int,
    payload: UserPayload,
    repo: UserRepository = Depends(get_user_repository),
):
    updated = await repo.replace(
        user_id, payload.username, payload.password, payload.first_name, payload.last_name
    )
    return {"message": "User updated", "affected_rows": updated}


@router.delete("/{user_id}")
async def delete_user(user_id: int, repo: UserRepository = Depends(get_user_repository)):
    deleted = await repo.remove(user_id)
    return {"message": "User deleted", "affected_rows": deleted}
