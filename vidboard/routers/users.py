from fastapi import APIRouter, Depends

from vidboard.dependencies import get_store, require_bearer_token
from vidboard.models.users import CreateUserRequest, UpdateUserRequest, User
from vidboard.services import users as users_service
from vidboard.store import JsonStore

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/{user_id}")
def get_user(user_id: str, store: JsonStore = Depends(get_store)) -> User:
    return users_service.get_user(store, user_id)


@router.post("", status_code=201)
def create_user(request: CreateUserRequest, store: JsonStore = Depends(get_store)) -> User:
    return users_service.create_user(store, request)


@router.patch("/{user_id}", dependencies=[Depends(require_bearer_token)])
def update_user(user_id: str, request: UpdateUserRequest, store: JsonStore = Depends(get_store)) -> User:
    return users_service.update_user(store, user_id, request)
