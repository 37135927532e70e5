"""User API routes."""

from fastapi import APIRouter, Depends, status

from user_api.models.error import ErrorResponse, MessageResponse
from user_api.models.user import User, UserCreate, UserUpdate
from user_api.services import get_user_store
from user_api.services.user_store import UserStore

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}

router = APIRouter(prefix="/users", tags=["users"], redirect_slashes=False)


@router.get("", response_model=list[User], response_model_exclude_none=True)
@router.get("/", response_model=list[User], response_model_exclude_none=True, include_in_schema=False)
async def list_users(store: UserStore = Depends(get_user_store)) -> list[User]:
    return await store.list_users()


@router.post("", response_model=User, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
@router.post(
    "/",
    response_model=User,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
async def create_user(user: UserCreate, store: UserStore = Depends(get_user_store)) -> User:
    return await store.create_user(user)


@router.get("/{user_id}", response_model=User, response_model_exclude_none=True, responses=NOT_FOUND)
async def get_user(user_id: str, store: UserStore = Depends(get_user_store)) -> User:
    return await store.get_user(user_id)


@router.put("/{user_id}", response_model=User, response_model_exclude_none=True, responses=NOT_FOUND)
async def update_user(user_id: str, user: UserUpdate, store: UserStore = Depends(get_user_store)) -> User:
    return await store.update_user(user_id, user)


@router.delete("/{user_id}", response_model=MessageResponse, responses=NOT_FOUND)
async def delete_user(user_id: str, store: UserStore = Depends(get_user_store)) -> MessageResponse:
    await store.delete_user(user_id)
    return MessageResponse(message="User deleted")
