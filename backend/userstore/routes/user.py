from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status
from userstore.data.database import get_store
from userstore.errors import QueryError
from userstore.repository.user_store import Projection, UserStore
from userstore.schema.schemas import MutationResponse, UserCreate, UserUpdate

router = APIRouter()


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_user(user: UserCreate, store: UserStore = Depends(get_store)):
    try:
        store.insert(user.name, user.email)
    except QueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"status": "ok"}


@router.get("/", response_model=List[Dict[str, Any]])
def list_users(
    projection: Projection = Projection.ALL,
    store: UserStore = Depends(get_store)
):
    try:
        rows = store.select(projection)
    except QueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [row._asdict() for row in rows]


@router.put("/{email}", response_model=MutationResponse)
def update_user(email: str, user: UserUpdate, store: UserStore = Depends(get_store)):
    try:
        changed = store.update(email, user.name, user.email)
    except QueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return MutationResponse(rows_affected=changed)


@router.delete("/{email}", response_model=MutationResponse)
def delete_user(email: str, store: UserStore = Depends(get_store)):
    try:
        removed = store.delete(email)
    except QueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return MutationResponse(rows_affected=removed)
