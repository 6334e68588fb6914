from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from cardledger.api.deps import db
from cardledger.core.errors import UserNotFound
from cardledger.schemas.user import UserCreate, UserOut
from cardledger.services.cards import create_user, delete_user

router = APIRouter(prefix="/users", tags=["users"])

@router.post("", response_model=UserOut)
def create(body: UserCreate, s: Session = Depends(db)):
    return create_user(s, body.name, body.email)

@router.delete("/{user_id}")
def delete(user_id: int, s: Session = Depends(db)):
    try:
        delete_user(s, user_id)
    except UserNotFound as e:
        raise HTTPException(status_code=404, detail=e.code)
    return {"ok": True}
