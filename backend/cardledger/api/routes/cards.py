from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from cardledger.api.deps import db
from cardledger.core.errors import CardExists, CardNotFound, UserNotFound
from cardledger.schemas.card import CardCreate, CardOut
from cardledger.services.cards import add_card_to_user, cards_of_user, find_card_by_number, user_id_for_card

router = APIRouter(prefix="/credit-cards", tags=["credit-cards"])

@router.post("", response_model=CardOut)
def add_card(body: CardCreate, s: Session = Depends(db)):
    if find_card_by_number(s, body.card_number) is not None:
        raise HTTPException(status_code=409, detail="card_exists")
    try:
        return add_card_to_user(s, body.user_id, body.card_number, body.issuance_bank)
    except UserNotFound as e:
        raise HTTPException(status_code=400, detail=e.code)
    except CardExists as e:
        raise HTTPException(status_code=409, detail=e.code)

@router.get("", response_model=list[CardOut])
def list_cards(user_id: int = Query(...), s: Session = Depends(db)):
    return cards_of_user(s, user_id)

@router.get("/user-id")
def owner_of_card(credit_card_number: str = Query(...), s: Session = Depends(db)):
    try:
        return {"user_id": user_id_for_card(s, credit_card_number)}
    except CardNotFound as e:
        raise HTTPException(status_code=400, detail=e.code)
