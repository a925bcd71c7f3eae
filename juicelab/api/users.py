from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from juicelab.core.database import get_db
from juicelab.core.role_guards import require_admin
from juicelab.schemas.user import ReferralLinkOut, ReferralOut, UserOut, UserUpdate
from juicelab.services import bonus as bonus_service
from juicelab.services import users as users_service

router = APIRouter(prefix="/users", tags=["users"])


def _must_user(db: Session, user_id: str):
    user = users_service.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/", response_model=list[UserOut], dependencies=[Depends(require_admin)])
def list_users(db: Session = Depends(get_db)) -> list[UserOut]:
    return [UserOut.model_validate(u) for u in users_service.get_all_users(db)]


@router.get("/by-email", response_model=UserOut, dependencies=[Depends(require_admin)])
def get_by_email(email: str = Query(..., min_length=3), db: Session = Depends(get_db)) -> UserOut:
    user = users_service.get_user_by_email(db, email)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserOut.model_validate(user)


@router.get("/by-referral-code/{code}", response_model=ReferralOut)
def get_by_referral_code(code: str, db: Session = Depends(get_db)) -> ReferralOut:
    # Публично: страница регистрации показывает, кто пригласил
    user = users_service.get_user_by_referral_code(db, code)
    if not user:
        raise HTTPException(status_code=404, detail="Referral code not found")
    return ReferralOut.model_validate(user)


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, db: Session = Depends(get_db)) -> UserOut:
    return UserOut.model_validate(_must_user(db, user_id))


@router.patch("/{user_id}", response_model=UserOut)
def update_user(user_id: str, payload: UserUpdate, db: Session = Depends(get_db)) -> UserOut:
    fields = payload.model_dump(exclude_unset=True)
    if not users_service.update_user(db, user_id, **fields):
        raise HTTPException(status_code=404, detail="User not found")
    return UserOut.model_validate(_must_user(db, user_id))


@router.get("/{user_id}/referrals", response_model=list[ReferralOut])
def list_referrals(user_id: str, db: Session = Depends(get_db)) -> list[ReferralOut]:
    _must_user(db, user_id)
    return [ReferralOut.model_validate(u) for u in users_service.get_user_referrals(db, user_id)]


@router.get("/{user_id}/referral-link", response_model=ReferralLinkOut)
def referral_link(user_id: str, db: Session = Depends(get_db)) -> ReferralLinkOut:
    user = _must_user(db, user_id)
    return ReferralLinkOut(
        referral_code=user.referral_code,
        link=bonus_service.get_referral_link(db, user_id),
    )
