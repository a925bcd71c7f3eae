from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from juicelab.core.database import get_db
from juicelab.core.errors import DuplicateEmail, InvalidCredentials
from juicelab.schemas.user import UserLogin, UserOut, UserRegister
from juicelab.services import auth as auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserOut, status_code=201)
def register(payload: UserRegister, db: Session = Depends(get_db)) -> UserOut:
    try:
        user = auth_service.register(
            db,
            email=payload.email,
            name=payload.name,
            password=payload.password,
            phone=payload.phone,
            referral_code=payload.referral_code,
        )
    except DuplicateEmail:
        raise HTTPException(status_code=409, detail="Пользователь с таким email уже существует")
    return UserOut.model_validate(user)


@router.post("/login", response_model=UserOut)
def login(payload: UserLogin, db: Session = Depends(get_db)) -> UserOut:
    try:
        user = auth_service.login(db, payload.email, payload.password)
    except InvalidCredentials:
        raise HTTPException(status_code=401, detail="Неверный email или пароль")
    return UserOut.model_validate(user)
