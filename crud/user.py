import datetime
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Optional
from models.user import UserDB, utcnow
from schemas.user import UserRegister, UserProfileUpdate

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> Optional[UserDB]:
    return db.query(UserDB).filter(UserDB.id == user_id).first()


def get_user_by_username(db: Session, username: str) -> Optional[UserDB]:
    return db.query(UserDB).filter(UserDB.username == username).first()


def get_user_by_email(db: Session, email: str) -> Optional[UserDB]:
    return db.query(UserDB).filter(UserDB.email == email).first()


def create_user(db: Session, user: UserRegister, password_hash: str) -> Optional[UserDB]:
    """Создать пользователя; None если username или email уже заняты"""
    if get_user_by_username(db, user.username) or get_user_by_email(db, user.email):
        return None

    db_user = UserDB(
        username=user.username,
        email=user.email,
        password_hash=password_hash,
        first_name=user.first_name,
        last_name=user.last_name,
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        # параллельная регистрация с тем же username/email
        db.rollback()
        logger.info("Unique constraint hit while registering %s", user.username)
        return None
    db.refresh(db_user)
    return db_user


def update_profile(db: Session, db_user: UserDB, profile_update: UserProfileUpdate) -> Optional[UserDB]:
    """Обновить переданные поля профиля; None если новый email занят"""
    update_data = profile_update.model_dump(exclude_unset=True)

    if 'email' in update_data and update_data['email'] != db_user.email:
        if get_user_by_email(db, update_data['email']):
            return None

    for field, value in update_data.items():
        setattr(db_user, field, value)
    db_user.updated_at = utcnow()

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return None
    db.refresh(db_user)
    return db_user


def record_login(db: Session, db_user: UserDB, when: Optional[datetime.datetime] = None) -> UserDB:
    db_user.last_login = when or utcnow()
    db.commit()
    db.refresh(db_user)
    return db_user
