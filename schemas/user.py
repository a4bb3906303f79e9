from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from typing import Optional

# bcrypt учитывает только первые 72 байта пароля
MAX_PASSWORD_BYTES = 72


def _not_blank(v: Optional[str], name: str) -> Optional[str]:
    if v is None or not v.strip():
        raise ValueError(f'{name} is required')
    return v.strip()


class UserRegister(BaseModel):
    username: str = Field(..., min_length=5, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=5)
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)

    @field_validator('username')
    @classmethod
    def username_alphanumeric(cls, v):
        if not v.replace('_', '').replace('-', '').replace('.', '').isalnum():
            raise ValueError('Username must be alphanumeric')
        return v

    @field_validator('password')
    @classmethod
    def password_fits_bcrypt(cls, v):
        if len(v.encode('utf-8')) > MAX_PASSWORD_BYTES:
            raise ValueError(f'Password must be at most {MAX_PASSWORD_BYTES} bytes')
        return v

    @field_validator('first_name')
    @classmethod
    def first_name_not_empty(cls, v):
        return _not_blank(v, 'First name')

    @field_validator('last_name')
    @classmethod
    def last_name_not_empty(cls, v):
        return _not_blank(v, 'Last name')


class UserLogin(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserProfileUpdate(BaseModel):
    """Частичное обновление профиля: применяются только переданные поля"""
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = Field(None, max_length=500)

    @field_validator('first_name')
    @classmethod
    def first_name_not_empty(cls, v):
        return _not_blank(v, 'First name')

    @field_validator('last_name')
    @classmethod
    def last_name_not_empty(cls, v):
        return _not_blank(v, 'Last name')

    @field_validator('email')
    @classmethod
    def email_not_null(cls, v):
        if v is None:
            raise ValueError('Email cannot be null')
        return v


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    bio: Optional[str] = None
    profile_picture: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True


class Identity(BaseModel):
    """Проверенная личность из токена, прикрепляется к запросу"""
    id: int
    username: str


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int
