from pydantic import BaseModel, Field
from typing import Any, Optional
from datetime import datetime


class StandardResponse(BaseModel):
    """Стандартный ответ для успешных операций"""
    success: bool = True
    message: str
    data: Optional[Any] = None
    timestamp: datetime = Field(default_factory=datetime.now)

    class Config:
        from_attributes = True


class ErrorResponse(BaseModel):
    """Стандартный ответ для ошибок"""
    success: bool = False
    error: str
    details: Optional[Any] = None
    timestamp: datetime = Field(default_factory=datetime.now)

    class Config:
        from_attributes = True


class HealthCheckResponse(BaseModel):
    """Ответ для health check эндпоинта"""
    success: bool = True
    message: str
    service: str
    database: str
    timestamp: datetime = Field(default_factory=datetime.now)
