from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Successful payloads are wrapped under a top-level ``data`` key"""
    data: T


class MessageResponse(BaseModel):
    message: str
