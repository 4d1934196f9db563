from decimal import Decimal
from pydantic import BaseModel, Field, PlainSerializer
from typing import Annotated, Any, Optional
import uuid

# Amounts stay Decimal in Python and are written as JSON numbers
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def _rid():
    return uuid.uuid4().hex


class SuccessResponse(BaseModel):
    """Envelope for every successful response: data, success flag and request_id."""
    success: Optional[bool] = Field(default=True)
    request_id: str = Field(default_factory=_rid)
    data: Optional[Any] = None


class MessageData(BaseModel):
    message: str
