import uuid
from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ConversationTurn(BaseModel):
    turn_id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    session_id: str
    user_text: str
    response_text: str
    is_error: bool = False
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ChatRequest(BaseModel):
    message: NonBlankStr
    session_id: NonBlankStr


class ChatResponse(BaseModel):
    response: str
    success: bool
