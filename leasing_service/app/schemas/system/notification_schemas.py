import uuid
from datetime import datetime, timezone
from typing import Any, Dict
from pydantic import BaseModel, Field

from ...enum.notification_enum import NotificationType


class NotificationEvent(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    type: NotificationType
    message: str
    topic: str
    recipient_id: str = "all"
    data: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
