import logging
from datetime import datetime, timezone
from typing import Literal, Optional
from pydantic import BaseModel, Field

from famcare_backend.settings import settings

logger = logging.getLogger("famcare_backend.permissions.audit")

AccessEventType = Literal["granted", "denied", "error"]


def _value(item) -> str:
    return str(getattr(item, "value", item))


class AccessEvent(BaseModel):
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    type: AccessEventType
    resource_type: str
    operation: str
    user_id: Optional[str] = None
    user_role: Optional[str] = None
    resource_id: Optional[str] = None
    reason: Optional[str] = None


def log_access_event(type: AccessEventType, resource_type: str, operation: str, **details) -> AccessEvent:
    """
    Emit a structured access control event.

    Denials and errors are always logged; granted events only when
    ACCESS_LOG_GRANTED is enabled. Storing events is left to the configured
    logging handlers.
    """
    details = {key: _value(value) if value is not None else None for key, value in details.items()}
    event = AccessEvent(type=type, resource_type=_value(resource_type), operation=_value(operation), **details)
    payload = event.model_dump(mode="json")

    if type == "error":
        logger.error(f"Access {type}: {payload}")
    elif type == "denied":
        logger.warning(f"Access {type}: {payload}")
    elif settings.ACCESS_LOG_GRANTED:
        logger.info(f"Access {type}: {payload}")

    return event
