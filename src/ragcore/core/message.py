"""
Message types exchanged with generation providers.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel


class Role(str, Enum):
    """Message role in a conversation."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single chat message."""
    role: Role
    content: str

    @classmethod
    def user(cls, content: str) -> "Message":
        """Create a user message."""
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        """Create an assistant message."""
        return cls(role=Role.ASSISTANT, content=content)

    def to_api_format(self) -> dict[str, Any]:
        """Convert to API-compatible format."""
        return {"role": self.role.value, "content": self.content}
