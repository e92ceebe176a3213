"""Domain models for chat conversations."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List
from enum import Enum


class MessageRole(str, Enum):
    """Role of a message in a conversation."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class Message:
    """A single message in a conversation.

    Attributes:
        role: The role of the message sender (system, user, assistant)
        content: The text content of the message
        timestamp: When the message was created
    """
    role: MessageRole
    content: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class ConversationHistory:
    """Bounded history of the questions asked and answers given.

    Attributes:
        messages: List of messages in chronological order
        max_messages: Maximum number of messages to retain
    """
    messages: List[Message] = field(default_factory=list)
    max_messages: int = 10

    def add_message(self, role: MessageRole, content: str) -> Message:
        """Add a message, dropping the oldest non-system messages when full."""
        message = Message(role=role, content=content)
        self.messages.append(message)

        if len(self.messages) > self.max_messages:
            system_messages = [m for m in self.messages if m.role == MessageRole.SYSTEM]
            other_messages = [m for m in self.messages if m.role != MessageRole.SYSTEM]
            messages_to_keep = max(self.max_messages - len(system_messages), 0)
            other_messages = other_messages[len(other_messages) - messages_to_keep:]
            self.messages = system_messages + other_messages

        return message

    def get_messages(self, include_system: bool = True) -> List[Message]:
        if include_system:
            return self.messages.copy()
        return [m for m in self.messages if m.role != MessageRole.SYSTEM]

    def clear(self) -> None:
        self.messages.clear()
