"""
Generation side of the RAG pipeline: model clients and the answer service.
"""
from chat.models import ConversationHistory, Message, MessageRole

__all__ = [
    "ConversationHistory",
    "Message",
    "MessageRole",
]
