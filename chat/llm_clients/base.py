"""Base interface for generative model clients."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Dict, Any
from chat.models import Message


@dataclass
class LLMConfig:
    """Configuration for LLM client.

    Attributes:
        model_name: Name of the model to use
        temperature: Sampling temperature (0-1)
        max_tokens: Maximum tokens in response
        top_p: Nucleus sampling parameter
        timeout: Request timeout in seconds
        additional_params: Additional model-specific parameters
    """
    model_name: str = "phi"
    temperature: float = 0.7
    max_tokens: int = 512
    top_p: float = 0.9
    timeout: int = 60
    additional_params: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.additional_params is None:
            self.additional_params = {}


class LLMException(Exception):
    """Base exception for LLM-related errors."""
    pass


class LLMConnectionError(LLMException):
    """Exception raised when connection to LLM fails."""
    pass


class LLMResponseError(LLMException):
    """Exception raised when LLM returns an error."""
    pass


class BaseLLMClient(ABC):
    """Abstract base class for generative model clients.

    The engine only needs ``generate``: prompt messages in, text out.
    """

    def __init__(self, config: LLMConfig):
        self.config = config

    @abstractmethod
    def generate(self, messages: List[Message], **kwargs) -> str:
        """Generate a response from the LLM.

        Raises:
            LLMConnectionError: If connection to LLM fails
            LLMResponseError: If LLM returns an error
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        pass

    def format_messages(self, messages: List[Message]) -> List[Dict[str, str]]:
        return [
            {
                "role": msg.role.value,
                "content": msg.content
            }
            for msg in messages
        ]
