"""Ollama LLM client implementation."""
import logging
import requests
from typing import List
from chat.llm_clients.base import BaseLLMClient, LLMConfig, LLMConnectionError, LLMResponseError
from chat.models import Message

logger = logging.getLogger(__name__)


class OllamaClient(BaseLLMClient):
    """Client for a local Ollama server.

    Example usage:
        config = LLMConfig(model_name="phi", temperature=0.7)
        client = OllamaClient(config, base_url="http://localhost:11434")
        answer = client.generate([Message(role=MessageRole.USER, content="Hello!")])
    """

    def __init__(
        self,
        config: LLMConfig,
        base_url: str = "http://localhost:11434"
    ):
        super().__init__(config)
        self.base_url = base_url.rstrip('/')
        self.chat_endpoint = f"{self.base_url}/api/chat"
        self.tags_endpoint = f"{self.base_url}/api/tags"

    def generate(
        self,
        messages: List[Message],
        **kwargs
    ) -> str:
        """Generate a non-streamed chat completion.

        Raises:
            LLMConnectionError: If cannot connect to Ollama or the request times out
            LLMResponseError: If Ollama returns an error or an unexpected body
        """
        payload = {
            "model": self.config.model_name,
            "messages": self.format_messages(messages),
            "stream": False,
            "options": {
                "temperature": kwargs.get("temperature", self.config.temperature),
                "num_predict": kwargs.get("max_tokens", self.config.max_tokens),
                "top_p": kwargs.get("top_p", self.config.top_p),
                **(self.config.additional_params or {})
            }
        }

        try:
            response = requests.post(
                self.chat_endpoint,
                json=payload,
                timeout=self.config.timeout
            )
            response.raise_for_status()
            result = response.json()
        except requests.exceptions.ConnectionError as e:
            raise LLMConnectionError(
                f"Failed to connect to Ollama at {self.base_url}. "
                f"Ensure Ollama is running. Error: {e}"
            ) from e
        except requests.exceptions.Timeout as e:
            raise LLMConnectionError(
                f"Request to Ollama timed out after {self.config.timeout}s. "
                f"Error: {e}"
            ) from e
        except requests.exceptions.HTTPError as e:
            raise LLMResponseError(
                f"Ollama API returned error: {e}. "
                f"Response: {e.response.text if e.response is not None else 'N/A'}"
            ) from e
        except ValueError as e:
            raise LLMResponseError(f"Ollama returned invalid JSON: {e}") from e

        if "message" in result and "content" in result["message"]:
            logger.debug(f"Ollama generated {len(result['message']['content'])} chars")
            return result["message"]["content"]
        raise LLMResponseError(f"Unexpected response format: {result}")

    def is_available(self) -> bool:
        try:
            response = requests.get(self.tags_endpoint, timeout=5)
            return response.status_code == 200
        except (requests.exceptions.RequestException, OSError):
            return False
