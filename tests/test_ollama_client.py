"""Tests for Ollama LLM client."""
import pytest
import requests
from unittest.mock import Mock, patch
from chat.llm_clients.ollama_client import OllamaClient
from chat.llm_clients.base import LLMConfig, LLMConnectionError, LLMException, LLMResponseError
from chat.models import Message, MessageRole


def ok_response(content="Response"):
    mock_response = Mock()
    mock_response.status_code = 200
    mock_response.json.return_value = {
        "message": {"role": "assistant", "content": content},
        "done": True
    }
    return mock_response


class TestOllamaClient:
    """Tests for OllamaClient."""

    @pytest.fixture
    def config(self):
        """Create a test LLM configuration."""
        return LLMConfig(
            model_name="llama2",
            temperature=0.7,
            max_tokens=512
        )

    @pytest.fixture
    def client(self, config):
        """Create an Ollama client instance."""
        return OllamaClient(config)

    def test_initialization(self, client, config):
        """Test client initialization."""
        assert client.config == config
        assert client.base_url == "http://localhost:11434"
        assert client.chat_endpoint == "http://localhost:11434/api/chat"
        assert client.tags_endpoint == "http://localhost:11434/api/tags"

    def test_initialization_url_trailing_slash(self, config):
        """Test that trailing slash is removed from base URL."""
        client = OllamaClient(config, base_url="http://custom:8080/")

        assert client.base_url == "http://custom:8080"
        assert client.chat_endpoint == "http://custom:8080/api/chat"

    @patch('chat.llm_clients.ollama_client.requests.post')
    def test_generate_success(self, mock_post, client):
        """Test successful response generation."""
        mock_post.return_value = ok_response("This is the generated response")

        result = client.generate([Message(MessageRole.USER, "What is AI?")])

        assert result == "This is the generated response"

        mock_post.assert_called_once()
        call_args = mock_post.call_args
        assert call_args[0][0] == client.chat_endpoint
        assert call_args[1]['timeout'] == 60

        payload = call_args[1]['json']
        assert payload['model'] == "llama2"
        assert payload['stream'] is False
        assert payload['messages'] == [{"role": "user", "content": "What is AI?"}]
        assert payload['options']['temperature'] == 0.7
        assert payload['options']['num_predict'] == 512

    @patch('chat.llm_clients.ollama_client.requests.post')
    def test_generate_with_custom_parameters(self, mock_post, client):
        """Test generation with custom parameters."""
        mock_post.return_value = ok_response()

        client.generate(
            [Message(MessageRole.USER, "Test")],
            temperature=0.9,
            max_tokens=1024,
            top_p=0.95
        )

        payload = mock_post.call_args[1]['json']
        assert payload['options']['temperature'] == 0.9
        assert payload['options']['num_predict'] == 1024
        assert payload['options']['top_p'] == 0.95

    @patch('chat.llm_clients.ollama_client.requests.post')
    def test_additional_params_forwarded(self, mock_post):
        """Test that additional model parameters end up in options."""
        mock_post.return_value = ok_response()
        client = OllamaClient(LLMConfig(additional_params={"num_ctx": 4096}))

        client.generate([Message(MessageRole.USER, "Test")])

        assert mock_post.call_args[1]['json']['options']['num_ctx'] == 4096

    @patch('chat.llm_clients.ollama_client.requests.post')
    def test_generate_connection_error(self, mock_post, client):
        """Test handling of connection errors."""
        mock_post.side_effect = requests.exceptions.ConnectionError("Connection refused")

        with pytest.raises(LLMConnectionError, match="Failed to connect to Ollama"):
            client.generate([Message(MessageRole.USER, "Test")])

    @patch('chat.llm_clients.ollama_client.requests.post')
    def test_generate_timeout(self, mock_post, client):
        """Test handling of timeout errors."""
        mock_post.side_effect = requests.exceptions.Timeout()

        with pytest.raises(LLMConnectionError) as exc_info:
            client.generate([Message(MessageRole.USER, "Test")])

        assert "timed out" in str(exc_info.value).lower()

    @patch('chat.llm_clients.ollama_client.requests.post')
    def test_generate_http_error(self, mock_post, client):
        """Test handling of HTTP errors."""
        mock_response = Mock()
        mock_response.status_code = 500
        mock_response.text = "Internal Server Error"
        mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError()
        mock_post.return_value = mock_response

        with pytest.raises(LLMResponseError):
            client.generate([Message(MessageRole.USER, "Test")])

    @patch('chat.llm_clients.ollama_client.requests.post')
    def test_generate_invalid_json(self, mock_post, client):
        mock_response = Mock()
        mock_response.json.side_effect = ValueError("Expecting value")
        mock_post.return_value = mock_response

        with pytest.raises(LLMResponseError, match="invalid JSON"):
            client.generate([Message(MessageRole.USER, "Test")])

    @patch('chat.llm_clients.ollama_client.requests.post')
    def test_generate_unexpected_response_format(self, mock_post, client):
        """Test handling of unexpected response format."""
        mock_response = Mock()
        mock_response.json.return_value = {"unexpected_key": "value"}
        mock_post.return_value = mock_response

        with pytest.raises(LLMResponseError) as exc_info:
            client.generate([Message(MessageRole.USER, "Test")])

        assert "Unexpected response format" in str(exc_info.value)

    def test_errors_share_base_exception(self):
        assert issubclass(LLMConnectionError, LLMException)
        assert issubclass(LLMResponseError, LLMException)

    @patch('chat.llm_clients.ollama_client.requests.get')
    def test_is_available_true(self, mock_get, client):
        """Test is_available when Ollama is running."""
        mock_get.return_value = Mock(status_code=200)

        assert client.is_available() is True
        assert mock_get.call_args[0][0] == client.tags_endpoint

    @patch('chat.llm_clients.ollama_client.requests.get')
    def test_is_available_false(self, mock_get, client):
        """Test is_available when Ollama is not running."""
        mock_get.side_effect = requests.exceptions.ConnectionError("Connection refused")

        assert client.is_available() is False

    def test_format_messages(self, client):
        """Test message formatting."""
        messages = [
            Message(MessageRole.SYSTEM, "System prompt"),
            Message(MessageRole.USER, "User message"),
            Message(MessageRole.ASSISTANT, "Assistant response")
        ]

        formatted = client.format_messages(messages)

        assert formatted == [
            {"role": "system", "content": "System prompt"},
            {"role": "user", "content": "User message"},
            {"role": "assistant", "content": "Assistant response"},
        ]
