"""RAG (Retrieval-Augmented Generation) answer service."""
from dataclasses import dataclass
from typing import List, Optional
import logging
import threading

from chat.llm_clients.base import BaseLLMClient, LLMException
from chat.models import ConversationHistory, Message, MessageRole
from domain.models import RagResponse
from retrieval.augmentor import AugmentedContext, RetrievalAugmentor

logger = logging.getLogger(__name__)

DEFAULT_PROMPT_TEMPLATE = (
    "Answer the question using the context below. "
    "If the context does not contain the answer, say \"I don't know\".\n\n"
    "Context:\n{context}\n\n"
    "Question: {question}\n\n"
    "Answer:"
)

DEFAULT_NO_CONTEXT_MESSAGE = (
    "Sorry, I could not find any relevant information in the knowledge base."
)


@dataclass
class RAGConfig:
    """Configuration for RAG service.

    Attributes:
        prompt_template: Answer prompt with ``{context}`` and ``{question}`` placeholders
        no_context_message: Fixed answer when nothing relevant is retrieved
        history_max_messages: Messages kept in the conversation history
    """
    prompt_template: str = DEFAULT_PROMPT_TEMPLATE
    no_context_message: str = DEFAULT_NO_CONTEXT_MESSAGE
    history_max_messages: int = 10


class RAGService:
    """Service for Retrieval-Augmented Generation.

    Retrieves the grounding context with a retrieval augmentor and asks the
    generative model to answer from it. When nothing relevant is found the
    fixed no-context message is returned and the model is not called.

    One instance serves concurrent requests; reads and writes of the
    conversation history hold a lock, and each question and its answer are
    recorded together.

    Example usage:
        rag_service = RAGService(augmentor=augmentor, llm_client=OllamaClient(config))

        response = rag_service.query_with_sources("What is photosynthesis?")
        print(response.answer)
        print(f"Sources: {len(response.sources)}")
    """

    def __init__(
        self,
        augmentor: RetrievalAugmentor,
        llm_client: Optional[BaseLLMClient] = None,
        config: Optional[RAGConfig] = None
    ):
        """Initialize RAG service.

        Args:
            augmentor: Builds the context for each question
            llm_client: Generative model; required only when there is context to answer from
            config: RAG configuration (uses defaults if not provided)
        """
        self.augmentor = augmentor
        self.llm_client = llm_client
        self.config = config or RAGConfig()
        self.conversation_history = ConversationHistory(
            max_messages=self.config.history_max_messages
        )
        self._history_lock = threading.Lock()

    def query(self, question: str, **llm_kwargs) -> str:
        return self.query_with_sources(question, **llm_kwargs).answer

    def query_with_sources(self, question: str, **llm_kwargs) -> RagResponse:
        """Answer a question and return the texts of the segments used.

        Raises:
            NoRetrieversConfigured: If no retriever is enabled
            LLMException: If context was found but no generative model is configured,
                or the model call fails
        """
        history = self.get_history_messages(include_system=False)
        augmented = self.augmentor.augment(question, chat_history=history)

        if augmented.is_empty:
            logger.info("No relevant segments found, returning fixed message")
            answer = self.config.no_context_message
        else:
            answer = self._generate(question, augmented, **llm_kwargs)

        with self._history_lock:
            self.conversation_history.add_message(MessageRole.USER, question)
            self.conversation_history.add_message(MessageRole.ASSISTANT, answer)
        return RagResponse(answer=answer, sources=augmented.sources)

    def build_prompt(self, question: str, augmented: AugmentedContext) -> str:
        return self.config.prompt_template.format(
            context=augmented.context,
            question=question
        )

    def _generate(self, question: str, augmented: AugmentedContext, **llm_kwargs) -> str:
        if self.llm_client is None:
            raise LLMException("No generative model configured to answer the question")

        prompt = self.build_prompt(question, augmented)
        messages = [Message(role=MessageRole.USER, content=prompt)]
        answer = self.llm_client.generate(messages, **llm_kwargs)
        logger.debug(f"Generated answer from {len(augmented.matches)} segments")
        return answer.strip()

    def get_conversation_history(self) -> ConversationHistory:
        return self.conversation_history

    def get_history_messages(self, include_system: bool = True) -> List[Message]:
        """Snapshot of the conversation history"""
        with self._history_lock:
            return self.conversation_history.get_messages(include_system=include_system)

    def clear_conversation(self) -> None:
        with self._history_lock:
            self.conversation_history.clear()
