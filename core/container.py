"""
Startup wiring.

Builds every strategy registry once from the settings and the optional
collaborators (embedder, vector store, generative model). Registries are
read-only after this point.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union
import logging

from chat.llm_clients.base import BaseLLMClient, LLMConfig
from chat.llm_clients.ollama_client import OllamaClient
from chat.rag_service import RAGConfig, RAGService
from config.settings import Settings, settings as default_settings
from core.registry import StrategyRegistry, UnsupportedStrategyKind
from embeddings.base import BaseEmbedding, EmbeddingConfig
from embeddings.factory import create_embedder
from ingestion.loaders.loader_factory import build_loader_registry
from ingestion.parsers.parser_factory import build_parser_registry
from ingestion.pipeline import IngestionOrchestrator
from ingestion.segment_transformers.segment_transformer_factory import build_segment_transformer_registry
from ingestion.splitters.splitter_factory import build_splitter_registry
from ingestion.transformers.transformer_factory import build_document_transformer_registry
from retrieval.augmentor_factory import build_augmentor_registry
from retrieval.query.query_transformer_factory import build_query_transformer_registry
from retrieval.retrievers.retriever_factory import build_retriever_registry
from retrieval.routers.router_factory import build_router_registry
from retrieval.routers.routers import parse_rules
from vectorstore import BaseVectorStore, create_vector_store

logger = logging.getLogger(__name__)


class StrategyCategory(str, Enum):
    LOADER = "LOADER"
    PARSER = "PARSER"
    DOCUMENT_TRANSFORMER = "DOCUMENT_TRANSFORMER"
    SPLITTER = "SPLITTER"
    SEGMENT_TRANSFORMER = "SEGMENT_TRANSFORMER"
    RETRIEVER = "RETRIEVER"
    QUERY_TRANSFORMER = "QUERY_TRANSFORMER"
    QUERY_ROUTER = "QUERY_ROUTER"
    RETRIEVAL_AUGMENTOR = "RETRIEVAL_AUGMENTOR"


@dataclass
class PipelineContainer:
    """All registries plus the collaborators they were built around"""
    settings: Settings
    embedder: BaseEmbedding
    vector_store: BaseVectorStore
    llm_client: Optional[BaseLLMClient]
    parsers: StrategyRegistry
    loaders: StrategyRegistry
    document_transformers: StrategyRegistry
    splitters: StrategyRegistry
    segment_transformers: StrategyRegistry
    retrievers: StrategyRegistry
    query_transformers: StrategyRegistry
    routers: StrategyRegistry
    augmentors: StrategyRegistry
    ingestion: IngestionOrchestrator
    rag_service: RAGService

    def registry(self, category: Union[StrategyCategory, str]) -> StrategyRegistry:
        """
        Raises:
            UnsupportedStrategyKind: If the category is unknown
        """
        try:
            resolved = StrategyCategory(str(getattr(category, "value", category)).strip().upper().replace("-", "_"))
        except ValueError:
            raise UnsupportedStrategyKind("StrategyCategory", category) from None
        return getattr(self, _REGISTRY_ATTRIBUTES[resolved])

    def list_strategies(self, category: Union[StrategyCategory, str]) -> Dict[str, str]:
        """Kind -> description for one category"""
        return self.registry(category).list_descriptions()


_REGISTRY_ATTRIBUTES = {
    StrategyCategory.LOADER: "loaders",
    StrategyCategory.PARSER: "parsers",
    StrategyCategory.DOCUMENT_TRANSFORMER: "document_transformers",
    StrategyCategory.SPLITTER: "splitters",
    StrategyCategory.SEGMENT_TRANSFORMER: "segment_transformers",
    StrategyCategory.RETRIEVER: "retrievers",
    StrategyCategory.QUERY_TRANSFORMER: "query_transformers",
    StrategyCategory.QUERY_ROUTER: "routers",
    StrategyCategory.RETRIEVAL_AUGMENTOR: "augmentors",
}


def create_llm_client(config: Settings) -> Optional[BaseLLMClient]:
    """
    Build the configured generative model client, or None when LLM_PROVIDER is "none".

    Raises:
        ValueError: If the provider is unknown
    """
    provider = config.LLM_PROVIDER.strip().lower()
    if provider == "none":
        logger.info("No generative model configured")
        return None
    if provider == "ollama":
        llm_config = LLMConfig(
            model_name=config.OLLAMA_MODEL,
            timeout=config.OLLAMA_TIMEOUT,
            max_tokens=config.OLLAMA_MAX_TOKENS,
            temperature=config.OLLAMA_TEMPERATURE,
        )
        logger.info(f"LLM client ready: {config.OLLAMA_MODEL} @ {config.OLLAMA_BASE_URL}")
        return OllamaClient(config=llm_config, base_url=config.OLLAMA_BASE_URL)
    raise ValueError(f"Unknown LLM provider: '{config.LLM_PROVIDER}'. Available providers: ollama, none")


def create_embedding_model(config: Settings) -> BaseEmbedding:
    embedding_config = EmbeddingConfig(
        model_name=config.EMBEDDING_MODEL,
        dimension=config.EMBEDDING_DIMENSION,
        batch_size=config.EMBEDDING_BATCH_SIZE,
    )
    embedder = create_embedder(provider=config.EMBEDDING_PROVIDER, config=embedding_config)
    logger.info(f"Embedder ready: {config.EMBEDDING_PROVIDER} (dim={embedder.get_dimension()})")
    return embedder


def create_store(config: Settings, dimension: int) -> BaseVectorStore:
    try:
        store = create_vector_store(
            provider=config.VECTOR_STORE_TYPE,
            dimension=dimension,
            collection_name=config.CHROMA_COLLECTION_NAME,
            persist_directory=config.CHROMA_PERSIST_DIRECTORY,
        )
        logger.info(f"Vector store ready: {config.VECTOR_STORE_TYPE}")
    except ValueError as exc:
        logger.warning(f"{exc} Falling back to in-memory store")
        store = create_vector_store(provider="memory", dimension=dimension)
    return store


def build_container(
    settings: Optional[Settings] = None,
    embedder: Optional[BaseEmbedding] = None,
    vector_store: Optional[BaseVectorStore] = None,
    llm_client: Optional[BaseLLMClient] = None,
    use_configured_llm: bool = True
) -> PipelineContainer:
    """
    Build every registry from the settings.

    Collaborators passed in are used as-is. When ``llm_client`` is None and
    ``use_configured_llm`` is True, the client named by LLM_PROVIDER is
    created; pass ``use_configured_llm=False`` to run without a model.
    """
    config = settings or default_settings
    if llm_client is None and use_configured_llm:
        llm_client = create_llm_client(config)
    embedder = embedder or create_embedding_model(config)
    vector_store = vector_store or create_store(config, embedder.get_dimension())

    parsers = build_parser_registry()
    loaders = build_loader_registry(
        parsers=parsers,
        resource_dir=config.RESOURCE_DIR,
        url_timeout=config.URL_LOADER_TIMEOUT,
    )
    document_transformers = build_document_transformer_registry(
        min_length=config.FILTER_MIN_LENGTH,
        max_length=config.FILTER_MAX_LENGTH,
        llm_client=llm_client,
    )
    splitters = build_splitter_registry(
        max_segment_size=config.SPLITTER_MAX_SEGMENT_SIZE,
        max_overlap_size=config.SPLITTER_MAX_OVERLAP_SIZE,
        regex=config.SPLITTER_REGEX,
        regex_joiner=config.SPLITTER_REGEX_JOINER,
        recursive_levels=config.SPLITTER_RECURSIVE_LEVELS,
    )
    segment_transformers = build_segment_transformer_registry(
        min_length=config.SEGMENT_FILTER_MIN_LENGTH,
    )

    retrievers = build_retriever_registry(
        embedder=embedder,
        vector_store=vector_store,
        max_results=config.RETRIEVAL_MAX_RESULTS,
        min_score=config.RETRIEVAL_MIN_SCORE,
        enabled_kinds=config.RETRIEVAL_ENABLED_RETRIEVERS,
        dynamic_max_results=config.RETRIEVAL_DYNAMIC_MAX_RESULTS,
        semantic_weight=config.HYBRID_SEMANTIC_WEIGHT,
        keyword_weight=config.HYBRID_KEYWORD_WEIGHT,
    )
    query_transformers = build_query_transformer_registry(
        llm_client=llm_client,
        expansion_count=config.QUERY_EXPANSION_COUNT,
    )
    routers = build_router_registry(
        retrievers,
        llm_client=llm_client,
        rules=parse_rules(config.QUERY_ROUTER_RULES),
    )
    augmentors = build_augmentor_registry(
        query_transformers,
        routers,
        max_results=config.RETRIEVAL_MAX_RESULTS,
        min_score=config.RETRIEVAL_MIN_SCORE,
        query_transformation=config.QUERY_TRANSFORMER_ENABLED,
        router_kind=config.QUERY_ROUTER,
        max_workers=config.RETRIEVAL_MAX_WORKERS,
    )

    ingestion = IngestionOrchestrator(
        loaders=loaders,
        document_transformers=document_transformers,
        splitters=splitters,
        segment_transformers=segment_transformers,
        embedder=embedder,
        vector_store=vector_store,
        default_splitter=config.SPLITTER_DEFAULT,
        default_document_pipeline=config.DOCUMENT_TRANSFORMER_PIPELINE,
        default_segment_pipeline=config.SEGMENT_TRANSFORMER_PIPELINE,
        document_transformers_enabled=config.DOCUMENT_TRANSFORMERS_ENABLED,
        segment_transformers_enabled=config.SEGMENT_TRANSFORMERS_ENABLED,
    )
    rag_service = RAGService(
        augmentor=augmentors.resolve(config.RAG_AUGMENTOR),
        llm_client=llm_client,
        config=RAGConfig(
            prompt_template=config.RAG_PROMPT_TEMPLATE,
            no_context_message=config.RAG_NO_CONTEXT_MESSAGE,
            history_max_messages=config.RAG_HISTORY_MAX_MESSAGES,
        ),
    )

    logger.info("All pipeline components initialized")
    return PipelineContainer(
        settings=config,
        embedder=embedder,
        vector_store=vector_store,
        llm_client=llm_client,
        parsers=parsers,
        loaders=loaders,
        document_transformers=document_transformers,
        splitters=splitters,
        segment_transformers=segment_transformers,
        retrievers=retrievers,
        query_transformers=query_transformers,
        routers=routers,
        augmentors=augmentors,
        ingestion=ingestion,
        rag_service=rag_service,
    )
