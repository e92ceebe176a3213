"""
Settings and configuration management using Pydantic BaseSettings.
All configuration values can be overridden via environment variables.
"""
from pydantic_settings import BaseSettings
from typing import Dict, List


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden by creating a .env file in the project root
    or by setting environment variables with the same names. List values are
    read from the environment as JSON arrays.
    """

    # ========================================================================
    # GENERATIVE MODEL (OLLAMA) CONFIGURATION
    # ========================================================================
    LLM_PROVIDER: str = "ollama"  # Available: "ollama", "none"
    OLLAMA_MODEL: str = "phi"
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    OLLAMA_TIMEOUT: int = 120
    OLLAMA_MAX_TOKENS: int = 512
    OLLAMA_TEMPERATURE: float = 0.7

    # ========================================================================
    # RAG ANSWER CONFIGURATION
    # ========================================================================
    RAG_AUGMENTOR: str = "default"  # Available: "default", "simple", "advanced"
    RAG_PROMPT_TEMPLATE: str = (
        "Answer the question using the context below. "
        "If the context does not contain the answer, say \"I don't know\".\n\n"
        "Context:\n{context}\n\n"
        "Question: {question}\n\n"
        "Answer:"
    )
    RAG_NO_CONTEXT_MESSAGE: str = (
        "Sorry, I could not find any relevant information in the knowledge base."
    )
    RAG_HISTORY_MAX_MESSAGES: int = 10

    # ========================================================================
    # EMBEDDING CONFIGURATION
    # ========================================================================
    EMBEDDING_PROVIDER: str = "hash"  # Available: "hash", "hf-e5"
    EMBEDDING_MODEL: str = "hash-embeddings"
    EMBEDDING_DIMENSION: int = 384
    EMBEDDING_BATCH_SIZE: int = 32

    # ========================================================================
    # VECTOR STORE CONFIGURATION
    # ========================================================================
    VECTOR_STORE_TYPE: str = "memory"  # Available: "memory", "chroma"
    CHROMA_PERSIST_DIRECTORY: str = "data/chroma"
    CHROMA_COLLECTION_NAME: str = "rag_segments"

    # ========================================================================
    # LOADER CONFIGURATION
    # ========================================================================
    RESOURCE_DIR: str = "resources"
    URL_LOADER_TIMEOUT: int = 30

    # ========================================================================
    # DOCUMENT TRANSFORMER CONFIGURATION
    # ========================================================================
    DOCUMENT_TRANSFORMERS_ENABLED: bool = True
    DOCUMENT_TRANSFORMER_PIPELINE: List[str] = [
        "CLEANING", "METADATA_ENHANCER", "FILTERING"
    ]
    FILTER_MIN_LENGTH: int = 50
    FILTER_MAX_LENGTH: int = 50000

    # ========================================================================
    # SPLITTER CONFIGURATION
    # ========================================================================
    SPLITTER_DEFAULT: str = "RECURSIVE"
    SPLITTER_MAX_SEGMENT_SIZE: int = 300
    SPLITTER_MAX_OVERLAP_SIZE: int = 50
    SPLITTER_REGEX: str = r"\n\s*\n"
    SPLITTER_REGEX_JOINER: str = "\n\n"
    SPLITTER_RECURSIVE_LEVELS: List[str] = [
        "paragraph", "sentence", "word", "character"
    ]

    # ========================================================================
    # SEGMENT TRANSFORMER CONFIGURATION
    # ========================================================================
    SEGMENT_TRANSFORMERS_ENABLED: bool = True
    SEGMENT_TRANSFORMER_PIPELINE: List[str] = ["TITLE_ENHANCER", "METADATA_ENHANCER"]
    SEGMENT_FILTER_MIN_LENGTH: int = 1

    # ========================================================================
    # RETRIEVAL CONFIGURATION
    # ========================================================================
    RETRIEVAL_MAX_RESULTS: int = 5
    RETRIEVAL_MIN_SCORE: float = 0.6
    RETRIEVAL_DYNAMIC_MAX_RESULTS: bool = False
    RETRIEVAL_ENABLED_RETRIEVERS: List[str] = ["EMBEDDING_STORE"]
    RETRIEVAL_MAX_WORKERS: int = 4
    HYBRID_SEMANTIC_WEIGHT: float = 0.7
    HYBRID_KEYWORD_WEIGHT: float = 0.3

    # ========================================================================
    # QUERY TRANSFORMATION AND ROUTING
    # ========================================================================
    QUERY_TRANSFORMER_ENABLED: bool = False
    QUERY_EXPANSION_COUNT: int = 3
    QUERY_ROUTER: str = "DEFAULT"  # DEFAULT, LANGUAGE_MODEL, RULE_BASED, ROUND_ROBIN
    QUERY_ROUTER_RULES: Dict[str, str] = {}  # regex -> retriever kind, for RULE_BASED

    # ========================================================================
    # HTTP SERVER
    # ========================================================================
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 9000
    API_LOG_LEVEL: str = "info"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Singleton instance
settings = Settings()
