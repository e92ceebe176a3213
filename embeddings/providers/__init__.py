"""
Embedding providers.
Auto-imports all providers to register them with the factory.
"""

try:
    from embeddings.providers.hf_e5_embedding import HFMultilingualE5Embedding  # noqa: F401
except ImportError:
    # HF E5 requires torch/transformers - optional dependency
    pass
