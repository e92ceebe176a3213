"""
HuggingFace multilingual E5 embedding provider.
Requires the optional ``hf`` extra (torch + transformers).
"""
from typing import List
import logging

import torch
import torch.nn.functional as F
from transformers import AutoModel, AutoTokenizer

from embeddings.base import BaseEmbedding, EmbeddingConfig, EmbeddingException
from embeddings.factory import register_provider

logger = logging.getLogger(__name__)

DEFAULT_E5_MODEL = "intfloat/multilingual-e5-small"


@register_provider("hf-e5")
class HFMultilingualE5Embedding(BaseEmbedding):
    """
    E5 models are asymmetric: stored segments are embedded as
    ``passage: <text>`` and questions as ``query: <text>``.
    """

    max_length = 512

    def __init__(self, config: EmbeddingConfig):
        if not config.model_name or config.model_name == "hash-embeddings":
            config.model_name = DEFAULT_E5_MODEL
        super().__init__(config)

    def _validate_provider(self) -> None:
        try:
            logger.info(f"Loading model: {self.config.model_name}")
            self.tokenizer = AutoTokenizer.from_pretrained(self.config.model_name)
            self.model = AutoModel.from_pretrained(self.config.model_name)
            self.model.eval()
        except Exception as e:
            raise EmbeddingException(
                f"Failed to load HF E5 model {self.config.model_name}: {e}"
            ) from e

        hidden_size = self.model.config.hidden_size
        if self.config.dimension != hidden_size:
            logger.warning(
                f"Config dimension ({self.config.dimension}) differs from model "
                f"dimension ({hidden_size}). Using {hidden_size}."
            )
            self.config.dimension = hidden_size

    @staticmethod
    def _average_pool(last_hidden_states: torch.Tensor, attention_mask: torch.Tensor) -> torch.Tensor:
        masked = last_hidden_states.masked_fill(~attention_mask[..., None].bool(), 0.0)
        return masked.sum(dim=1) / attention_mask.sum(dim=1)[..., None]

    def _encode(self, texts: List[str], prefix: str) -> List[List[float]]:
        if any(not text or not text.strip() for text in texts):
            raise EmbeddingException("Cannot embed empty text")

        try:
            batch = self.tokenizer(
                [f"{prefix}: {text}" for text in texts],
                max_length=self.max_length,
                padding=True,
                truncation=True,
                return_tensors="pt",
            )
            with torch.no_grad():
                output = self.model(**batch)
                pooled = self._average_pool(output.last_hidden_state, batch["attention_mask"])
                if self.config.normalize:
                    pooled = F.normalize(pooled, p=2, dim=1)
        except Exception as e:
            raise EmbeddingException(f"Error generating embedding: {e}") from e

        return pooled.tolist()

    def embed_text(self, text: str) -> List[float]:
        return self._encode([text], "passage")[0]

    def embed_query(self, query: str) -> List[float]:
        return self._encode([query], "query")[0]

    def _embed_batch(self, batch: List[str]) -> List[List[float]]:
        return self._encode(batch, "passage")
