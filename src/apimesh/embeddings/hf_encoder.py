from __future__ import annotations

from typing import Optional

import numpy as np
import torch
from transformers import AutoModel, AutoTokenizer

from apimesh.embeddings.encoder import EmbeddingProvider


def _mean_pool(hidden: torch.Tensor, attention_mask: torch.Tensor) -> torch.Tensor:
    mask = attention_mask.unsqueeze(-1).to(hidden.dtype)
    return (hidden * mask).sum(dim=1) / mask.sum(dim=1).clamp(min=1e-9)


class HuggingFaceEmbeddingProvider(EmbeddingProvider):
    """
    Sentence-encoder provider for descriptor signatures.

    Signatures longer than ``max_length`` tokens are truncated. The
    vector width comes from the model; when ``expected_dimension`` is
    given and differs, construction fails so that a graph never mixes
    widths.
    """

    def __init__(
        self,
        *,
        model_name: str,
        device: str = "cpu",
        max_length: int = 256,
        expected_dimension: Optional[int] = None,
    ) -> None:
        self.model_name = model_name
        self.device = device
        self.max_length = max_length

        self.tokenizer = AutoTokenizer.from_pretrained(model_name)
        self.model = AutoModel.from_pretrained(model_name).to(device).eval()

        width = int(self.model.config.hidden_size)
        if expected_dimension is not None and width != expected_dimension:
            raise ValueError(
                f"Model {model_name} produces {width}-d vectors, "
                f"configured dimension is {expected_dimension}"
            )

        super().__init__(dimension=width)

    def _encode_text(self, text: str) -> np.ndarray:
        batch = self.tokenizer(
            text,
            return_tensors="pt",
            truncation=True,
            max_length=self.max_length,
        ).to(self.device)

        with torch.no_grad():
            hidden = self.model(**batch).last_hidden_state
            pooled = _mean_pool(hidden, batch["attention_mask"])[0]

        vec = pooled.cpu().numpy().astype(np.float64)
        norm = np.linalg.norm(vec)
        return vec / norm if norm > 0 else vec
