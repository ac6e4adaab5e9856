"""
Brute-force cosine similarity ranking over stored embedding records.
"""
import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, Iterable, List, Optional, Sequence

import numpy as np

logger = logging.getLogger(__name__)

SIMILARITY_THRESHOLD = 0.5


@dataclass
class ScoredChunk:
    id: str
    resource_id: str
    content_chunk: str
    similarity: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "resource_id": self.resource_id,
            "content_chunk": self.content_chunk,
            "similarity": self.similarity,
        }


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between a and b; 0.0 for zero vectors or mismatched dimensions."""
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        return 0.0
    mag_a = np.linalg.norm(va)
    mag_b = np.linalg.norm(vb)
    if mag_a == 0 or mag_b == 0:
        return 0.0
    return float(np.dot(va, vb) / (mag_a * mag_b))


def is_embedding_record(obj: Any) -> bool:
    return (
        isinstance(obj, dict)
        and isinstance(obj.get("resource_id"), str)
        and isinstance(obj.get("content_chunk"), str)
        and isinstance(obj.get("embedding"), list)
        and all(_is_number(x) for x in obj["embedding"])
    )


def _is_number(x) -> bool:
    return isinstance(x, Real) and not isinstance(x, bool)


def find_most_similar(
    query_vector: Sequence[float],
    records: Iterable[Dict[str, Any]],
    threshold: float = SIMILARITY_THRESHOLD,
    top_k: Optional[int] = None,
) -> List[ScoredChunk]:
    """
    Score every record against the query and keep those at or above `threshold`.

    Results are ordered by descending similarity; equal scores keep storage
    order. Records with a missing, wrongly sized or non-numeric embedding are
    skipped. `top_k` must be positive; None returns every match.
    """
    if top_k is not None and top_k <= 0:
        raise ValueError(f"top_k must be positive, got {top_k}")
    records = list(records or [])
    if query_vector is None or len(query_vector) == 0 or not records:
        return []

    matches = []
    for record in records:
        embedding = record.get("embedding")
        if not embedding or len(embedding) != len(query_vector):
            logger.warning(
                "Skipping record ID %s due to missing or mismatched embedding dimension.",
                record.get("id"),
            )
            continue

        try:
            similarity = cosine_similarity(query_vector, embedding)
        except (TypeError, ValueError):
            logger.warning("Skipping record ID %s due to non-numeric embedding.", record.get("id"))
            continue
        if similarity >= threshold:
            matches.append(ScoredChunk(
                id=record.get("id"),
                resource_id=record.get("resource_id"),
                content_chunk=record.get("content_chunk"),
                similarity=similarity,
            ))

    # sorted() is stable, so ties stay in storage order
    matches = sorted(matches, key=lambda m: m.similarity, reverse=True)
    if top_k is not None:
        matches = matches[:top_k]
    return matches
