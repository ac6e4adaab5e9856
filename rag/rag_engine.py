import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from utils.chunker import chunk_text
from utils.errors import ConfigurationError, EmptyDocumentError, RagError
from utils.file import list_pdfs
from utils.pdf_reader import extract_text
from vector_store.similarity import (
    SIMILARITY_THRESHOLD,
    ScoredChunk,
    find_most_similar,
    is_embedding_record,
)

logger = logging.getLogger(__name__)

RESOURCES_TABLE = "resources"
EMBEDDINGS_TABLE = "embeddings"


@dataclass
class IngestResult:
    resource: Dict[str, Any]
    embeddings_count: int


@dataclass
class SearchResult:
    query: str
    chunks: List[ScoredChunk] = field(default_factory=list)


class RAGEngine:
    """
    Ingests documents into a record store and searches them by embedding similarity.

    Args:
        store: Record store holding the `resources` and `embeddings` tables.
        embedder: Object with an `embed(text) -> list[float]` method.
        chunk_size: Characters per chunk.
        chunk_overlap: Characters shared by consecutive chunks.
        threshold: Minimum cosine similarity for a chunk to match.
    """

    def __init__(self, store, embedder, chunk_size=500, chunk_overlap=50,
                 threshold=SIMILARITY_THRESHOLD):
        if chunk_size <= 0 or not 0 <= chunk_overlap < chunk_size:
            raise ConfigurationError(
                f"chunk overlap must be in [0, chunk size); got size={chunk_size}, overlap={chunk_overlap}"
            )
        self.store = store
        self.embedder = embedder
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.threshold = threshold

    @classmethod
    def from_settings(cls, settings):
        from embeddings.embedder import build_embedder
        from vector_store.json_store import JsonRecordStore

        return cls(
            store=JsonRecordStore(settings.db_dir),
            embedder=build_embedder(settings),
            chunk_size=settings.chunk_size,
            chunk_overlap=settings.chunk_overlap,
            threshold=settings.similarity_threshold,
        )

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------
    def process_pdf(self, pdf_path) -> IngestResult:
        path = Path(pdf_path)
        logger.info("Processing PDF: %s", path)
        text = extract_text(path)
        if not text or not text.strip():
            logger.warning("PDF %s contains no text content.", path)
            raise EmptyDocumentError(f"PDF {path.name} contains no text content.")
        logger.info("Extracted %d characters of text.", len(text))
        return self.process_text(text, source_file=path.name)

    def process_text(self, text, source_file=None) -> IngestResult:
        # nothing is stored until every chunk is embedded
        chunk_embeddings = self._embed_chunks(text)
        logger.info("Generated %d embeddings for %s.", len(chunk_embeddings), source_file or "text")

        resource = self.store.insert(RESOURCES_TABLE, {
            "content": text,
            "source_file": source_file,
        })
        logger.info("Stored resource with ID: %s", resource["id"])
        if not chunk_embeddings:
            logger.warning("No embeddings generated for resource %s.", resource["id"])
            return IngestResult(resource=resource, embeddings_count=0)

        inserted = self.store.insert_many(EMBEDDINGS_TABLE, [
            {
                "resource_id": resource["id"],
                "content_chunk": chunk,
                "embedding": vector,
            }
            for chunk, vector in chunk_embeddings
        ])
        logger.info("Stored %d embedding records.", len(inserted))
        return IngestResult(resource=resource, embeddings_count=len(inserted))

    def process_directory(self, directory) -> List[IngestResult]:
        results = []
        for pdf in list_pdfs(directory):
            try:
                results.append(self.process_pdf(pdf))
            except RagError as e:
                logger.error("Failed to ingest %s: %s", pdf.name, e)
        if not results:
            logger.warning("No PDF documents were ingested from %s.", directory)
        return results

    def _embed_chunks(self, text):
        pairs = []
        for chunk in chunk_text(text, self.chunk_size, self.chunk_overlap):
            vector = self.embedder.embed(chunk)
            if vector:
                pairs.append((chunk, vector))
        return pairs

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def find_relevant_content(self, query, top_k=None) -> Optional[SearchResult]:
        """
        Rank stored chunks against `query`. Returns None when nothing can be
        compared or no chunk clears the threshold.
        """
        logger.info("Finding relevant content for query: %r", query)
        query_vector = self.embedder.embed(query)
        if not query_vector:
            logger.warning("Could not generate embedding for the query.")
            return None

        stored = [r for r in self.store.get_all(EMBEDDINGS_TABLE) if is_embedding_record(r)]
        if not stored:
            logger.info("No stored embeddings found to search against.")
            return None
        logger.info("Comparing query against %d stored embeddings.", len(stored))

        chunks = find_most_similar(query_vector, stored, threshold=self.threshold, top_k=top_k)
        if not chunks:
            logger.info("No sufficiently similar content found.")
            return None
        return SearchResult(query=query, chunks=chunks)

    def get_resource(self, resource_id):
        return self.store.get_by_id(RESOURCES_TABLE, resource_id)

    def reset(self):
        for table in (RESOURCES_TABLE, EMBEDDINGS_TABLE):
            self.store.delete_table(table)
