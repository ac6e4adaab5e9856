from dataclasses import dataclass, field
from typing import List

from vector_store.similarity import ScoredChunk

NO_CONTENT_ANSWER = "No relevant content was found in the indexed documents."


@dataclass
class Answer:
    question: str
    text: str
    sources: List[ScoredChunk] = field(default_factory=list)


class AnswerAgent:
    def __init__(self, rag, llm, top_k=5):
        self.rag = rag
        self.llm = llm
        self.top_k = top_k

    def answer(self, question):
        result = self.rag.find_relevant_content(question, top_k=self.top_k)
        if result is None:
            return Answer(question=question, text=NO_CONTENT_ANSWER)

        context = "\n---\n".join(c.content_chunk for c in result.chunks)
        prompt = f"""
You are a document question-answering assistant.
Answer using only the context below. If the context does not contain the answer, say so.

Context:
{context}

Question:
{question}
"""
        return Answer(question=question, text=self.llm.ask(prompt).strip(), sources=result.chunks)
