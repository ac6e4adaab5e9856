import argparse
import sys
from pathlib import Path

from agents.answer_agent import AnswerAgent
from models.llm_client import LLMClient
from rag.rag_engine import RAGEngine
from utils.config import Settings
from utils.errors import RagError
from utils.logging_setup import setup_logging

PREVIEW_CHARS = 500


def preview(text, limit=PREVIEW_CHARS):
    return text[:limit] + ("..." if len(text) > limit else "")


def positive_int(value):
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return n


def cmd_ingest(engine, args):
    paths = args.paths or [args.settings.documents_dir]
    total = 0
    for raw in paths:
        p = Path(raw)
        if p.is_dir():
            results = engine.process_directory(p)
        else:
            results = [engine.process_pdf(p)]
        for r in results:
            print(f"Resource {r.resource['id']} ({r.resource.get('source_file')}): "
                  f"{r.embeddings_count} embeddings stored")
            total += 1
    print(f"\nIngested {total} document(s).")
    return 0


def cmd_search(engine, args):
    result = engine.find_relevant_content(args.query, top_k=args.top_n)

    print("\n--- Search Results ---")
    if result is None:
        print(f'No relevant content found for query: "{args.query}"')
        return 0
    for i, chunk in enumerate(result.chunks, start=1):
        print(f"\n[{i}] Score: {chunk.similarity:.4f}")
        print("Text:")
        print(preview(chunk.content_chunk))
        print("---")
    return 0


def cmd_ask(engine, args):
    agent = AnswerAgent(engine, LLMClient.from_settings(args.settings), top_k=args.top_n or 5)
    answer = agent.answer(args.question)

    print("\nAnswer:")
    print(answer.text)
    if answer.sources:
        print("\nSources:")
        for i, chunk in enumerate(answer.sources, start=1):
            print(f'{i}: Score: {chunk.similarity:.3f} - "{preview(chunk.content_chunk, 80)}"')
    return 0


def cmd_reset(engine, args):
    engine.reset()
    print("Index cleared.")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(description="Ingest PDFs and search them by embedding similarity.")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("ingest", help="ingest PDF files or directories of PDFs")
    p.add_argument("paths", nargs="*", help="defaults to DOCUMENTS_DIR")
    p.set_defaults(func=cmd_ingest)

    p = sub.add_parser("search", help="rank stored chunks against a query")
    p.add_argument("query")
    p.add_argument("--top-n", type=positive_int, default=None)
    p.add_argument("--threshold", type=float, default=None)
    p.set_defaults(func=cmd_search)

    p = sub.add_parser("ask", help="answer a question from the retrieved chunks")
    p.add_argument("question")
    p.add_argument("--top-n", type=positive_int, default=None)
    p.add_argument("--threshold", type=float, default=None)
    p.set_defaults(func=cmd_ask)

    p = sub.add_parser("reset", help="delete all stored resources and embeddings")
    p.set_defaults(func=cmd_reset)
    return parser


def main(argv=None, settings=None, engine=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        args.settings = settings or Settings.from_env()
        if hasattr(args, "top_n") and args.top_n is None:
            args.top_n = args.settings.top_n
        engine = engine or RAGEngine.from_settings(args.settings)
        if getattr(args, "threshold", None) is not None:
            engine.threshold = args.threshold
        return args.func(engine, args)
    except RagError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
