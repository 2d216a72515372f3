from pathlib import Path

from dotenv import load_dotenv

from logging_config import get_logger, setup_logging
from pdf_extractor import ExtractionError
from retrieval import DuplicateDocumentError, KnowledgeBase, KnowledgeBaseConfig
from vector_store.exceptions import EmbeddingError, EmptyInputError

from .chat_client import DeepSeekClient
from .config import ChatConfig
from .exceptions import ChatError
from .service import AnswerService

logger = get_logger("cli")

HELP = """Commands:
  /upload <path.pdf>   add a PDF to the knowledge base
  /count               show number of documents and chunks
  /clear               remove all documents
  /help                show this help
  exit                 quit
Anything else is sent as a question."""


def upload(kb: KnowledgeBase, path_text: str) -> None:
    path = Path(path_text).expanduser()
    if not path.is_file():
        print(f"File not found: {path}")
        return
    if path.suffix.lower() != ".pdf":
        print("Only PDF files are supported.")
        return
    try:
        result = kb.add_document(path.read_bytes(), path.name)
    except (ExtractionError, EmbeddingError, EmptyInputError, DuplicateDocumentError) as exc:
        logger.warning("Upload of %s failed: %s", path.name, exc)
        print(f"Could not add {path.name}: {exc}")
        return
    print(
        f"Added {path.name}: {result.metadata.page_count} pages, "
        f"{result.chunks_added} chunks ({result.total_time_seconds}s)"
    )


def run_loop(kb: KnowledgeBase, service: AnswerService) -> None:
    while True:
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            break
        if not line:
            continue
        if line.lower() in {"exit", "quit"}:
            break
        if line.startswith("/upload"):
            upload(kb, line[len("/upload"):].strip())
        elif line == "/count":
            print(f"{kb.count()} documents, {kb.chunk_count()} chunks")
        elif line == "/clear":
            cleared = kb.clear_all()
            print(f"Removed {cleared.documents_removed} documents.")
        elif line == "/help":
            print(HELP)
        else:
            try:
                answer = service.answer(line)
            except (ChatError, EmbeddingError, EmptyInputError) as exc:
                logger.error("Answer failed: %s", exc)
                print(f"Sorry, an error occurred: {exc}")
                continue
            print(answer.answer)
            for source in answer.sources:
                print(
                    f"  [{source.similarity:.3f}] {source.metadata.get('filename')} "
                    f"chunk {source.metadata.get('chunk_index')}"
                )


def main() -> None:
    load_dotenv()
    setup_logging()

    chat_config = ChatConfig.from_env()
    kb = KnowledgeBase(KnowledgeBaseConfig.from_env())
    service = AnswerService(
        kb, DeepSeekClient.from_config(chat_config), top_k=chat_config.top_k
    )

    print("Knowledge Base Chat (Ollama embeddings + DeepSeek)")
    print(HELP)

    try:
        kb.open()
    except EmbeddingError as exc:
        # The embedder initializes again on the first upload or search
        logger.warning("Embedding model not ready at startup: %s", exc)
        print(f"Embedding model not ready ({exc}). Uploads will retry it.")

    try:
        run_loop(kb, service)
    finally:
        kb.close()


if __name__ == "__main__":
    main()
