import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, File, HTTPException, UploadFile

from chunking import ChunkingConfigError
from logging_config import setup_logging
from pdf_extractor import ExtractionError, UnsupportedDocumentError, format_error_chain
from vector_store.exceptions import (
    EmbeddingError,
    EmbeddingTimeoutError,
    EmptyInputError,
    VectorStoreError,
)

from .config import KnowledgeBaseConfig
from .exceptions import DuplicateDocumentError
from .knowledge_base import KnowledgeBase
from .models import (
    ClearResponse,
    DocumentSummary,
    HealthResponse,
    IngestResult,
    SearchRequest,
    SearchResponse,
)

logger = logging.getLogger(__name__)


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, UnsupportedDocumentError):
        return HTTPException(status_code=415, detail=str(exc))
    if isinstance(exc, (ExtractionError, EmptyInputError, ChunkingConfigError)):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, (DuplicateDocumentError, VectorStoreError)):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, EmbeddingTimeoutError):
        return HTTPException(status_code=504, detail=str(exc))
    if isinstance(exc, EmbeddingError):
        return HTTPException(status_code=503, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


def create_app(knowledge_base: KnowledgeBase | None = None) -> FastAPI:
    kb = knowledge_base or KnowledgeBase(KnowledgeBaseConfig.from_env())

    app = FastAPI(
        title="Knowledge Base Service",
        version="1.0.0",
        description="Upload PDFs and search them by semantic similarity.",
    )
    app.state.knowledge_base = kb

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        embedder_health = {}
        if hasattr(kb.embedder, "health_check"):
            embedder_health = kb.embedder.health_check()
        return HealthResponse(
            status="ok",
            documents=kb.count(),
            chunks=kb.chunk_count(),
            embedder=embedder_health,
        )

    @app.get("/documents", response_model=list[DocumentSummary])
    def documents() -> list[DocumentSummary]:
        return [
            DocumentSummary(
                filename=doc.document_id,
                page_count=doc.page_count,
                chunk_count=doc.chunk_count,
                uploaded_at=doc.uploaded_at,
            )
            for doc in kb.documents()
        ]

    @app.post("/documents", response_model=IngestResult)
    def upload(file: UploadFile = File(...)) -> IngestResult:
        filename = file.filename or "upload.pdf"
        data = file.file.read(kb.config.max_upload_bytes + 1)
        if len(data) > kb.config.max_upload_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"File exceeds {kb.config.max_upload_bytes} bytes",
            )
        try:
            return kb.add_document(data, filename)
        except Exception as exc:
            logger.error("Upload of %s failed:\n%s", filename, format_error_chain(exc))
            raise _http_error(exc) from exc

    @app.delete("/documents", response_model=ClearResponse)
    def clear() -> ClearResponse:
        return kb.clear_all()

    @app.post("/search", response_model=SearchResponse)
    def search(request: SearchRequest) -> SearchResponse:
        try:
            results = kb.search(request.query, request.top_k)
        except Exception as exc:
            raise _http_error(exc) from exc
        return SearchResponse(query=request.query, results=results)

    return app


def main() -> None:
    import uvicorn

    load_dotenv()
    setup_logging()
    uvicorn.run(
        create_app(),
        host=os.environ.get("KB_HOST", "127.0.0.1"),
        port=int(os.environ.get("KB_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
