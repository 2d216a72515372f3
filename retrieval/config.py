from dataclasses import dataclass
import os


def _int(name: str, default: int) -> int:
    value = os.environ.get(name)
    return int(value) if value else default


def _float(name: str, default: float) -> float:
    value = os.environ.get(name)
    return float(value) if value else default


def _bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if not value:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class KnowledgeBaseConfig:
    ollama_base_url: str = "http://localhost:11434"
    embed_model: str = "all-minilm"
    embed_timeout: float = 60.0
    embed_auto_pull: bool = True
    embed_retries: int = 1
    embed_retry_delay: float = 1.0
    embed_workers: int = 1
    chunk_size: int = 500
    chunk_overlap: int = 50
    top_k: int = 3
    max_upload_bytes: int = 50 * 1024 * 1024

    @classmethod
    def from_env(cls) -> "KnowledgeBaseConfig":
        return cls(
            ollama_base_url=os.environ.get("OLLAMA_BASE_URL", cls.ollama_base_url),
            embed_model=os.environ.get("KB_EMBED_MODEL", cls.embed_model),
            embed_timeout=_float("KB_EMBED_TIMEOUT", cls.embed_timeout),
            embed_auto_pull=_bool("KB_EMBED_AUTO_PULL", cls.embed_auto_pull),
            embed_retries=_int("KB_EMBED_RETRIES", cls.embed_retries),
            embed_retry_delay=_float("KB_EMBED_RETRY_DELAY", cls.embed_retry_delay),
            embed_workers=_int("KB_EMBED_WORKERS", cls.embed_workers),
            chunk_size=_int("KB_CHUNK_SIZE", cls.chunk_size),
            chunk_overlap=_int("KB_CHUNK_OVERLAP", cls.chunk_overlap),
            top_k=_int("KB_TOP_K", cls.top_k),
            max_upload_bytes=_int("KB_MAX_UPLOAD_BYTES", cls.max_upload_bytes),
        )
