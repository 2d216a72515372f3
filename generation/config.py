from dataclasses import dataclass
import os


@dataclass
class ChatConfig:
    api_key: str = ""
    base_url: str = "https://api.deepseek.com"
    model: str = "deepseek-chat"
    temperature: float = 0.3
    max_tokens: int = 2000
    timeout: float = 60.0
    max_context_tokens: int = 3000
    top_k: int = 3

    @classmethod
    def from_env(cls) -> "ChatConfig":
        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            return int(value) if value else default

        def _float(name: str, default: float) -> float:
            value = os.environ.get(name)
            return float(value) if value else default

        return cls(
            api_key=os.environ.get("DEEPSEEK_API_KEY", cls.api_key),
            base_url=os.environ.get("DEEPSEEK_BASE_URL", cls.base_url),
            model=os.environ.get("DEEPSEEK_MODEL", cls.model),
            temperature=_float("CHAT_TEMPERATURE", cls.temperature),
            max_tokens=_int("CHAT_MAX_TOKENS", cls.max_tokens),
            timeout=_float("CHAT_TIMEOUT", cls.timeout),
            max_context_tokens=_int("CHAT_MAX_CONTEXT_TOKENS", cls.max_context_tokens),
            top_k=_int("CHAT_TOP_K", cls.top_k),
        )
