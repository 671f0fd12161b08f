from pathfinder.settings import settings
from pathfinder.agents.llm.base import LLMClient
from pathfinder.agents.llm.ollama import OllamaOpenAIClient
from pathfinder.agents.llm.openai_compat import OpenAICompatibleClient


def get_llm_client() -> LLMClient:
    if settings.LLM_PROVIDER == "groq":
        return OpenAICompatibleClient(
            api_key=settings.GROQ_API_KEY,
            base_url=settings.GROQ_BASE_URL,
            model=settings.GROQ_MODEL,
            json_mode=settings.llm_json_mode,
        )

    if settings.LLM_PROVIDER == "ollama":
        return OllamaOpenAIClient(
            base_url=settings.ollama_base_url,
            model=settings.ollama_model,
            json_mode=settings.llm_json_mode,
        )

    return OpenAICompatibleClient(
        api_key=settings.OPENAI_API_KEY,
        base_url=settings.OPENAI_BASE_URL,
        model=settings.OPENAI_MODEL,
        json_mode=settings.llm_json_mode,
    )
