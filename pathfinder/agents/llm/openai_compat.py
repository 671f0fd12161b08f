from openai import OpenAI

from pathfinder.agents.llm.base import LLMClient


class OpenAICompatibleClient(LLMClient):
    """OpenAI, Groq or any other provider speaking the OpenAI chat API."""

    def __init__(self, *, api_key: str | None, base_url: str | None = None, model: str, json_mode: bool = False):
        self.client = OpenAI(api_key=api_key, base_url=base_url)
        self.model = model
        self.json_mode = json_mode

    def _complete(self, system: str, user: str, temperature: float, **extra) -> str:
        resp = self.client.chat.completions.create(
            model=self.model,
            temperature=temperature,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            **extra,
        )
        return (resp.choices[0].message.content or "").strip()

    def generate_text(self, *, system: str, user: str, temperature: float = 0.2) -> str:
        return self._complete(system, user, temperature)

    def generate_json(self, *, system: str, user: str, temperature: float = 0.2) -> str:
        if not self.json_mode:
            return self.generate_text(system=system, user=user, temperature=temperature)
        return self._complete(system, user, temperature, response_format={"type": "json_object"})
