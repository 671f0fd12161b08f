import httpx

from pathfinder.agents.llm.base import LLMClient


class OllamaOpenAIClient(LLMClient):
    def __init__(self, base_url: str, model: str, json_mode: bool = False, timeout: float = 300):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.json_mode = json_mode
        self.timeout = timeout

    def _complete(self, system: str, user: str, temperature: float, json_mode: bool) -> str:
        # Ollama OpenAI-compatible endpoint
        # POST {base_url}/chat/completions with OpenAI message format

        url = f"{self.base_url}/chat/completions"
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": temperature,
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        headers = {
            "Content-Type": "application/json",
            # OpenAI-compatible clients require an api key field; Ollama ignores it
            "Authorization": "Bearer ollama",
        }

        with httpx.Client(timeout=self.timeout) as client:
            r = client.post(url, json=payload, headers=headers)
            r.raise_for_status()
            data = r.json()

        return data["choices"][0]["message"]["content"]

    def generate_text(self, *, system: str, user: str, temperature: float = 0.2) -> str:
        return self._complete(system, user, temperature, json_mode=False)

    def generate_json(self, *, system: str, user: str, temperature: float = 0.2) -> str:
        return self._complete(system, user, temperature, json_mode=self.json_mode)
