## Base LLM Client Interface
import asyncio
from abc import ABC, abstractmethod


class LLMClient(ABC):
    @abstractmethod
    def generate_text(self, *, system: str, user: str, temperature: float = 0.2) -> str:
        raise NotImplementedError

    def generate_json(self, *, system: str, user: str, temperature: float = 0.2) -> str:
        """
        Default strategy: plain completion; the caller extracts the JSON object.
        Concrete clients override this when the provider has a native JSON mode.
        """
        return self.generate_text(system=system, user=user, temperature=temperature)

    async def agenerate_json(self, *, system: str, user: str, temperature: float = 0.2) -> str:
        # Blocking SDK call, so keep it off the event loop
        return await asyncio.to_thread(
            self.generate_json, system=system, user=user, temperature=temperature
        )
