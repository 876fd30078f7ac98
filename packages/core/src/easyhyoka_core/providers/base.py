"""Base summarizer implementing the Template Method pattern.

All providers share the same flow:
    summarize() → _call_api()   ← only this differs per provider

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call, translate SDK errors into
    AuthFailure / ServiceFailure, and return the text response

There is deliberately no retry loop: a failed call is reported once and the
operator decides whether to run again.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from easyhyoka_core.errors import AuthFailure
from easyhyoka_core.prompt import DEFAULT_TEMPLATE, PromptTemplate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelConfig:
    model: str
    temperature: float
    max_tokens: int = 4096


class BaseSummarizer(ABC):
    DEFAULT_MODEL_CONFIG: ModelConfig
    # Environment variable named in AuthFailure messages.
    API_KEY_ENV: str

    def __init__(
        self,
        api_key: str | None,
        model_config: ModelConfig | None = None,
        template: PromptTemplate = DEFAULT_TEMPLATE,
    ):
        if not api_key:
            raise AuthFailure(f"No API key for {self.__class__.__name__}.", env_var=self.API_KEY_ENV)
        self.model_config = model_config or self.DEFAULT_MODEL_CONFIG
        self.template = template

    def summarize(self, prompt: str) -> str:
        """Send ``prompt`` with the template's system prompt and return the model text as-is."""
        logger.info(
            "%s: requesting summary from %s (%d prompt chars)",
            self.__class__.__name__,
            self.model_config.model,
            len(prompt),
        )
        return self._call_api(self.template.system, prompt)

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        """Make a single API call and return the raw text response.

        Must raise AuthFailure when the credential is rejected and
        ServiceFailure for any other failure, keeping the status code and
        response body where the SDK exposes them.
        """
