from __future__ import annotations

import openai

from easyhyoka_core.errors import AuthFailure, ServiceFailure
from easyhyoka_core.providers.base import BaseSummarizer, ModelConfig
from easyhyoka_core.prompt import DEFAULT_TEMPLATE, PromptTemplate


class OpenAISummarizer(BaseSummarizer):
    # temperature=0.7 leaves room for narrative phrasing; the output is prose,
    # not structured data, so there is nothing to keep parseable.
    DEFAULT_MODEL_CONFIG = ModelConfig(model="gpt-4.1-mini-2025-04-14", temperature=0.7)
    API_KEY_ENV = "OPENAI_API_KEY"

    def __init__(
        self,
        api_key: str | None,
        model_config: ModelConfig | None = None,
        template: PromptTemplate = DEFAULT_TEMPLATE,
    ):
        super().__init__(api_key, model_config, template)
        # max_retries=0: the SDK retries by default, easyhyoka makes one attempt.
        self.client = openai.OpenAI(api_key=api_key, max_retries=0)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model_config.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.model_config.temperature,
                max_tokens=self.model_config.max_tokens,
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise AuthFailure(f"OpenAI rejected the API key: {e.message}", env_var=self.API_KEY_ENV) from e
        except openai.APIStatusError as e:
            raise ServiceFailure("OpenAI API error", status_code=e.status_code, body=e.response.text) from e
        except openai.APIConnectionError as e:
            raise ServiceFailure(f"Could not reach OpenAI: {e}") from e

        if not response.choices or response.choices[0].message.content is None:
            raise ServiceFailure("OpenAI returned no response text.")
        return response.choices[0].message.content
