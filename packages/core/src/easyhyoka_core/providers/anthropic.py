from __future__ import annotations

from easyhyoka_core.errors import AuthFailure, ServiceFailure
from easyhyoka_core.providers.base import BaseSummarizer, ModelConfig
from easyhyoka_core.prompt import DEFAULT_TEMPLATE, PromptTemplate


class AnthropicSummarizer(BaseSummarizer):
    DEFAULT_MODEL_CONFIG = ModelConfig(model="claude-sonnet-4-20250514", temperature=0.7)
    API_KEY_ENV = "ANTHROPIC_API_KEY"

    def __init__(
        self,
        api_key: str | None,
        model_config: ModelConfig | None = None,
        template: PromptTemplate = DEFAULT_TEMPLATE,
    ):
        super().__init__(api_key, model_config, template)
        try:
            from anthropic import Anthropic
        except ImportError:
            raise ImportError(
                "The 'anthropic' package is required for this provider. "
                "Install it with: pip install 'easyhyoka[anthropic]'"
            )
        self.client = Anthropic(api_key=api_key, max_retries=0)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        # Imported inside the method because the anthropic package is optional;
        # __init__ already validated it is installed before we reach here.
        import anthropic
        from anthropic.types import TextBlock

        try:
            response = self.client.messages.create(
                model=self.model_config.model,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
                temperature=self.model_config.temperature,
                max_tokens=self.model_config.max_tokens,
            )
        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as e:
            raise AuthFailure(f"Anthropic rejected the API key: {e.message}", env_var=self.API_KEY_ENV) from e
        except anthropic.APIStatusError as e:
            raise ServiceFailure("Anthropic API error", status_code=e.status_code, body=e.response.text) from e
        except anthropic.APIConnectionError as e:
            raise ServiceFailure(f"Could not reach Anthropic: {e}") from e

        text_blocks = [block.text for block in response.content if isinstance(block, TextBlock)]
        if not text_blocks:
            raise ServiceFailure("Anthropic returned no response text.")
        return "".join(text_blocks)
