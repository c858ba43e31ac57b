"""LLM-based spending insight generation."""
from typing import Any, List, Optional, Sequence

from langchain.chat_models import init_chat_model
from langchain_core.language_models import BaseChatModel

from .models import Insight
from .normalizer import normalize_completion
from .prompt import build_prompt
from spendwise.config import AppSettings, Config, get_settings
from spendwise.utils.logger import get_logger
from spendwise.utils.exceptions import ConfigError, UpstreamError, ValidationError

logger = get_logger()


class InsightGenerator:
    """Generates spending insights with a chat completion model."""

    def __init__(
        self,
        config: Optional[Config],
        settings: Optional[AppSettings] = None,
        model: Optional[BaseChatModel] = None
    ):
        """
        Initialize insight generator.

        Args:
            config: User configuration holding the provider API key
            settings: Application settings, defaults to the global settings
            model: Chat model to use instead of building one from settings
        """
        self.settings = settings or get_settings()
        self.max_records = self.settings.insights_max_records
        self.insight_count = self.settings.insights_count

        if model is None:
            if config is None or not config.openai_api_key:
                raise ConfigError("OpenAI API key is required to build the chat model")
            model = init_chat_model(
                model=self.settings.llm_model_name,
                model_provider=self.settings.llm_model_provider,
                api_key=config.openai_api_key,
                temperature=self.settings.llm_temperature
            )
        self.model = model

        logger.info(f"Insight generator initialized with {self.settings.llm_model_name}")

    def generate(self, expenses: Sequence[Any]) -> List[Insight]:
        """
        Generate insights for a list of expense records.

        Args:
            expenses: Raw expense records; only the first max_records are used

        Returns:
            List of Insight objects, possibly empty
        """
        if not expenses:
            raise ValidationError("No valid expenses provided")

        logger.info(f"Generating insights from {len(expenses)} expenses")

        prompt = build_prompt(expenses, self.max_records, self.insight_count)
        logger.debug(f"Prompt length: {len(prompt)}")

        raw = self._complete(prompt)
        return normalize_completion(raw)

    def _complete(self, prompt: str) -> str:
        """Run a single completion and return its stripped text."""
        try:
            response = self.model.invoke(prompt)
        except Exception as e:
            logger.error(f"Completion request failed: {e}")
            raise UpstreamError(f"Completion request failed: {e}") from e

        content = response.content
        if not isinstance(content, str):
            raise UpstreamError(f"Unexpected completion content: {type(content).__name__}")

        logger.debug(f"Raw completion: {content[:500]}")
        return content.strip()
