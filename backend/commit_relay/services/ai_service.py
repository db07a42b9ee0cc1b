from commit_relay.core.config import Settings
from commit_relay.core.logging import get_logger
from commit_relay.schemas.webhook import ContentRequest, ContentResult
from openai import OpenAI
from typing import Any, Optional
import asyncio

logger = get_logger(__name__)

DEFAULT_PROMPT = "Tell me something interesting"
SYSTEM_MESSAGE = "You are a helpful assistant."

class ContentGenerationError(Exception):
    pass

class AIService:
    """chat completions for the generic webhook

    The client is built with retries disabled; a failed completion is
    reported to the caller straight away.
    """

    def __init__(self, settings: Settings, client: Any = None):
        self.default_model = settings.OPENAI_MODEL
        self.default_temperature = settings.TEMPERATURE
        self.default_max_tokens = settings.MAX_TOKENS
        self.client = client

        if self.client is None:
            if settings.OPENAI_API_KEY:
                self.client = OpenAI(api_key=settings.OPENAI_API_KEY, max_retries=0)
                logger.info("openai api key is configured", model=self.default_model)
            else:
                logger.warning("openai api key not found, content requests will fail")

    @property
    def configured(self) -> bool:
        return self.client is not None

    def system_message(self, context: Optional[str]) -> str:
        if context:
            return f"{SYSTEM_MESSAGE} Context: {context}"
        return SYSTEM_MESSAGE

    async def generate_content(self, request: ContentRequest) -> ContentResult:
        if not self.configured:
            raise ContentGenerationError("OpenAI client not initialized. Check your API key.")

        prompt = request.prompt or DEFAULT_PROMPT
        model = request.model or self.default_model
        temperature = request.temperature or self.default_temperature
        max_tokens = request.max_tokens or self.default_max_tokens

        logger.info("processing content request", model=model, prompt_length=len(prompt))

        try:
            loop = asyncio.get_event_loop()
            completion = await loop.run_in_executor(
                None,
                lambda: self.client.chat.completions.create(
                    model=model,
                    messages=[
                        {"role": "system", "content": self.system_message(request.context)},
                        {"role": "user", "content": prompt},
                    ],
                    temperature=temperature,
                    max_tokens=max_tokens,
                )
            )
        except Exception as e:
            logger.error("error generating content", model=model, error=str(e))
            raise ContentGenerationError(f"Failed to generate AI content: {str(e)}") from e

        usage = completion.usage
        return ContentResult(
            generated_content=completion.choices[0].message.content,
            model_used=model,
            prompt_tokens=usage.prompt_tokens if usage else None,
            completion_tokens=usage.completion_tokens if usage else None,
            total_tokens=usage.total_tokens if usage else None
        )
