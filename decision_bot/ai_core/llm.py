"""
Structured LLM access shared by all capabilities.

Every capability sends a system prompt plus a user prompt and expects a
pydantic model back. Responses are validated field by field; anything that
does not fit the schema raises CapabilitySchemaError.
"""

import asyncio
import logging
from typing import Optional, Type, TypeVar

from langchain_core.messages import SystemMessage, HumanMessage
from pydantic import BaseModel, ValidationError

from decision_bot.ai_core.exceptions import CapabilityError, CapabilitySchemaError
from decision_bot.config import get_settings

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def create_llm(temperature: Optional[float] = None):
    """Create a ChatOpenAI instance routed through the gen_ai_hub proxy."""
    from gen_ai_hub.proxy.langchain.openai import ChatOpenAI
    from gen_ai_hub.proxy.core.proxy_clients import get_proxy_client

    config = get_settings()
    proxy_client = get_proxy_client("gen-ai-hub")
    return ChatOpenAI(
        proxy_model_name=config.openai_model,
        proxy_client=proxy_client,
        temperature=config.temperature if temperature is None else temperature,
    )


def validate_structured_output(schema: Type[SchemaT], raw) -> SchemaT:
    """
    Coerce a structured-output response into `schema`.

    Args:
        schema: Expected pydantic model
        raw: Model instance or dict returned by the LLM

    Returns:
        Validated schema instance

    Raises:
        CapabilitySchemaError: If the response is missing or malformed
    """
    if raw is None:
        raise CapabilitySchemaError(f"Empty response, expected {schema.__name__}")
    try:
        if isinstance(raw, schema):
            # Re-validate so values assigned without validation are checked too
            return schema.model_validate(raw.model_dump())
        if isinstance(raw, BaseModel):
            return schema.model_validate(raw.model_dump())
        if isinstance(raw, dict):
            return schema.model_validate(raw)
        if isinstance(raw, (str, bytes)):
            return schema.model_validate_json(raw)
    except ValidationError as e:
        raise CapabilitySchemaError(
            f"Response does not match {schema.__name__}: {e.error_count()} invalid field(s)"
        ) from e
    raise CapabilitySchemaError(
        f"Unexpected response type {type(raw).__name__}, expected {schema.__name__}"
    )


class StructuredCapability:
    """
    Base class for a language model capability with a structured response.
    """

    name = "capability"

    def __init__(self, llm=None, timeout: Optional[float] = None):
        """
        Args:
            llm: LangChain chat model; created through gen_ai_hub when omitted
            timeout: Seconds before a call is abandoned (defaults to settings)
        """
        config = get_settings()
        self._llm = llm
        self.timeout = timeout if timeout is not None else config.capability_timeout

    @property
    def llm(self):
        """Lazy initialization of the chat model."""
        if self._llm is None:
            self._llm = create_llm(temperature=0.0)
        return self._llm

    async def _invoke(
        self, schema: Type[SchemaT], system_prompt: str, user_prompt: str
    ) -> SchemaT:
        """
        Call the model and validate its response.

        Raises:
            CapabilitySchemaError: Response failed validation
            CapabilityError: Timeout or transport failure
        """
        messages = [
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_prompt),
        ]
        structured_llm = self.llm.with_structured_output(schema)

        try:
            raw = await asyncio.wait_for(
                structured_llm.ainvoke(messages), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(f"{self.name} timed out after {self.timeout}s")
            raise CapabilityError(f"{self.name} timed out after {self.timeout}s") from e
        except ValidationError as e:
            raise CapabilitySchemaError(
                f"{self.name} returned an invalid {schema.__name__}"
            ) from e
        except Exception as e:
            logger.error(f"{self.name} call failed: {e}", exc_info=True)
            raise CapabilityError(f"{self.name} call failed: {e}") from e

        result = validate_structured_output(schema, raw)
        logger.debug(f"{self.name} response: {result}")
        return result
