from typing import List

from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import ChatOpenAI

from sims.config.settings import ChatSettings


class LangChainService:
    """Builds LangChain objects for the OpenAI-compatible (Groq) completion API"""

    def __init__(self, chat_settings: ChatSettings):
        self.chat_settings = chat_settings

    def get_openai_chat_model(self) -> ChatOpenAI:
        """
        Returns a chat model bound to the configured endpoint.

        Retries are disabled: a failed or slow call surfaces to the caller
        after `timeout_seconds`.
        """
        return ChatOpenAI(
            model=self.chat_settings.model,
            api_key=self.chat_settings.api_key,
            base_url=self.chat_settings.base_url,
            temperature=self.chat_settings.temperature,
            timeout=self.chat_settings.timeout_seconds,
            max_retries=0,
        )

    def get_custom_chat_prompt_template(
        self,
        messages: List[tuple],
    ) -> ChatPromptTemplate:
        """Returns a chat prompt template from (role, template) pairs."""
        return ChatPromptTemplate.from_messages(messages)
