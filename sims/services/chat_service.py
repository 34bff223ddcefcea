import json
from typing import Any, List, Optional, Sequence

from fastapi import Depends
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage

from sims.config.settings import ChatSettings, settings
from sims.schemas.student_schemas import StudentRecord
from sims.services.langchain_service import LangChainService
from sims.services.student_service import StudentService, get_student_service
from sims.utils.errors import BusinessLogicError, ConfigurationError, UpstreamError
from sims.utils.logging import get_logger

logger = get_logger()

SYSTEM_PROMPT = (
    "You are an assistant for a Student Information Management System. "
    "You receive a JSON array of student records and a user question. "
    "Answer ONLY using the data in the array. If the answer is not in the data, say you cannot answer. "
    "When asked for counts, compute them correctly. When asked for lists, clearly list students."
)

USER_PROMPT = "Student data (JSON array):\n{students}\n\nUser question:\n{question}"


def serialize_students(students: Sequence[StudentRecord]) -> str:
    """Compact camelCase JSON of the whole collection, as sent to the model"""
    return json.dumps(
        [student.model_dump(by_alias=True) for student in students],
        ensure_ascii=False,
        separators=(",", ":"),
    )


def _reply_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    # Some providers return a list of content blocks
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(str(block.get("text", "")))
        return "".join(parts)
    return ""


class ChatService:
    """
    Forwards a question plus the full student collection to the upstream
    model and relays its answer. Stateless: no history, no retries.
    """

    def __init__(
        self,
        chat_settings: ChatSettings,
        student_service: StudentService,
        chat_model: Optional[BaseChatModel] = None,
    ):
        self.chat_settings = chat_settings
        self.student_service = student_service
        self.langchain_service = LangChainService(chat_settings)
        self._chat_model = chat_model

    def build_messages(
        self, students: Sequence[StudentRecord], question: str
    ) -> List[BaseMessage]:
        prompt = self.langchain_service.get_custom_chat_prompt_template(
            [("system", SYSTEM_PROMPT), ("human", USER_PROMPT)]
        )
        return prompt.format_messages(
            students=serialize_students(students), question=question
        )

    async def ask(self, message: Optional[str]) -> str:
        if not message or not isinstance(message, str):
            raise BusinessLogicError("Message is required.", error_code="MESSAGE_REQUIRED")

        students = await self.student_service.list_students()
        if not students:
            raise BusinessLogicError(
                "No student data available.", error_code="NO_STUDENT_DATA"
            )

        if not self.chat_settings.is_configured:
            raise ConfigurationError()

        messages = self.build_messages(students, message)
        chat_model = self._chat_model or self.langchain_service.get_openai_chat_model()

        try:
            response = await chat_model.ainvoke(messages)
        except Exception as e:
            raise UpstreamError(detail=f"{type(e).__name__}: {e}") from e

        reply = _reply_text(getattr(response, "content", "")).strip()
        if not reply:
            raise UpstreamError("Empty reply from LLM.", detail="empty completion")

        logger.info(
            f"Chat answered from {len(students)} students ({len(reply)} chars)"
        )
        return reply


def get_chat_service(
    student_service: StudentService = Depends(get_student_service),
) -> ChatService:
    return ChatService(settings.chat_settings(), student_service)
