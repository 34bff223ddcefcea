from fastapi import APIRouter, Depends, Request, status

from sims.schemas.student_schemas import ChatRequest, ChatResponse
from sims.services.chat_service import ChatService, get_chat_service
from sims.utils.responses import ResponseBuilder

chat_router = APIRouter()


@chat_router.post(
    "",
    response_model=None,
    status_code=status.HTTP_200_OK,
    summary="Ask the assistant about the student data",
    description="Forwards the message and the full student collection to the language model.",
)
async def chat(
    request: Request,
    body: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
):
    reply = await chat_service.ask(body.message)
    return ResponseBuilder.success(request=request, data=ChatResponse(reply=reply))
