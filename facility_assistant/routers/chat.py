from fastapi import APIRouter
from fastapi.responses import JSONResponse

from facility_assistant.dependencies import ChatDep
from facility_assistant.schemas.conversation import ChatRequest, ChatResponse, ConversationTurn

router = APIRouter(prefix="/api")


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, service: ChatDep):
    result = await service.send_message(request.message, request.session_id)
    if not result.success:
        return JSONResponse(status_code=500, content=result.model_dump())
    return result


@router.get("/conversations/{session_id}", response_model=list[ConversationTurn])
async def get_conversations(session_id: str, service: ChatDep) -> list[ConversationTurn]:
    return service.get_history(session_id)
