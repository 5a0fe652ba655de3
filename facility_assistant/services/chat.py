import logging

from facility_assistant.facility_defaults import PHONE
from facility_assistant.mappers.context_builder import (
    build_chat_prompt,
    build_grounding_context,
    build_summary_prompt,
    fallback_summary,
)
from facility_assistant.mappers.fallback_answers import fallback_answer
from facility_assistant.schemas.conversation import ChatResponse, ConversationTurn
from facility_assistant.schemas.facility import FacilitySummary
from facility_assistant.services.facility_data import FacilityDataService
from facility_assistant.services.generator import ResponseGenerator
from facility_assistant.store import MemoryStore

logger = logging.getLogger(__name__)

APOLOGY = (
    "I apologize, but I'm experiencing technical difficulties. Please try again "
    "or contact us directly at {phone}."
)


class ChatService:
    def __init__(
        self,
        store: MemoryStore,
        facility: FacilityDataService,
        generator: ResponseGenerator,
    ):
        self._store = store
        self._facility = facility
        self._generator = generator

    async def send_message(self, message: str, session_id: str) -> ChatResponse:
        """Answer one question. Always persists exactly one conversation turn."""
        try:
            answer = await self._answer(message)
        except Exception:
            logger.exception("Chat failed for session %s", session_id)
            response = ChatResponse(response=APOLOGY.format(phone=PHONE), success=False)
        else:
            response = ChatResponse(response=answer, success=True)

        self._save_turn(session_id, message, response)
        return response

    async def _answer(self, message: str) -> str:
        record = self._facility.get_facility_info()
        system_prompt, user_prompt = build_chat_prompt(
            build_grounding_context(record), message
        )
        text = await self._generator.generate(user_prompt, system_prompt=system_prompt)
        if text is None:
            logger.info("Generator unavailable, using fallback answer")
            return fallback_answer(message, record)
        return text

    def _save_turn(self, session_id: str, message: str, response: ChatResponse) -> None:
        try:
            self._store.append_turn(
                ConversationTurn(
                    session_id=session_id,
                    user_text=message,
                    response_text=response.response,
                    is_error=not response.success,
                )
            )
        except Exception:
            logger.exception("Failed to save conversation turn for session %s", session_id)

    def get_history(self, session_id: str) -> list[ConversationTurn]:
        return list(self._store.list_turns_by_session(session_id))

    async def summarize_facility(self) -> FacilitySummary:
        record = self._facility.get_facility_info()
        text = await self._generator.generate(build_summary_prompt(record), max_tokens=300)
        if text is None:
            return FacilitySummary(summary=fallback_summary(record), generated=False)
        return FacilitySummary(summary=text, generated=True)
