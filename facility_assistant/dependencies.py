from typing import Annotated

from fastapi import Depends, Request

from facility_assistant.services.chat import ChatService
from facility_assistant.services.facility_data import FacilityDataService


def get_facility_service(request: Request) -> FacilityDataService:
    return request.app.state.facility_service


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


FacilityDep = Annotated[FacilityDataService, Depends(get_facility_service)]
ChatDep = Annotated[ChatService, Depends(get_chat_service)]
