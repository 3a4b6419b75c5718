from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from orbit.core.database import get_db
from orbit.core.security import get_current_user
from orbit.models.user import User
from orbit.schemas.message import ChatRequest, ChatResponse, MessageResponse, QuoteRequest, QuoteResponse
from orbit.services.chat_service import handle_chat_turn, list_messages
from orbit.services.ai_service import generate_motivational_quote

router = APIRouter(prefix="/api", tags=["chat"])


@router.post("/messages", response_model=ChatResponse)
def send_message(
    request: ChatRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    # l'IA ne lève jamais : au pire on stocke une réponse de secours
    assistant_message, suggestions = handle_chat_turn(db, current_user, request)
    return ChatResponse(
        assistant_message=MessageResponse.model_validate(assistant_message),
        suggested_tasks=suggestions
    )


@router.get("/messages", response_model=List[MessageResponse])
def transcript(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    limit: int = Query(100, ge=1, le=500)
):
    return list_messages(db, current_user.id, limit=limit)


@router.post("/quotes", response_model=QuoteResponse)
def quote(
    request: QuoteRequest,
    current_user: User = Depends(get_current_user)
):
    return QuoteResponse(quote=generate_motivational_quote(request.mode, request.mood))
