"""Tours de chat : on stocke le message utilisateur, on appelle l'IA, on stocke la réponse."""

from sqlalchemy.orm import Session
from typing import List, Tuple

from orbit.models.message import Message
from orbit.models.user import User
from orbit.schemas.enums import Role
from orbit.schemas.message import ChatRequest
from orbit.services import ai_service
from orbit.services.task_service import list_tasks


def append_message(db: Session, user_id: str, role: str, content: str, **context) -> Message:
    message = Message(user_id=user_id, role=role, content=content, **context)
    db.add(message)
    db.commit()
    db.refresh(message)
    return message


def list_messages(db: Session, user_id: str, limit: int = 100) -> List[Message]:
    # transcript dans l'ordre chronologique (append-only)
    return db.query(Message).filter(
        Message.user_id == user_id
    ).order_by(Message.timestamp.asc(), Message.id.asc()).limit(limit).all()


def handle_chat_turn(db: Session, user: User, request: ChatRequest) -> Tuple[Message, List[dict]]:
    context_fields = {
        "context_mode": request.mode,
        "context_mood": request.mood,
        "context_energy": request.energy,
        "related_task_id": request.related_task_id,
    }

    append_message(db, user.id, Role.USER.value, request.content, category="chat", **context_fields)

    if request.tasks is not None:
        tasks = [t.model_dump() for t in request.tasks]
    else:
        tasks = [
            {"title": t.title, "status": t.status, "priority": t.priority, "description": t.description}
            for t in list_tasks(db, user.id)
        ]

    reply = ai_service.generate_chat_response(request.content, {
        "mode": request.mode,
        "mood": request.mood,
        "energy": request.energy,
        "tasks": tasks,
    })

    assistant_message = append_message(
        db, user.id, Role.ASSISTANT.value, reply["chat_response"], category="chat", **context_fields
    )
    return assistant_message, reply["suggested_tasks"]
