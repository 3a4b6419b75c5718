"""Task service"""

import uuid
from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, Optional
from orbit.models.task import Task


def _normalize_subtasks(subtasks: Optional[List[dict]]) -> Optional[List[dict]]:
    # garde l'ordre, génère les ids manquants
    if subtasks is None:
        return None
    return [
        {
            "id": item.get("id") or uuid.uuid4().hex[:12],
            "title": item["title"],
            "done": bool(item.get("done", False))
        }
        for item in subtasks
    ]


def create_task(db: Session, user_id: str, data: dict, ai_generated: bool = False) -> Task:
    data = dict(data)
    data["subtasks"] = _normalize_subtasks(data.get("subtasks"))
    task = Task(user_id=user_id, is_ai_generated=ai_generated, friction=0, **data)
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def list_tasks(
    db: Session,
    user_id: str,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    mode: Optional[str] = None,
    tag: Optional[str] = None
) -> List[Task]:
    query = db.query(Task).filter(Task.user_id == user_id)

    if status:
        query = query.filter(Task.status == status)
    if priority:
        query = query.filter(Task.priority == priority)
    if mode:
        query = query.filter(Task.mode == mode)

    tasks = query.order_by(Task.created_at.desc(), Task.id.desc()).all()

    # tags en JSON : filtrage côté Python pour rester portable SQLite/Postgres
    if tag:
        tasks = [t for t in tasks if tag in (t.tags or [])]
    return tasks


def get_user_task(db: Session, user_id: str, task_id: int) -> Optional[Task]:
    return db.query(Task).filter(
        Task.id == task_id,
        Task.user_id == user_id
    ).first()


def update_task(db: Session, task: Task, changes: dict) -> Task:
    """
    Applique une mise à jour partielle.

    Les transitions de statut ne sont pas contraintes : n'importe quel
    statut peut succéder à n'importe quel autre, et réappliquer le même
    statut ne fait rien de plus que rafraîchir last_updated.
    """
    # null explicite sur une colonne obligatoire = on ignore
    for field in ("title", "status", "priority"):
        if field in changes and changes[field] is None:
            del changes[field]

    if "subtasks" in changes:
        changes["subtasks"] = _normalize_subtasks(changes["subtasks"])

    for field, value in changes.items():
        setattr(task, field, value)
    task.last_updated = datetime.utcnow()

    db.commit()
    db.refresh(task)
    return task


def snooze_task(db: Session, task: Task) -> Task:
    task.status = "pending"
    task.friction = (task.friction or 0) + 1
    task.last_updated = datetime.utcnow()
    db.commit()
    db.refresh(task)
    return task


def toggle_subtask(db: Session, task: Task, subtask_id: str) -> Optional[Task]:
    subtasks = [dict(s) for s in (task.subtasks or [])]
    for subtask in subtasks:
        if subtask["id"] == subtask_id:
            subtask["done"] = not subtask.get("done", False)
            break
    else:
        return None

    # réassigner la liste pour que SQLAlchemy détecte le changement du JSON
    task.subtasks = subtasks
    task.last_updated = datetime.utcnow()
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, task: Task):
    db.delete(task)
    db.commit()
