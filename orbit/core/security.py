import logging
from datetime import datetime
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from orbit.core.config import settings
from orbit.core.database import get_db
from orbit.models.user import User

logger = logging.getLogger(__name__)


def verify_token(token: str) -> Optional[dict]:
    # Les tokens viennent de Supabase (HS256 signé avec le JWT secret du projet)
    try:
        payload = jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=["HS256"],
            audience=settings.SUPABASE_JWT_AUDIENCE,
            issuer=settings.supabase_issuer,
        )
        return payload
    except JWTError as e:
        logger.info(f"Rejected token: {e}")
        return None


def get_current_user(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(None)
) -> User:
    """
    Récupère l'utilisateur depuis le bearer token.

    L'utilisateur vit chez le fournisseur d'auth : s'il n'existe pas encore
    en base, on crée sa ligne au premier appel authentifié.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")

    token = authorization[len("Bearer "):].strip()
    payload = verify_token(token)
    if not payload or not payload.get("sub"):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user_id = payload["sub"]
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        user = User(id=user_id, email=payload.get("email"), last_active=datetime.utcnow())
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"Provisioned user {user_id}")

    return user
