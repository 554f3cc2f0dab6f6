"""
User service: bootstrap local users from Auth0 token claims.
"""
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from mototrip.models.user import User

logger = logging.getLogger(__name__)


def display_name_from_claims(claims: dict) -> str:
    """Best human-readable name carried by the token."""
    for claim in ("name", "nickname", "email"):
        value = claims.get(claim)
        if value:
            return str(value)[:200]
    return str(claims["sub"])[:200]


def get_or_create_user(claims: dict, db: Session) -> User:
    """Return the user for the token subject, creating it on first sight."""
    subject = claims["sub"]
    user = db.query(User).filter(User.auth0_subject == subject).first()
    if user:
        return user

    user = User(
        auth0_subject=subject,
        display_name=display_name_from_claims(claims),
        email=claims.get("email")
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request bootstrapped the same subject first
        db.rollback()
        return db.query(User).filter(User.auth0_subject == subject).one()

    db.refresh(user)
    logger.info(f"Bootstrapped new user {user.id} for subject {subject}")
    return user
