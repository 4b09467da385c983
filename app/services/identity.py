"""User lookups, credentials and role changes."""
import logging

from sqlalchemy import or_
from werkzeug.security import check_password_hash, generate_password_hash

from models import db
from models.user import Role, RoleChangeLog, User
from app.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(user: User, password: str) -> bool:
    if not user or not user.password_hash or not password:
        return False
    return check_password_hash(user.password_hash, password)


def find_user_by_email_or_phone(email=None, phone=None, exclude_user_id=None):
    clauses = []
    if email:
        clauses.append(db.func.lower(User.email) == email.lower())
    if phone:
        clauses.append(User.phone == phone)
    if not clauses:
        return None
    query = User.query.filter(or_(*clauses))
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    return query.first()


def get_user(user_id: int) -> User:
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def create_user(full_name, email, phone, password, role=Role.USER) -> User:
    if find_user_by_email_or_phone(email=email, phone=phone):
        raise ConflictError("User with this email or phone already exists")
    user = User(
        full_name=full_name,
        email=email.lower(),
        phone=phone,
        password_hash=hash_password(password),
        role=Role(role),
    )
    db.session.add(user)
    db.session.flush()
    return user


def update_user_role(user: User, new_role, reason: str, actor_id=None) -> RoleChangeLog:
    """Change ``user.role`` and record the change; the caller owns the transaction."""
    new_role = Role(new_role)
    old_role = user.role
    user.role = new_role
    entry = RoleChangeLog(
        user_id=user.id,
        old_role=old_role.value,
        new_role=new_role.value,
        reason=reason,
        actor_id=actor_id,
    )
    db.session.add(entry)
    logger.info({
        "event": "role_changed",
        "user_id": user.id,
        "old_role": old_role.value,
        "new_role": new_role.value,
        "reason": reason,
    })
    return entry
