from passlib.hash import bcrypt

def hash_password(password: str) -> str:
    return bcrypt.hash(password)

def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.verify(password, password_hash)
    except (ValueError, TypeError):
        return False

def can_edit(user, owned) -> bool:
    """Owner-or-admin check shared by campgrounds, comments and reviews."""
    if user is None or owned is None:
        return False
    return bool(user.is_admin) or owned.author_id == user.id
