import logging
from typing import Any, Dict, List, Optional

from cafe.core.config import ADMIN_PASSWORD, ADMIN_USERNAME
from cafe.core.security import hash_password, hash_token, new_session_token, session_expiry, verify_password
from cafe.models.user import Role, RoleName, User, UserSession
from cafe.schemas.user import UserCreate, UserUpdate

log = logging.getLogger("cafe.users")

DEFAULT_PERMISSIONS = {
    RoleName.ADMIN: ["menu", "orders", "inventory", "sales", "users", "settings"],
    RoleName.CHEF: ["orders", "sales.today"],
    RoleName.USER: ["orders.place"],
}


async def ensure_default_roles() -> None:
    """Creates the built-in roles that are missing."""
    for role_name, permissions in DEFAULT_PERMISSIONS.items():
        _, created = await Role.get_or_create(role_name=role_name, defaults={"permissions": permissions})
        if created:
            log.info(f"Role '{role_name.value}' created.")


async def ensure_initial_admin(username: Optional[str] = ADMIN_USERNAME, password: Optional[str] = ADMIN_PASSWORD) -> Optional[User]:
    """Creates the first admin from configuration when there are no users yet."""
    if await User.exists():
        return None
    if not (username and password):
        log.warning("No users exist and ADMIN_USERNAME/ADMIN_PASSWORD are not set; admin endpoints are unreachable.")
        return None

    role = await Role.get(role_name=RoleName.ADMIN)
    user = await User.create(username=username, password_hash=hash_password(password), role=role)
    log.info(f"Initial admin '{username}' created.")
    return user


def serialize_user(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "role_id": user.role.id,
        "role_name": user.role.role_name,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


async def list_roles() -> List[Role]:
    return await Role.all().order_by("id")


async def list_users() -> List[User]:
    return await User.all().prefetch_related("role").order_by("username")


async def _get_role(role_id: int) -> Role:
    role = await Role.get_or_none(id=role_id)
    if not role:
        raise ValueError(f"Role {role_id} does not exist.")
    return role


async def create_user(data: UserCreate) -> User:
    role = await _get_role(data.role_id)
    if await User.filter(username=data.username).exists():
        raise ValueError(f"Username '{data.username}' is already taken.")

    user = await User.create(username=data.username, password_hash=hash_password(data.password), role=role)
    log.info(f"User '{user.username}' created with role '{role.role_name.value}'.")
    return user


async def update_user(user_id: int, patch: UserUpdate) -> Optional[User]:
    user = await User.get_or_none(id=user_id).prefetch_related("role")
    if not user:
        return None

    if patch.username is not None and patch.username != user.username:
        if await User.filter(username=patch.username).exclude(id=user_id).exists():
            raise ValueError(f"Username '{patch.username}' is already taken.")
        user.username = patch.username
    if patch.password:
        user.password_hash = hash_password(patch.password)
    if patch.role_id is not None:
        user.role = await _get_role(patch.role_id)

    await user.save()
    return user


async def delete_user(user_id: int) -> bool:
    await UserSession.filter(user_id=user_id).delete()
    return bool(await User.filter(id=user_id).delete())


async def login(username: str, password: str) -> Optional[Dict[str, Any]]:
    """Opens a session for valid credentials; None otherwise."""
    user = await User.get_or_none(username=username).prefetch_related("role")
    if not user or not verify_password(password, user.password_hash):
        log.warning(f"Failed login attempt for '{username}'.")
        return None

    token = new_session_token()
    expires_at = session_expiry()
    await UserSession.create(token=hash_token(token), user=user, expires_at=expires_at)

    log.info(f"User '{username}' logged in.")
    return {
        "token": token,
        "username": user.username,
        "role": user.role.role_name,
        "expires_at": expires_at,
    }


async def logout(token: str) -> bool:
    return bool(await UserSession.filter(token=hash_token(token)).delete())
