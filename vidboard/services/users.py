from datetime import datetime, timezone

from vidboard.exceptions import ConflictError, NotFoundError
from vidboard.models.users import CreateUserRequest, UpdateUserRequest, User
from vidboard.store import JsonStore

USERS = "users"


def _find_by_email(store: JsonStore, email: str) -> User | None:
    for record in store.values(USERS):
        if record.get("email", "").lower() == email.lower():
            return User.model_validate(record)
    return None


def get_user(store: JsonStore, user_id: str) -> User:
    record = store.get(USERS, user_id)
    if record is None:
        raise NotFoundError("User not found")
    return User.model_validate(record)


def create_user(store: JsonStore, request: CreateUserRequest) -> User:
    with store.transaction():
        if store.get(USERS, request.id) is not None:
            raise ConflictError("User already exists")
        if _find_by_email(store, request.email) is not None:
            raise ConflictError("Email already exists")
        user = User(
            id=request.id,
            name=request.name,
            email=request.email,
            image_url=str(request.image_url) if request.image_url else None,
            created_at=datetime.now(timezone.utc),
        )
        store.put(USERS, user.id, user.model_dump(mode="json"))
    return user


def update_user(store: JsonStore, user_id: str, request: UpdateUserRequest) -> User:
    """Apply only the fields present in the request; ``imageUrl: null`` clears the image."""
    changes = {
        field: value
        for field, value in request.model_dump(exclude_unset=True).items()
        if value is not None or field == "image_url"
    }
    if changes.get("image_url") is not None:
        changes["image_url"] = str(changes["image_url"])
    with store.transaction():
        user = get_user(store, user_id)
        email = changes.get("email")
        if email and email.lower() != user.email.lower():
            existing = _find_by_email(store, email)
            if existing is not None and existing.id != user_id:
                raise ConflictError("Email already exists")
        updated = user.model_copy(update=changes)
        store.put(USERS, user_id, updated.model_dump(mode="json"))
    return updated
