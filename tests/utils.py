from cueroom.core.security import create_access_token
from cueroom.modules.user_management.schemas.user import UserCreate
from cueroom.modules.user_management.services.user import create_user

PASSWORD = "underground303"


def make_user(db, username, **flags):
    user = create_user(
        db,
        UserCreate(email=f"{username}@thecueroom.com", username=username, password=PASSWORD),
    )
    for name, value in flags.items():
        setattr(user, name, value)
    if flags:
        db.commit()
        db.refresh(user)
    return user


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}
