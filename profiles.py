from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from auth import get_current_user
from database import get_db, User
from schemas import Profile, ProfileUpdate

profile_router = APIRouter()


@profile_router.get("", response_model=Profile)
async def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@profile_router.put("", response_model=Profile)
async def update_profile(
    update: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    changes = update.model_dump(exclude_unset=True)

    email = changes.pop("email", None)
    if email and email != current_user.email:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            raise HTTPException(
                status_code=400, detail="An account already exists with this email"
            )
        current_user.email = email

    # An absent or null image URL removes the stored image
    current_user.profile_image_url = changes.pop("profile_image_url", None)

    for field, value in changes.items():
        if value is not None:
            setattr(current_user, field, value)

    db.commit()
    db.refresh(current_user)
    return current_user
