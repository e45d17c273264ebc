from decimal import Decimal
from pydantic import BaseModel, Field

class CampgroundIn(BaseModel):
    name: str
    price: Decimal | None = None
    description: str = ""

class MediaAsset(BaseModel):
    secure_url: str
    public_id: str

class UserCreate(BaseModel):
    username: str
    email: str
    password: str
    first_name: str | None = None
    last_name: str | None = None
    avatar: str | None = None
    admin_code: str | None = None

class CommentIn(BaseModel):
    text: str = Field(..., min_length=1)

class ReviewIn(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    text: str = ""
