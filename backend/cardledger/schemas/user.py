from pydantic import BaseModel, ConfigDict, field_validator
from datetime import datetime

class UserCreate(BaseModel):
    name: str
    email: str

    @field_validator("name")
    @classmethod
    def name_trim(cls, v: str):
        v = v.strip()
        if not v:
            raise ValueError("name is required")
        if len(v) > 128:
            raise ValueError("name too long")
        return v

    @field_validator("email")
    @classmethod
    def email_trim(cls, v: str):
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("email is invalid")
        return v

class UserOut(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
