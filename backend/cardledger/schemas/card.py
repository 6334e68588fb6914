from pydantic import BaseModel, ConfigDict, field_validator

class CardCreate(BaseModel):
    user_id: int
    card_number: str
    issuance_bank: str | None = None

    @field_validator("card_number")
    @classmethod
    def number_trim(cls, v: str):
        v = v.strip()
        if not v:
            raise ValueError("card_number is required")
        return v

    @field_validator("issuance_bank")
    @classmethod
    def bank_trim(cls, v: str | None):
        if v is None:
            return None
        v = v.strip()
        return v or None

class CardOut(BaseModel):
    id: int
    issuance_bank: str | None
    number: str

    model_config = ConfigDict(from_attributes=True)
