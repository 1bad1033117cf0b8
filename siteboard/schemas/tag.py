from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
import uuid


class TagCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    category_id: Optional[uuid.UUID] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return str(v).strip() if v is not None else v


class TagUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return str(v).strip() if v is not None else v


class TagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    slug: str
    order: int
    category_id: Optional[uuid.UUID] = None
