from typing import Optional

from sqlmodel import Field, SQLModel


class MedicalPhrase(SQLModel, table=True):
    __tablename__ = "transcriber_medical"

    id: Optional[int] = Field(default=None, primary_key=True)
    phrase: Optional[str] = Field(default=None, max_length=255)
    display_as: Optional[str] = Field(default=None, max_length=255)
