"""Pydantic Schemas for Author Requests and Responses.

`AuthorDto` is the exposed author: the fields a client can select with
`fields` and, through the property mapping, sort with `orderBy`.
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models.author import GENRE_MAX_LENGTH, NAME_MAX_LENGTH
from .book import BookForCreationDto


class AuthorDto(BaseModel):
    """Author as exposed by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    age: int
    genre: str


class AuthorForCreationDto(BaseModel):
    """Schema for creating an author, optionally together with books."""
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(..., alias="firstName", min_length=1, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=NAME_MAX_LENGTH)
    date_of_birth: date = Field(..., alias="dateOfBirth")
    date_of_death: date | None = Field(None, alias="dateOfDeath")
    genre: str = Field(..., min_length=1, max_length=GENRE_MAX_LENGTH)
    books: list[BookForCreationDto] = []

    @model_validator(mode='after')
    def validate_lifespan(self):
        """An author cannot die before being born."""
        if self.date_of_death is not None and self.date_of_death < self.date_of_birth:
            raise ValueError("dateOfDeath cannot be earlier than dateOfBirth")
        return self
