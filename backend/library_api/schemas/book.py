"""Pydantic Schemas for Book Requests and Responses."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models.book import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH


class BookDto(BaseModel):
    """Book as exposed by the API."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    title: str
    description: str | None = None
    author_id: UUID = Field(..., alias="authorId")


class BookForManipulationDto(BaseModel):
    """Fields shared by book creation and update."""
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(None, max_length=DESCRIPTION_MAX_LENGTH)

    @model_validator(mode='after')
    def validate_description_differs_from_title(self):
        if self.description is not None and self.description.strip() == self.title.strip():
            raise ValueError("The provided description should be different from the title")
        return self


class BookForCreationDto(BookForManipulationDto):
    """Schema for creating a book."""


class BookForUpdateDto(BookForManipulationDto):
    """Schema for fully updating a book (PUT)."""
    description: str = Field(..., max_length=DESCRIPTION_MAX_LENGTH)
