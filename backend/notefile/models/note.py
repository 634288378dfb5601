"""
Notefile Backend — Note Domain Model
=====================================

What:  The one persisted entity: an integer id plus a title and description.
How:   A strict Pydantic model. Strict mode rejects "1" for an int or 5 for a
       str, so a hand-edited file with the wrong shape fails to load instead
       of being silently coerced.
Who:   Produced by NoteStore.load_all(), consumed by NoteStore.save_all()
       and returned as-is by the list/get endpoints.

On-disk shape (one element of the JSON array):
    {
      "id": 1,
      "title": "Groceries",
      "description": "Milk, eggs"
    }
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class Note(BaseModel):
    """
    A single note record.

    The id is assigned by the store and never changes afterwards. Title and
    description are only required to be non-empty when a note is created;
    updates may blank them.
    """

    model_config = ConfigDict(strict=True)

    id: int = Field(description="Store-assigned integer identifier")
    title: str = Field(description="Note title")
    description: str = Field(description="Note body text")


# What: Validator for the whole file content (a JSON array of Note objects)
NoteCollection = TypeAdapter(List[Note])
