"""
Pydantic Models - Wire schemas for the stored cart snapshot.

The snapshot is a JSON array of line items:
    [{"id": "...", "title": "...", "image_url": "...", "price": 9.99, "quantity": 1}]

Older clients wrote the image reference as "imageUrl"; both are accepted on read.
"""

from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter


class LineItemRecord(BaseModel):
    """One stored line item."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    image_url: str = Field(validation_alias=AliasChoices("image_url", "imageUrl"))
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)


SnapshotAdapter = TypeAdapter(List[LineItemRecord])
