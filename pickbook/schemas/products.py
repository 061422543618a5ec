# pickbook/schemas/products.py

from pydantic import BaseModel, Field


class Product(BaseModel):
    id: str
    name: str
    required_units: int = Field(gt=0, description="Capacity units held for the whole duration")
    duration_minutes: int = Field(gt=0)

    model_config = {"from_attributes": True, "frozen": True}
