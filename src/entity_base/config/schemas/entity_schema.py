"""Entity behaviour configuration schema."""

from pydantic import BaseModel, Field


class EntityConfig(BaseModel):
    """Defaults applied to entity types that do not override them."""

    strict_attributes: bool = Field(
        False, description="Reject input fields not declared by the entity type"
    )
