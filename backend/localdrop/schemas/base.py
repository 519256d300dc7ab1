"""camelCase schema bases.

Python attributes stay snake_case (`created_at`); JSON on the wire is
camelCase (`createdAt`). Both spellings are accepted on input.
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Request bodies."""
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class CamelORMModel(CamelModel):
    """Responses built straight from registry entities via model_validate(entity)."""
    model_config = {
        **CamelModel.model_config,
        "from_attributes": True,
    }
