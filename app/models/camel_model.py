from humps import camelize
from pydantic import BaseModel, ConfigDict


class CamelModel(BaseModel):
    """Immutable model serialized with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=camelize, populate_by_name=True, frozen=True
    )
