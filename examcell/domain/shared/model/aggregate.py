from pydantic import BaseModel, ConfigDict


class Aggregate(BaseModel):
    """Base for aggregate roots. Mutable; state changes go through methods."""

    model_config = ConfigDict(validate_assignment=True)
