"""Base model for API payloads.

JSON bodies use camelCase keys; Python code keeps snake_case field names.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Accepts camelCase or snake_case input and serializes as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
