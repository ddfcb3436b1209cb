"""
Base model configuration
Shared pydantic configuration for pipeline entities and result models
"""

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel


class BaseModel(PydanticBaseModel):
    """Base model with camelCase serialization for build-tool hosts.

    This base model configuration:
    - Dumps camelCase keys so manifests can be consumed as JSON by non-Python hosts
    - Accepts both snake_case field names and camelCase aliases
    - Forbids unknown fields to ensure type safety
    - Allows Pillow images and other non-pydantic handles as field types
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        # Allow populating by both field name and alias
        populate_by_name=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )

    def model_dump(self, **kwargs):
        """Override model_dump to always use aliases (camelCase) by default."""
        kwargs.setdefault("by_alias", True)
        return super().model_dump(**kwargs)

    def model_dump_json(self, **kwargs):
        """Override model_dump_json to always use aliases (camelCase) by default."""
        kwargs.setdefault("by_alias", True)
        return super().model_dump_json(**kwargs)
