# client_registry/application/dtos/base_dto.py

"""
Base class for the registry DTOs.

Every DTO is exchanged in camelCase (``redirectUris``) while Python code
uses snake_case attributes. Both spellings are accepted on input.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CustomBaseModel(BaseModel):
    """
    Custom base model for every DTO of the application.

    Adds the camelCase aliasing and a sparse dump used for partial updates.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def sparse_dict(self, *args, **kwargs) -> Dict[str, Any]:
        """
        Dump only the fields the caller actually supplied with a value.

        Omitted fields and fields explicitly set to null are both left out,
        so applying the result never clears anything by accident.

        Returns:
            Dict[str, Any]: snake_case field names mapped to supplied values
        """
        return self.model_dump(*args, exclude_unset=True, exclude_none=True, **kwargs)
