"""Pydantic DTOs for the administrator-managed settings."""

from pydantic import BaseModel

from equipment_registry.domain.entities import OperatorInfo


class OperatorInfoSchema(BaseModel):
    """Operator details printed on inspection reports."""

    name: str = ""
    address: str = ""
    ico: str = ""

    model_config = {"from_attributes": True, "str_strip_whitespace": True}

    def to_entity(self) -> OperatorInfo:
        return OperatorInfo(**self.model_dump())
