"""
Component Kind Type Definitions
Describes which component kinds exist and what their properties look like
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class PropertyType(str, Enum):
    """JSON shape a property value must have"""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    ANY = "any"


class KindCategory(str, Enum):
    """Groupings used by the registry listing"""
    ACTION = "action"
    CONTAINER = "container"
    LAYOUT = "layout"
    MARKETING = "marketing"
    DATA = "data"
    INPUT = "input"
    OVERLAY = "overlay"


class PropertySpec(BaseModel):
    """Shape of a single component property"""
    name: str
    type: PropertyType = PropertyType.ANY
    description: str = ""
    required: bool = False
    choices: Optional[List[Any]] = Field(default=None, description="Allowed values")
    min_items: Optional[int] = Field(default=None, ge=0)
    max_items: Optional[int] = Field(default=None, ge=0)
    minimum: Optional[float] = None
    maximum: Optional[float] = None


class ComponentKind(BaseModel):
    """A renderable component kind"""
    name: str = Field(..., min_length=1, description="Kind name as it appears in specifications")
    description: str
    category: KindCategory
    properties: List[PropertySpec] = Field(default_factory=list)

    def get_property(self, name: str) -> Optional[PropertySpec]:
        for spec in self.properties:
            if spec.name == name:
                return spec
        return None
