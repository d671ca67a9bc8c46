from typing import Annotated
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StringConstraints
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

# column limits: Integer is 32-bit signed, weights are Numeric(10, 2)
INT_MAX = 2**31 - 1
WEIGHT_MAX = 99_999_999.99

NonNegInt = Annotated[StrictInt, Field(ge=0, le=INT_MAX)]
Weight = Annotated[float, Field(allow_inf_nan=False, ge=-WEIGHT_MAX, le=WEIGHT_MAX)]
YoutubeId = Annotated[str, Field(max_length=32)]
TitleStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]

def reject_null(v):
    # used on partial-update fields whose columns are NOT NULL
    if v is None:
        raise ValueError("Field cannot be null")
    return v

class SuccessResponse(BaseModel):
    success: bool = True

class MessageResponse(BaseModel):
    message: str
