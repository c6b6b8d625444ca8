from pydantic import BaseModel, ConfigDict
from coworking.domain import ResourceKind


class ResourceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    capacity: int
    kind: ResourceKind
