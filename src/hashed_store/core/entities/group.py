"""Group entity."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Group(BaseModel):
    """A group of archives.

    Field aliases keep the camelCase shape used by downstream consumers.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    group_id: str = Field(..., alias="groupID", description="Full path of the group")
    archives: List[str] = Field(
        default_factory=list,
        description="IDs of the archives contained in this group"
    )
