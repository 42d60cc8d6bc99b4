"""Archive entity."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Archive(BaseModel):
    """An archive.

    ``last_update`` changes whenever the archive does, so it doubles as the
    archive's cache hash.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    archive_id: str = Field(..., alias="archiveID", description="ID of this archive")
    last_update: str = Field(..., alias="lastUpdate", description="Time this archive was last updated")
    group_id: str = Field(..., alias="groupID", description="Group this archive is in")
    refs: List[str] = Field(default_factory=list, description="Known refs of this archive")
