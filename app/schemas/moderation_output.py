from pydantic import BaseModel, ConfigDict, Field
from typing import Any


class ModerationOutput(BaseModel):
    # Fields are loosely typed; only a literal boolean true counts as legitimate.
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    is_legit: Any = Field(
        default=None,
        alias="isLegit",
        description="True if the website is legitimate and safe, false otherwise."
    )
    reason: Any = Field(
        default=None,
        description="A short explanation of the decision."
    )
