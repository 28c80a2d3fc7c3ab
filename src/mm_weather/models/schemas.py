# src/mm_weather/models/schemas.py
from typing import Literal
from pydantic import BaseModel, Field

# ===== Response =====
class SlashCommandResponse(BaseModel):
    # "in_channel" posts to the whole channel, "ephemeral" only to the caller
    response_type: Literal["in_channel", "ephemeral"] = Field("in_channel", description="Mattermost visibility")
    text: str = Field(..., description="Markdown message posted to the channel")
