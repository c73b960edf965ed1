from pydantic import BaseModel, Field


class SuggestReplyRequest(BaseModel):
    text: str = Field(..., description="Message received")
    language: str = Field(..., description="Language of the message and replies")


class SuggestReplyResponse(BaseModel):
    suggestions: list[str]
