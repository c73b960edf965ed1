from pydantic import BaseModel, ConfigDict, Field


class SpeechRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., description="Text to synthesize")
    lang_code: str = Field(
        ..., alias="langCode", description="BCP-47 language code, e.g. fr-FR"
    )
