from pydantic import BaseModel, ConfigDict, Field


class TranslateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., description="Text to translate")
    source_lang: str = Field(
        ..., alias="sourceLang", description="Source language name, e.g. English"
    )
    target_lang: str = Field(
        ..., alias="targetLang", description="Target language name, e.g. French"
    )


class TranslateResponse(BaseModel):
    translation: str
