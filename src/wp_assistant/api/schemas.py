from pydantic import BaseModel, Field, StrictStr


class AskRequest(BaseModel):
    prompt: StrictStr | None = Field(default=None, description="WordPress question to answer.")


class AskResponse(BaseModel):
    answer: str


class AssistResponse(BaseModel):
    mode: str | None
    answer: str
    files: dict[str, str] = {}


class ThemeArchiveRequest(BaseModel):
    files: dict[StrictStr, StrictStr] = Field(..., description="Extracted theme files, name -> content.")
