from pydantic import BaseModel, Field


class WriteBatchRequest(BaseModel):
    count: int = Field(ge=0, le=100)
    extension: str | None = Field(default=None, max_length=32)


class WriteUrlItem(BaseModel):
    name: str
    url: str


class WriteBatchResponse(BaseModel):
    items: list[WriteUrlItem]


class ReadUrlRequest(BaseModel):
    name: str = Field(min_length=1)


class ReadUrlResponse(BaseModel):
    name: str
    url: str
    local_path: str
    expires_in_seconds: int
