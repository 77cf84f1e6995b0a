from pydantic import BaseModel, ConfigDict, Field, field_validator


class RawTransaction(BaseModel):
    """Transaction document exactly as stored: amount and date are strings."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    vendor: str = ""
    amount: str = ""
    date: str = ""
    category: str = ""
    type: str = "debit"

    @field_validator("id", "vendor", "amount", "date", "category", "type", mode="before")
    @classmethod
    def _as_text(cls, v: object) -> object:
        if v is None:
            return ""
        if not isinstance(v, str):
            return str(v)
        return v


class FirestoreDocument(BaseModel):
    name: str
    fields: dict[str, dict] = Field(default_factory=dict)
    createTime: str | None = None
    updateTime: str | None = None

    @property
    def doc_id(self) -> str:
        return self.name.rsplit("/", 1)[-1]


class RunQueryItem(BaseModel):
    document: FirestoreDocument | None = None
    readTime: str | None = None
    skippedResults: int | None = None
