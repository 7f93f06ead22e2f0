from pydantic import BaseModel


class APIError(BaseModel):
    """The body upstream sends on failure: `{"error": "..."}`."""

    error: str

    def __str__(self) -> str:
        return self.error
