from pydantic import BaseModel


class UploadedImageDTO(BaseModel):
    """An image file received from an admin form, not yet stored."""
    filename: str
    content: bytes
    content_type: str | None = None
