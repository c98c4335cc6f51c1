from pydantic import BaseModel


class UploadedFile(BaseModel):
    filename: str
    original_name: str
    mimetype: str
    size: int
    url: str
