# In-memory uploaded file, as handed over by the HTTP layer
from typing import Optional, Protocol


class IUploadedFile(Protocol):
    # MIME type declared by the uploader
    content_type: Optional[str]

    # Reads the whole binary content
    async def read(self) -> bytes:
        ...
