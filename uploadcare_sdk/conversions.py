"""
Document and video conversion.

Documents can be converted to doc, docx, xls, xlsx, odt, ods, rtf, txt,
pdf, jpg and png. Jobs run asynchronously; poll their status by token.
"""

from .client import RestClient
from .models import ConversionJobResult, ConversionParams, ConversionStatus


class ConversionService:
    """Calls to the conversion API."""

    def __init__(self, client: RestClient):
        self.client = client

    def document(self, params: ConversionParams) -> ConversionJobResult:
        """Start document conversion jobs."""
        data = self.client.call("POST", "/convert/document/", json=params.to_json())
        return ConversionJobResult.from_dict(data)

    def document_status(self, token: int) -> ConversionStatus:
        data = self.client.call("GET", f"/convert/document/status/{token}/")
        return ConversionStatus.from_dict(data)

    def video(self, params: ConversionParams) -> ConversionJobResult:
        """Start video conversion jobs."""
        data = self.client.call("POST", "/convert/video/", json=params.to_json())
        return ConversionJobResult.from_dict(data)

    def video_status(self, token: int) -> ConversionStatus:
        data = self.client.call("GET", f"/convert/video/status/{token}/")
        return ConversionStatus.from_dict(data)
