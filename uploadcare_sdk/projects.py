"""Project resource of the REST API."""

from .client import RestClient
from .models import ProjectInfo


class ProjectService:
    """Calls to the project API."""

    def __init__(self, client: RestClient):
        self.client = client

    def info(self) -> ProjectInfo:
        """Get information about the project the credentials belong to."""
        data = self.client.call("GET", "/project/")
        return ProjectInfo.from_dict(data)
