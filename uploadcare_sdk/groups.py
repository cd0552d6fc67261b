"""
Group resource of the REST API.

Groups are ordered, immutable lists of files from one project. A group ID
is a UUID followed by ``~`` and the number of files, for example
``badfc9f7-f88f-4921-9cc0-22e2c08aa2da~12``.
"""

from typing import Iterator, Optional

from .client import RestClient
from .models import GroupInfo, GroupList, GroupListParams


class GroupService:
    """Calls to the group API."""

    def __init__(self, client: RestClient):
        self.client = client

    def info(self, group_id: str) -> GroupInfo:
        data = self.client.call("GET", f"/groups/{group_id}/")
        return GroupInfo.from_dict(data)

    def list(self, params: Optional[GroupListParams] = None) -> GroupList:
        params = params or GroupListParams()
        data = self.client.call("GET", "/groups/", params=params.to_params())
        return GroupList.from_dict(data)

    def get_page(self, url: str) -> GroupList:
        data = self.client.call_url("GET", url)
        return GroupList.from_dict(data)

    def iterate(self, params: Optional[GroupListParams] = None) -> Iterator[GroupInfo]:
        page = self.list(params)
        while True:
            yield from page.results
            if not page.next:
                break
            page = self.get_page(page.next)

    def store(self, group_id: str) -> GroupInfo:
        """Mark every file in the group as stored."""
        data = self.client.call("PUT", f"/groups/{group_id}/storage/")
        return GroupInfo.from_dict(data)
