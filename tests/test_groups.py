"""Tests for the group service."""

import pytest

from uploadcare_sdk import GroupListParams, GroupOrdering, NotFoundError

from tests.conftest import make_response, sent_request

API = "https://api.uploadcare.com"
GROUP_ID = "badfc9f7-f88f-4921-9cc0-22e2c08aa2da~12"


def group_payload(**overrides):
    payload = {
        "id": GROUP_ID,
        "datetime_created": "2018-11-27T14:14:37.583654Z",
        "datetime_stored": None,
        "files_count": 12,
        "cdn_url": f"https://ucarecdn.com/{GROUP_ID}/",
        "url": f"{API}/groups/{GROUP_ID}/",
    }
    payload.update(overrides)
    return payload


class TestGroups:

    def test_info(self, rest_client, rest_send, file_payload):
        rest_send.return_value = make_response(json_body=group_payload(files=[file_payload]))

        group = rest_client.groups.info(GROUP_ID)

        request = sent_request(rest_send)
        assert request.method == "GET"
        assert request.url == f"{API}/groups/{GROUP_ID}/"
        assert group.files_count == 12
        assert group.files[0].original_filename == "pineapple.jpg"

    def test_info_unknown_group(self, rest_client, rest_send):
        rest_send.return_value = make_response(status_code=404, json_body={"detail": "Not found."})

        with pytest.raises(NotFoundError):
            rest_client.groups.info("missing~1")

    def test_list_defaults(self, rest_client, rest_send):
        rest_send.return_value = make_response(json_body={
            "next": None,
            "previous": None,
            "total": 1,
            "per_page": 100,
            "results": [group_payload()],
        })

        page = rest_client.groups.list()

        assert sent_request(rest_send).url == f"{API}/groups/?limit=100&ordering=datetime_created"
        assert page.results[0].id == GROUP_ID
        assert page.results[0].files is None

    def test_list_newest_first(self, rest_client, rest_send):
        rest_send.return_value = make_response(json_body={"results": []})

        rest_client.groups.list(GroupListParams(limit=5, ordering=GroupOrdering.DATETIME_CREATED_DESC))

        assert sent_request(rest_send).url == f"{API}/groups/?limit=5&ordering=-datetime_created"

    def test_iterate(self, rest_client, rest_send):
        rest_send.side_effect = [
            make_response(json_body={"next": f"{API}/groups/?page=2", "results": [group_payload(id="a~1")]}),
            make_response(json_body={"next": None, "results": [group_payload(id="b~1")]}),
        ]

        assert [group.id for group in rest_client.groups.iterate()] == ["a~1", "b~1"]
        assert rest_send.call_count == 2

    def test_store(self, rest_client, rest_send):
        rest_send.return_value = make_response(
            json_body=group_payload(datetime_stored="2018-11-27T14:20:00.000000Z"),
        )

        group = rest_client.groups.store(GROUP_ID)

        request = sent_request(rest_send)
        assert request.method == "PUT"
        assert request.url == f"{API}/groups/{GROUP_ID}/storage/"
        assert group.datetime_stored is not None
