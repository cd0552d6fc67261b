"""Tests for the webhook service."""

import pytest

from uploadcare_sdk import BadRequestError, WebhookCreateParams, WebhookUpdateParams

from tests.conftest import make_response, sent_json, sent_request

API = "https://api.uploadcare.com"


def webhook_payload(**overrides):
    payload = {
        "id": 1,
        "created": "2016-04-27T11:49:54.948615Z",
        "updated": "2016-04-27T12:04:57.819933Z",
        "event": "file.uploaded",
        "target_url": "https://example.com/hooks/receiver",
        "project": 13,
        "is_active": True,
    }
    payload.update(overrides)
    return payload


class TestWebhooks:

    def test_list(self, rest_client, rest_send):
        rest_send.return_value = make_response(json_body=[webhook_payload(), webhook_payload(id=2)])

        hooks = rest_client.webhooks.list()

        assert sent_request(rest_send).url == f"{API}/webhooks/"
        assert [hook.id for hook in hooks] == [1, 2]
        assert hooks[0].created.year == 2016

    def test_create(self, rest_client, rest_send):
        rest_send.return_value = make_response(json_body=webhook_payload(signing_secret="s3cret"))

        hook = rest_client.webhooks.create(
            WebhookCreateParams(target_url="https://example.com/hooks/receiver", signing_secret="s3cret"),
        )

        request = sent_request(rest_send)
        assert request.method == "POST"
        assert request.url == f"{API}/webhooks/"
        assert sent_json(rest_send) == {
            "event": "file.uploaded",
            "target_url": "https://example.com/hooks/receiver",
            "signing_secret": "s3cret",
            "is_active": True,
        }
        assert hook.signing_secret == "s3cret"

    def test_create_duplicate_target(self, rest_client, rest_send):
        rest_send.return_value = make_response(
            status_code=400, json_body={"detail": "`target_url` is already subscribed."},
        )

        with pytest.raises(BadRequestError) as exc_info:
            rest_client.webhooks.create(WebhookCreateParams(target_url="https://example.com/hooks/receiver"))

        assert "already subscribed" in exc_info.value.message

    def test_update(self, rest_client, rest_send):
        rest_send.return_value = make_response(json_body=webhook_payload(is_active=False))

        hook = rest_client.webhooks.update(WebhookUpdateParams(id=1, is_active=False))

        request = sent_request(rest_send)
        assert request.method == "PUT"
        assert request.url == f"{API}/webhooks/1/"
        assert sent_json(rest_send) == {"is_active": False}
        assert not hook.is_active

    def test_delete_by_target_url(self, rest_client, rest_send):
        rest_send.return_value = make_response(status_code=204)

        result = rest_client.webhooks.delete("https://example.com/hooks/receiver")

        request = sent_request(rest_send)
        assert request.method == "DELETE"
        assert request.url == f"{API}/webhooks/unsubscribe/"
        assert sent_json(rest_send) == {"target_url": "https://example.com/hooks/receiver"}
        assert result is None
