"""Webhook resource of the REST API."""

import logging
from typing import List

from .client import RestClient
from .models import Webhook, WebhookCreateParams, WebhookUpdateParams

logger = logging.getLogger(__name__)


class WebhookService:
    """Calls to the webhook API."""

    def __init__(self, client: RestClient):
        self.client = client

    def list(self) -> List[Webhook]:
        """List project webhooks."""
        data = self.client.call("GET", "/webhooks/")
        return [Webhook.from_dict(item) for item in data or []]

    def create(self, params: WebhookCreateParams) -> Webhook:
        """
        Create and subscribe a webhook.

        A target URL must be unique per project and event. New webhooks are
        active unless ``is_active`` is False.
        """
        data = self.client.call("POST", "/webhooks/", json=params.to_json())
        return Webhook.from_dict(data)

    def update(self, params: WebhookUpdateParams) -> Webhook:
        """Update webhook attributes. Fields left as None are not sent."""
        data = self.client.call("PUT", f"/webhooks/{params.id}/", json=params.to_json())
        return Webhook.from_dict(data)

    def delete(self, target_url: str) -> None:
        """Unsubscribe and delete the webhook pointing at ``target_url``."""
        self.client.call("DELETE", "/webhooks/unsubscribe/", json={"target_url": target_url})
        logger.debug("unsubscribed webhook for %s", target_url)
