"""Push notification gateway.

``dummy`` (the default) only logs what would be sent, the same dev-safe
fallback the SMS and chat notifiers use. ``fcm`` talks to Firebase Cloud
Messaging HTTP v1 and to the Instance ID API for topic subscriptions.
"""

from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass, field
from typing import Any

import httpx

_LOG = logging.getLogger("newsdesk.push")

FCM_SEND_URL = "https://fcm.googleapis.com/v1/projects/{project_id}/messages:send"
IID_BATCH_ADD_URL = "https://iid.googleapis.com/iid/v1:batchAdd"
IID_BATCH_REMOVE_URL = "https://iid.googleapis.com/iid/v1:batchRemove"

_TOPIC_RE = re.compile(r"^[a-zA-Z0-9\-_.~%]{1,900}$")
_MOCK_PROVIDERS = {"", "dummy", "mock", "console"}


class PushDeliveryError(Exception):
    pass


class PushNotConfigured(PushDeliveryError):
    pass


class InvalidPushTarget(PushDeliveryError):
    pass


@dataclass
class MulticastResult:
    success_count: int = 0
    failure_count: int = 0
    errors: list[str] = field(default_factory=list)


def _normalize_topic(topic: str) -> str:
    name = str(topic or "").strip()
    if name.startswith("/topics/"):
        name = name[len("/topics/"):]
    if not _TOPIC_RE.fullmatch(name):
        raise InvalidPushTarget(f"Invalid topic name: {topic}")
    return name


def _message_payload(target: dict[str, str], title: str, body: str, data: dict[str, str] | None) -> dict[str, Any]:
    message: dict[str, Any] = dict(target)
    message["notification"] = {"title": title, "body": body}
    if data:
        message["data"] = {str(k): str(v) for k, v in data.items()}
    return {"message": message}


class PushNotificationService:
    def __init__(
        self,
        *,
        provider: str = "dummy",
        project_id: str = "",
        access_token: str = "",
        timeout_seconds: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.provider = str(provider or "dummy").strip().lower()
        self.project_id = str(project_id or "").strip()
        self.access_token = str(access_token or "").strip()
        self.timeout_seconds = float(timeout_seconds)
        self._transport = transport

    @classmethod
    def from_settings(cls, settings) -> "PushNotificationService":
        return cls(
            provider=settings.PUSH_PROVIDER,
            project_id=settings.FCM_PROJECT_ID,
            access_token=settings.FCM_ACCESS_TOKEN,
            timeout_seconds=settings.FCM_TIMEOUT_SECONDS,
        )

    @property
    def mocked(self) -> bool:
        return self.provider in _MOCK_PROVIDERS

    def _require_fcm(self) -> None:
        if self.provider != "fcm":
            raise PushNotConfigured(f"Unknown push provider: {self.provider}")
        if not self.project_id or not self.access_token:
            raise PushNotConfigured("FCM_PROJECT_ID and FCM_ACCESS_TOKEN must be set")

    def _post(self, url: str, payload: dict[str, Any], *, extra_headers: dict[str, str] | None = None) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {self.access_token}"}
        headers.update(extra_headers or {})
        try:
            with httpx.Client(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            raise PushDeliveryError(f"Push provider request failed: {exc}") from exc
        data = response.json() if response.content else {}
        if response.status_code >= 400:
            error = data.get("error") if isinstance(data, dict) else None
            detail = error.get("message") if isinstance(error, dict) else error
            raise PushDeliveryError(f"Push provider returned {response.status_code}: {detail or 'error'}")
        return data if isinstance(data, dict) else {}

    def _send_message(self, target: dict[str, str], title: str, body: str, data: dict[str, str] | None) -> str:
        if self.mocked:
            message_id = f"mock-{uuid.uuid4().hex}"
            _LOG.info("[PUSH MOCK] target=%s title=%s data_keys=%s id=%s", target, title, sorted(data or {}), message_id)
            return message_id
        self._require_fcm()
        url = FCM_SEND_URL.format(project_id=self.project_id)
        result = self._post(url, _message_payload(target, title, body, data))
        return str(result.get("name") or "")

    def send(self, token: str, title: str, body: str, data: dict[str, str] | None = None) -> str:
        return self._send_message({"token": token}, title, body, data)

    def send_to_topic(self, topic: str, title: str, body: str, data: dict[str, str] | None = None) -> str:
        return self._send_message({"topic": _normalize_topic(topic)}, title, body, data)

    def send_multicast(
        self, tokens: list[str], title: str, body: str, data: dict[str, str] | None = None
    ) -> MulticastResult:
        # FCM v1 has no multicast call; each token is its own request.
        result = MulticastResult()
        for token in tokens:
            try:
                self.send(token, title, body, data)
            except (PushNotConfigured, InvalidPushTarget):
                raise
            except PushDeliveryError as exc:
                result.failure_count += 1
                result.errors.append(str(exc))
                continue
            result.success_count += 1
        return result

    def _change_subscription(self, url: str, tokens: list[str], topic: str, action: str) -> None:
        name = _normalize_topic(topic)
        if self.mocked:
            _LOG.info("[PUSH MOCK] %s topic=%s tokens=%s", action, name, len(tokens))
            return
        self._require_fcm()
        data = self._post(
            url,
            {"to": f"/topics/{name}", "registration_tokens": list(tokens)},
            extra_headers={"access_token_auth": "true"},
        )
        failed = [r.get("error") for r in data.get("results") or [] if isinstance(r, dict) and r.get("error")]
        if failed:
            _LOG.warning("%s topic=%s failed_tokens=%s errors=%s", action, name, len(failed), sorted(set(failed)))

    def subscribe_to_topic(self, tokens: list[str], topic: str) -> None:
        self._change_subscription(IID_BATCH_ADD_URL, tokens, topic, "subscribe")

    def unsubscribe_from_topic(self, tokens: list[str], topic: str) -> None:
        self._change_subscription(IID_BATCH_REMOVE_URL, tokens, topic, "unsubscribe")
