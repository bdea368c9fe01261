"""Tests for the Brevo email sender"""

import json

import httpx
import pytest

from app.services.email import BrevoEmailSender, EmailDeliveryError, NoopEmailSender


def _sender(handler) -> BrevoEmailSender:
    return BrevoEmailSender(
        api_key="test-key",
        base_url="https://brevo.example.com/v3/",
        sender_email="noreply@platform.example.com",
        sender_name="Platform",
        transport=httpx.MockTransport(handler),
    )


async def test_template_request():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["api_key"] = request.headers["api-key"]
        captured["body"] = json.loads(request.content)
        return httpx.Response(201, json={"messageId": "<1@brevo>"})

    await _sender(handler).send_template(
        template_id=7,
        to_email="ana@casa.example.com",
        to_name="Ana",
        params={"temporary_password": "Xy7!abcdefgh"},
    )

    assert captured["url"] == "https://brevo.example.com/v3/smtp/email"
    assert captured["api_key"] == "test-key"
    assert captured["body"] == {
        "templateId": 7,
        "to": [{"email": "ana@casa.example.com", "name": "Ana"}],
        "params": {"temporary_password": "Xy7!abcdefgh"},
        "sender": {"email": "noreply@platform.example.com", "name": "Platform"},
    }


async def test_provider_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "Key not found"})

    with pytest.raises(EmailDeliveryError, match="401"):
        await _sender(handler).send_template(template_id=1, to_email="ana@casa.example.com")


async def test_transport_error_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(EmailDeliveryError):
        await _sender(handler).send_template(template_id=1, to_email="ana@casa.example.com")


async def test_noop_sender_does_not_raise():
    await NoopEmailSender().send_template(template_id=1, to_email="ana@casa.example.com")
