import asyncio
import logging
from app.domain.errors import ProviderError
from app.domain.services.product_notifier import ProductNotifier


def test_product_added_fans_out_to_two_topics(ready_gateway, provider):
    notifier = ProductNotifier(ready_gateway)
    assert asyncio.run(notifier.notify_product_added(42, "Tacos")) is None

    assert sorted(m.topic for m in provider.sent) == ["menu_notifications", "new_products"]
    for msg in provider.sent:
        assert msg.data == {"type": "product_added", "product_id": "42", "product_title": "Tacos"}
        assert msg.title == "🍽️ ¡Nuevo platillo disponible!"
        assert msg.body == "Se agregó 'Tacos' al menú del día"


def test_product_updated_fans_out_to_two_topics(ready_gateway, provider):
    notifier = ProductNotifier(ready_gateway)
    asyncio.run(notifier.notify_product_updated("7", "Pozole"))

    assert sorted(m.topic for m in provider.sent) == ["menu_notifications", "product_updates"]
    for msg in provider.sent:
        assert msg.data["type"] == "product_updated"
        assert msg.data["product_id"] == "7"
        assert msg.body == "Se actualizó 'Pozole' en el menú"


def test_one_failing_send_does_not_raise_and_other_is_attempted(ready_gateway, provider, caplog):
    provider.fail_for["new_products"] = ProviderError("topic down")
    notifier = ProductNotifier(ready_gateway)

    with caplog.at_level(logging.ERROR):
        assert asyncio.run(notifier.notify_product_added(42, "Tacos")) is None

    assert [m.topic for m in provider.sent] == ["menu_notifications"]
    assert "new_products" in caplog.text


def test_all_sends_failing_still_returns(ready_gateway, provider):
    provider.fail_for["product_updates"] = ProviderError("x")
    provider.fail_for["menu_notifications"] = RuntimeError("y")
    notifier = ProductNotifier(ready_gateway)
    assert asyncio.run(notifier.notify_product_updated(1, "Sopa")) is None
    assert provider.sent == []


def test_not_initialized_gateway_is_logged_not_raised(gateway, provider, caplog):
    notifier = ProductNotifier(gateway)
    with caplog.at_level(logging.WARNING):
        assert asyncio.run(notifier.notify_product_added(1, "Tacos")) is None
    assert provider.sent == []
    assert "não inicializado" in caplog.text


def test_deadline_expiry_is_swallowed(ready_gateway, provider, caplog):
    async def slow_send(message, dry_run=False):
        await asyncio.sleep(1)
        return "late"

    provider.send = slow_send
    notifier = ProductNotifier(ready_gateway, timeout=0.01)
    with caplog.at_level(logging.ERROR):
        assert asyncio.run(notifier.notify_product_added(1, "Tacos")) is None
    assert "Timeout" in caplog.text


def test_concurrent_events_do_not_share_payloads(ready_gateway, provider):
    notifier = ProductNotifier(ready_gateway)

    async def run():
        await asyncio.gather(
            notifier.notify_product_added(1, "Tacos"),
            notifier.notify_product_added(2, "Tamales"),
        )

    asyncio.run(run())
    assert len(provider.sent) == 4
    pairs = {(m.data["product_id"], m.data["product_title"]) for m in provider.sent}
    assert pairs == {("1", "Tacos"), ("2", "Tamales")}
    assert len({id(m.data) for m in provider.sent}) == 4


def test_send_welcome_success_and_failure(ready_gateway, provider):
    notifier = ProductNotifier(ready_gateway)
    asyncio.run(notifier.send_welcome("tok-1"))
    assert provider.sent[0].token == "tok-1"
    assert provider.sent[0].data["type"] == "welcome"
    assert provider.sent[0].title == "¡Bienvenido a nuestro menú!"

    provider.fail_for["tok-2"] = ProviderError("bad", code="invalid-registration-token")
    assert asyncio.run(notifier.send_welcome("tok-2")) is None
