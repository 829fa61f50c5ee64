import pytest
from dataclasses import FrozenInstanceError
from app.domain.entities import (
    ProviderCredentials,
    TopicPayload,
    TokenPayload,
    PushMessage,
    ProductEvent,
    MenuItem,
)

def test_provider_credentials_frozen_and_masked_repr():
    c = ProviderCredentials(project_id="menu-app-12345", client_email="a@b", private_key="SECRET-KEY")
    with pytest.raises(FrozenInstanceError):
        c.project_id = "other"
    assert "SECRET-KEY" not in repr(c)
    assert "<10 chars>" in repr(c)
    assert c == ProviderCredentials(project_id="menu-app-12345", client_email="a@b", private_key="SECRET-KEY")

def test_payload_variants_require_their_target():
    t = TopicPayload(topic="new_products", title="t", body="b")
    assert t.data is None
    with pytest.raises(ValueError):
        TopicPayload(topic="", title="t", body="b")
    with pytest.raises(ValueError):
        TokenPayload(token="", title="t", body="b")
    with pytest.raises(FrozenInstanceError):
        t.topic = "x"

def test_push_message_needs_exactly_one_target():
    with pytest.raises(ValueError):
        PushMessage(data={})
    with pytest.raises(ValueError):
        PushMessage(data={}, topic="a", token="b")
    assert PushMessage(data={}, topic="a").target == "topic:a"
    assert PushMessage(data={}, token="b").target == "token"

def test_product_event_stringifies_id():
    e = ProductEvent.added(42, "Tacos")
    assert e == ProductEvent(type="product_added", product_id="42", product_title="Tacos")
    assert ProductEvent.updated("7", "Sopa").type == "product_updated"
    assert hash(e) == hash(ProductEvent.added(42, "Tacos"))

def test_menu_item_defaults():
    i = MenuItem(id=1, titulo="Tacos", ingredientes="x", preparacion="y")
    assert i.imagen is None
    with pytest.raises(FrozenInstanceError):
        i.titulo = "z"
