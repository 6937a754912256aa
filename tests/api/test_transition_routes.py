"""Transition route tests — request body answers the transition's prompts."""

import logging
import uuid

from speki.core.card_types import StatementCard


async def test_into_instance(client, world, make):
    card_id = make.normal("Spain")
    res = await client.post(
        f"/api/v1/cards/{card_id}/transitions/into_instance",
        json={"target_class": str(world.country)},
    )
    body = res.json()
    assert res.status_code == 200
    assert body["status"] == "ok"
    assert body["card"]["payload"] == {
        "kind": "instance", "name": "Spain", "class_id": str(world.country),
    }


async def test_missing_answer_is_cancelled(client, world, make):
    card_id = make.normal("Spain")
    res = await client.post(f"/api/v1/cards/{card_id}/transitions/ii")
    body = res.json()
    assert body["status"] == "cancelled"
    assert body["card"]["kind"] == "normal"


async def test_rejection_is_200_with_code(client, world):
    res = await client.post(
        f"/api/v1/cards/{world.france}/transitions/set_parent_class",
        json={"parent_class": str(world.country)},
    )
    assert res.status_code == 200
    assert res.json()["error_code"] == "ILLEGAL_SOURCE"


async def test_unknown_transition(client, make):
    card_id = make.normal("Q")
    res = await client.post(f"/api/v1/cards/{card_id}/transitions/explode")
    assert res.json()["error_code"] == "UNKNOWN_TRANSITION"


async def test_unknown_card_is_404_with_transition_context(client):
    card_id = uuid.uuid4()
    res = await client.post(f"/api/v1/cards/{card_id}/transitions/into_class")
    assert res.status_code == 404
    assert res.json()["error"]["context"] == {
        "card_id": str(card_id), "transition": "into_class",
    }


async def test_new_attribute_pattern_returns_attribute_id(client, world):
    res = await client.post(
        f"/api/v1/cards/{world.france}/transitions/A",
        json={"pattern": "anthem of {}"},
    )
    body = res.json()
    assert body["status"] == "ok"
    assert body["changed"] is False
    pattern = (await client.get(f"/api/v1/attributes/{body['attribute_id']}")).json()
    assert pattern["pattern"] == "anthem of {}"


async def test_fill_attribute_with_card_answer(client, world):
    res = await client.post(
        f"/api/v1/cards/{world.france}/transitions/fill_attribute",
        json={"attribute": str(world.capital_of), "answer_card": str(world.paris)},
    )
    body = res.json()
    created = (await client.get(f"/api/v1/cards/{body['created_card_id']}")).json()
    assert created["front"] == "capital of France"
    assert created["back"] == "Paris"


async def test_result_lists_prompts_asked(client, world):
    res = await client.post(
        f"/api/v1/cards/{world.france}/transitions/fill_attribute",
        json={"attribute": str(world.capital_of), "answer_card": str(world.paris)},
    )
    assert res.json()["asked"] == ["attribute", "answer_card"]


async def test_retyped_class_is_rejected_not_an_error(client, world, store):
    store.mutate_type(world.country, StatementCard("Country"))
    res = await client.post(
        f"/api/v1/cards/{world.france}/transitions/fill_attribute",
        json={"attribute": str(world.capital_of), "answer_card": str(world.paris)},
    )
    body = res.json()
    assert res.status_code == 200
    assert body["status"] == "rejected"
    assert body["error_code"] == "NOT_A_CLASS"
    assert body["asked"] == []


async def test_unknown_card_logged_with_transition(client, caplog):
    card_id = uuid.uuid4()
    with caplog.at_level(logging.WARNING, logger="speki"):
        await client.post(f"/api/v1/cards/{card_id}/transitions/ii")
    record = caplog.records[-1]
    assert record.error_code == "RESOURCE_NOT_FOUND"
    assert record.card_id == str(card_id)
    assert record.transition == "ii"
    assert record.resource == f"Card:{card_id}"
