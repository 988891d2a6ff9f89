"""
Session, archive and roster endpoint tests
"""
import pytest

from app.models.library import ObjectionLibraryEntry, SkillLibraryEntry
from tests.factories import session_payload


@pytest.mark.asyncio
async def test_create_session_computes_score(client, admin_headers, agent, qc_agent):
    payload = session_payload(agent.id, qc_agent_id=qc_agent.id)
    response = await client.post("/api/v1/sessions", json=payload, headers=admin_headers)

    assert response.status_code == 201
    data = response.json()
    session = data["session"]
    assert session["agent_id"] == agent.id
    assert session["overall_score"] == 74.6
    assert session["binary_score"]["property_condition"] == "no"
    assert session["category_score"]["closing_objections"] == 2
    assert session["category_score"]["objection_handling"] is None
    assert data["training_suggestions"] == [{
        "category": "Bonding & Rapport",
        "score": 4.0,
        "qc_comment": "Great rapport, asked about the family and listened well.",
    }]


@pytest.mark.asyncio
async def test_create_session_unknown_agent(client, admin_headers):
    response = await client.post("/api/v1/sessions", json=session_payload(999), headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Agent not found"


@pytest.mark.asyncio
async def test_create_session_rejects_out_of_range_rating(client, admin_headers, agent):
    payload = session_payload(agent.id, categories={"bonding_rapport": 6})
    response = await client.post("/api/v1/sessions", json=payload, headers=admin_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_session_bumps_library(client, admin_headers, agent, db_session):
    objection = ObjectionLibraryEntry(objection_text="I need to talk to my spouse", category="family", usage_count=2)
    skill = SkillLibraryEntry(skill_text="Mirroring", category="bonding_rapport", usage_count=0)
    db_session.add_all([objection, skill])
    await db_session.commit()

    payload = session_payload(
        agent.id,
        objection_ids=[objection.id, 999],
        skill_ids=[skill.id],
        new_objection="The price is too low",
    )
    response = await client.post("/api/v1/sessions", json=payload, headers=admin_headers)
    assert response.status_code == 201

    objections = (await client.get("/api/v1/library/objections")).json()
    by_text = {o["objection_text"]: o for o in objections}
    assert by_text["I need to talk to my spouse"]["usage_count"] == 3
    assert by_text["The price is too low"]["usage_count"] == 1
    assert by_text["The price is too low"]["category"] == "custom"

    skills = (await client.get("/api/v1/library/skills")).json()
    assert skills[0]["usage_count"] == 1


@pytest.mark.asyncio
async def test_edit_recomputes_and_is_idempotent(client, admin_headers, agent):
    created = (await client.post("/api/v1/sessions", json=session_payload(agent.id), headers=admin_headers)).json()
    session_id = created["session"]["id"]

    edit = {
        "lead_status": "Dead",
        "binary": {"intro": "yes", "first_ask": "yes", "property_condition": "yes"},
        "categories": {
            "bonding_rapport": 5,
            "magic_problem": 5,
            "second_ask": 5,
            "objection_handling": 5,
            "closing_offer_presentation": 5,
            "closing_motivation": 5,
            "closing_objections": 5,
        },
    }
    first = await client.put(f"/api/v1/sessions/{session_id}", json=edit, headers=admin_headers)
    second = await client.put(f"/api/v1/sessions/{session_id}", json=edit, headers=admin_headers)

    assert first.status_code == 200
    assert first.json()["overall_score"] == 100.0
    assert second.json()["overall_score"] == first.json()["overall_score"]
    assert second.json()["lead_status"] == "Dead"
    # untouched fields survive the edit
    assert second.json()["property_address"] == "12 Elm Street"


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["lead_status", "session_date", "agent_id"])
async def test_edit_rejects_null_for_required_fields(client, admin_headers, agent, field):
    created = (await client.post("/api/v1/sessions", json=session_payload(agent.id), headers=admin_headers)).json()
    session_id = created["session"]["id"]

    response = await client.put(f"/api/v1/sessions/{session_id}", json={field: None}, headers=admin_headers)
    assert response.status_code == 422

    unchanged = (await client.get(f"/api/v1/sessions/{session_id}")).json()
    assert unchanged[field] == created["session"][field]


@pytest.mark.asyncio
async def test_get_and_list_sessions(client, admin_headers, agent):
    created = (await client.post("/api/v1/sessions", json=session_payload(agent.id), headers=admin_headers)).json()

    response = await client.get(f"/api/v1/sessions/{created['session']['id']}")
    assert response.status_code == 200
    assert response.json()["call_time"] == "10:30"

    listed = (await client.get("/api/v1/sessions", params={"agent_id": agent.id})).json()
    assert [s["id"] for s in listed] == [created["session"]["id"]]
    assert (await client.get("/api/v1/sessions", params={"agent_id": 999})).json() == []

    missing = await client.get("/api/v1/sessions/999")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Session not found"


@pytest.mark.asyncio
async def test_archive_and_restore_round_trip(client, admin_headers, agent):
    created = (await client.post("/api/v1/sessions", json=session_payload(agent.id), headers=admin_headers)).json()
    original = created["session"]

    archived = await client.post(f"/api/v1/sessions/{original['id']}/archive", headers=admin_headers)
    assert archived.status_code == 200
    archive_entry = archived.json()
    assert archive_entry["original_session_id"] == original["id"]
    assert archive_entry["payload"]["categories"]["bonding_rapport"] == 4

    assert (await client.get(f"/api/v1/sessions/{original['id']}")).status_code == 404
    assert [a["id"] for a in (await client.get("/api/v1/archive")).json()] == [archive_entry["id"]]

    restored = await client.post(f"/api/v1/archive/{archive_entry['id']}/restore", headers=admin_headers)
    assert restored.status_code == 200
    session = restored.json()
    assert session["id"] != original["id"]
    assert session["overall_score"] == original["overall_score"]
    assert session["call_date"] == original["call_date"]
    assert session["lead_status"] == original["lead_status"]
    assert session["binary_score"] == original["binary_score"]
    assert session["category_score"] == original["category_score"]

    assert (await client.get("/api/v1/archive")).json() == []


@pytest.mark.asyncio
async def test_session_ids_not_reused_after_archive(client, admin_headers, agent):
    first = (await client.post("/api/v1/sessions", json=session_payload(agent.id), headers=admin_headers)).json()
    archive_entry = (
        await client.post(f"/api/v1/sessions/{first['session']['id']}/archive", headers=admin_headers)
    ).json()

    later = (await client.post("/api/v1/sessions", json=session_payload(agent.id), headers=admin_headers)).json()
    assert later["session"]["id"] != archive_entry["original_session_id"]

    # the archive entry still points at nothing live
    orphan = await client.get(f"/api/v1/sessions/{archive_entry['original_session_id']}")
    assert orphan.status_code == 404


@pytest.mark.asyncio
async def test_delete_archived_and_hard_delete(client, admin_headers, agent):
    first = (await client.post("/api/v1/sessions", json=session_payload(agent.id), headers=admin_headers)).json()
    second = (await client.post("/api/v1/sessions", json=session_payload(agent.id), headers=admin_headers)).json()

    archive_entry = (
        await client.post(f"/api/v1/sessions/{first['session']['id']}/archive", headers=admin_headers)
    ).json()
    response = await client.delete(f"/api/v1/archive/{archive_entry['id']}", headers=admin_headers)
    assert response.status_code == 204
    assert (await client.post(f"/api/v1/archive/{archive_entry['id']}/restore", headers=admin_headers)).status_code == 404

    response = await client.delete(f"/api/v1/sessions/{second['session']['id']}", headers=admin_headers)
    assert response.status_code == 204
    assert (await client.get("/api/v1/sessions")).json() == []


@pytest.mark.asyncio
async def test_roster_reflects_sessions(client, admin_headers, agent):
    await client.post("/api/v1/sessions", json=session_payload(agent.id), headers=admin_headers)

    roster = (await client.get("/api/v1/agents")).json()
    assert len(roster) == 1
    row = roster[0]
    assert row["name"] == "Dana Rivera"
    assert row["session_count"] == 1
    assert row["scores"] == {
        "Bonding & Rapport": 80,
        "Magic Problem Discovery": 60,
        "Second Ask": 100,
        "Closing": 72,
    }
    assert row["overall_score"] == 78.0
    assert row["status"] == "green"
    assert row["last_evaluation_date"] == "2026-03-02"


@pytest.mark.asyncio
async def test_create_agents(client, admin_headers):
    response = await client.post("/api/v1/agents", json={"name": "  Riley  "}, headers=admin_headers)
    assert response.status_code == 201
    assert response.json()["name"] == "Riley"

    response = await client.post("/api/v1/qc-agents", json={"name": "Quinn"}, headers=admin_headers)
    assert response.status_code == 201
    assert [q["name"] for q in (await client.get("/api/v1/qc-agents")).json()] == ["Quinn"]

    assert (await client.get("/api/v1/agents/999")).status_code == 404
