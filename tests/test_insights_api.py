"""
Dashboard, insight, report and view endpoint tests
"""
import pytest

from tests.factories import session_payload


async def score_calls(client, admin_headers, agent_id):
    comments = [
        (5, "Built trust with the seller right away. Great active listening throughout the whole call."),
        (4, "Built trust quickly by asking about the move. Strong active listening when the seller opened up."),
    ]
    for day, (rating, comment) in zip(("2026-03-09", "2026-03-10"), comments):
        payload = session_payload(
            agent_id,
            session_date=day,
            call_date=day,
            categories={"bonding_rapport": rating, "bonding_rapport_comment": comment, "second_ask": 4},
        )
        response = await client.post("/api/v1/sessions", json=payload, headers=admin_headers)
        assert response.status_code == 201


@pytest.mark.asyncio
async def test_dashboard_metrics(client, admin_headers, agent):
    await score_calls(client, admin_headers, agent.id)

    response = await client.get("/api/v1/dashboard", params={"as_of": "2026-03-11"})
    assert response.status_code == 200
    data = response.json()
    assert data["as_of"] == "2026-03-11"
    assert data["team_greatest_strength"]["category"] == "Bonding & Rapport"
    assert data["top_rep_this_week"]["agent"] == {"id": agent.id, "name": "Dana Rivera"}
    assert data["most_improved"]["agent"] is None
    assert data["team_average"] == 85.0


@pytest.mark.asyncio
async def test_dashboard_empty(client):
    data = (await client.get("/api/v1/dashboard", params={"as_of": "2026-03-11"})).json()
    assert data["team_average"] == 0.0
    assert data["top_rep_this_week"]["badge"] == "No data this week"


@pytest.mark.asyncio
async def test_agent_insights(client, admin_headers, agent):
    await score_calls(client, admin_headers, agent.id)

    response = await client.get(f"/api/v1/agents/{agent.id}/insights")
    assert response.status_code == 200
    data = response.json()
    assert data["session_count"] == 2
    assert data["lead_status_counts"] == {"Active": 2, "Pending": 0, "Dead": 0}
    assert list(data["categories"]) == ["Bonding & Rapport", "Magic Problem Discovery", "Second Ask", "Closing"]

    bonding = data["categories"]["Bonding & Rapport"]
    assert bonding["score"] == 90
    assert bonding["strengths"][0] == "Built trust quickly by asking about the move"
    assert data["categories"]["Magic Problem Discovery"]["summary_text"] == (
        "No QC data available for this category yet."
    )
    assert "Dana Rivera" in data["overall_comment"]


@pytest.mark.asyncio
async def test_category_insight(client, admin_headers, agent):
    await score_calls(client, admin_headers, agent.id)

    second_ask = (await client.get(f"/api/v1/agents/{agent.id}/insights/second_ask")).json()
    assert second_ask["category"] == "Second Ask"
    assert second_ask["trend"] == "stable"
    assert second_ask["score"] == 80

    unknown = (await client.get(f"/api/v1/agents/{agent.id}/insights/tonality")).json()
    assert unknown["trend"] == "neutral"
    assert unknown["score"] == 0

    assert (await client.get("/api/v1/agents/999/insights")).status_code == 404


@pytest.mark.asyncio
async def test_report_pdf(client, admin_headers, agent):
    await score_calls(client, admin_headers, agent.id)

    response = await client.get(f"/api/v1/agents/{agent.id}/report.pdf")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_views(client, admin_headers, agent):
    await score_calls(client, admin_headers, agent.id)

    dashboard = (await client.get("/api/v1/views/dashboard")).json()
    assert dashboard["view"] == "dashboard"
    assert dashboard["data"]["roster"][0]["agent_id"] == agent.id

    reporting = (await client.get("/api/v1/views/reporting", params={"agent_id": agent.id})).json()
    assert reporting["agent_id"] == agent.id
    assert len(reporting["data"]["sessions"]) == 2

    deep_dive = (await client.get("/api/v1/views/deep-dive", params={"agent_id": agent.id})).json()
    assert deep_dive["view"] == "deep_dive"
    assert "Bonding & Rapport" in deep_dive["data"]["categories"]

    form = (await client.get("/api/v1/views/scoring_form")).json()
    assert [q["key"] for q in form["data"]["binary_questions"]] == ["intro", "first_ask", "property_condition"]

    missing_agent = await client.get("/api/v1/views/deep_dive")
    assert missing_agent.status_code == 400

    assert (await client.get("/api/v1/views/reporting", params={"agent_id": 999})).status_code == 404
