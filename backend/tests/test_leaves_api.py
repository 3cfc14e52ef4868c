"""
Testes para /api/v1/leaves – conflito de período (409), edição sem
autoconflito, exclusão lógica, aviso de tempo de serviço, auditoria.
"""
import asyncio
import uuid
from datetime import date, timedelta

import pytest
from sqlalchemy import select

from sigo.models.audit import AuditLog
from sigo.models.leave import Leave
from tests.conftest import TEST_USER, create_leave, create_person

LEAVES_URL = "/api/v1/leaves"


def leave_payload(person, start: str, end: str | None, type: str = "FERIAS", **extra) -> dict:
    return {"person_id": str(person.id), "type": type, "start_date": start, "end_date": end, **extra}


# ── POST /leaves ──────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_create_leave(client, person):
    resp = await client.post(LEAVES_URL, json=leave_payload(person, "2026-03-01", "2026-03-10"))
    assert resp.status_code == 201
    data = resp.json()
    assert data["type"] == "FERIAS"
    assert data["counts_toward_service"] is True
    assert data["warnings"] == []
    assert data["created_by"] == TEST_USER


@pytest.mark.asyncio
async def test_shared_boundary_day_is_conflict(client, person):
    first = await client.post(LEAVES_URL, json=leave_payload(person, "2026-03-01", "2026-03-10"))
    assert first.status_code == 201

    resp = await client.post(LEAVES_URL, json=leave_payload(person, "2026-03-10", "2026-03-20", type="LTS"))
    assert resp.status_code == 409
    body = resp.json()
    assert body["detail"].startswith("CONFLITO: Já existe afastamento no período")
    assert "01/03/2026" in body["detail"]
    assert body["conflict"]["id"] == first.json()["id"]
    assert body["conflict"]["type"] == "FERIAS"


@pytest.mark.asyncio
async def test_adjacent_leave_is_accepted(client, person):
    await client.post(LEAVES_URL, json=leave_payload(person, "2026-03-01", "2026-03-10"))
    resp = await client.post(LEAVES_URL, json=leave_payload(person, "2026-03-11", "2026-03-20"))
    assert resp.status_code == 201


@pytest.mark.asyncio
async def test_conflict_is_per_person(client, db, person):
    other = await create_person(db, re="654321", war_name="SOUZA", rank="SD")
    await client.post(LEAVES_URL, json=leave_payload(person, "2026-03-01", "2026-03-10"))
    resp = await client.post(LEAVES_URL, json=leave_payload(other, "2026-03-01", "2026-03-10"))
    assert resp.status_code == 201


@pytest.mark.asyncio
async def test_indeterminate_leave_blocks_later_periods(client, person):
    resp = await client.post(
        LEAVES_URL,
        json=leave_payload(person, "2026-03-01", None, type="AGREGACAO", indeterminate=True),
    )
    assert resp.status_code == 201

    resp = await client.post(LEAVES_URL, json=leave_payload(person, "2027-01-01", "2027-01-10"))
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_non_service_leave_returns_warning(client, person):
    resp = await client.post(
        LEAVES_URL,
        json=leave_payload(person, "2026-03-01", "2026-06-01", type="LIC_TRATAR_INT_PARTICULAR"),
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["counts_toward_service"] is False
    assert len(data["warnings"]) == 1
    assert "NÃO conta como efetivo exercício" in data["warnings"][0]


@pytest.mark.asyncio
async def test_bounded_leave_without_end_date_is_rejected(client, person):
    resp = await client.post(LEAVES_URL, json=leave_payload(person, "2026-03-01", None))
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_end_before_start_is_rejected(client, person):
    resp = await client.post(LEAVES_URL, json=leave_payload(person, "2026-03-10", "2026-03-01"))
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_unknown_leave_type_is_rejected(client, person):
    resp = await client.post(LEAVES_URL, json=leave_payload(person, "2026-03-01", "2026-03-02", type="FOLGA"))
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_unknown_person_returns_404(client):
    resp = await client.post(LEAVES_URL, json={
        "person_id": str(uuid.uuid4()), "type": "FERIAS",
        "start_date": "2026-03-01", "end_date": "2026-03-02",
    })
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_concurrent_overlapping_requests_only_one_wins(client, db, person):
    payload = leave_payload(person, "2026-05-01", "2026-05-10")
    results = await asyncio.gather(*(client.post(LEAVES_URL, json=payload) for _ in range(5)))

    assert sorted(r.status_code for r in results) == [201, 409, 409, 409, 409]
    stored = (await db.execute(
        select(Leave).where(Leave.person_id == person.id, Leave.deleted.is_(False))
    )).scalars().all()
    assert len(stored) == 1


# ── PUT /leaves/{id} ──────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_edit_does_not_conflict_with_itself(client, person):
    created = await client.post(LEAVES_URL, json=leave_payload(person, "2026-03-01", "2026-03-10"))
    leave_id = created.json()["id"]

    resp = await client.put(f"{LEAVES_URL}/{leave_id}", json={"end_date": "2026-03-15"})
    assert resp.status_code == 200
    assert resp.json()["end_date"] == "2026-03-15"


@pytest.mark.asyncio
async def test_edit_into_other_leave_conflicts(client, person):
    await client.post(LEAVES_URL, json=leave_payload(person, "2026-03-01", "2026-03-10"))
    second = await client.post(LEAVES_URL, json=leave_payload(person, "2026-03-20", "2026-03-25"))

    resp = await client.put(f"{LEAVES_URL}/{second.json()['id']}", json={"start_date": "2026-03-10"})
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_edit_type_recomputes_service_time(client, person):
    created = await client.post(LEAVES_URL, json=leave_payload(person, "2026-03-01", "2026-03-10"))
    resp = await client.put(f"{LEAVES_URL}/{created.json()['id']}", json={"type": "PRISAO"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["counts_toward_service"] is False
    assert data["warnings"]


# ── DELETE /leaves/{id} ───────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_soft_deleted_leave_does_not_block(client, db, person):
    created = await client.post(LEAVES_URL, json=leave_payload(person, "2026-03-01", "2026-03-10"))
    leave_id = created.json()["id"]

    resp = await client.delete(f"{LEAVES_URL}/{leave_id}")
    assert resp.status_code == 204

    resp = await client.get(f"{LEAVES_URL}/{leave_id}")
    assert resp.status_code == 404

    # Record is kept for the audit trail
    row = (await db.execute(select(Leave).where(Leave.id == uuid.UUID(leave_id)))).scalar_one()
    assert row.deleted is True

    resp = await client.post(LEAVES_URL, json=leave_payload(person, "2026-03-05", "2026-03-08"))
    assert resp.status_code == 201


# ── GET /leaves ───────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_list_leaves_filters_and_military_name(client, db, person):
    today = date.today()
    await create_leave(db, person, today - timedelta(days=1), today + timedelta(days=1))
    await create_leave(db, person, today + timedelta(days=30), today + timedelta(days=40), type="LTS")

    resp = await client.get(LEAVES_URL, params={"person_id": str(person.id)})
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 2
    assert data["items"][0]["military_name"] == "Cb PM PEREIRA"

    resp = await client.get(LEAVES_URL, params={"active": "true"})
    assert resp.json()["total"] == 1

    resp = await client.get(LEAVES_URL, params={"type": "LTS"})
    assert [i["type"] for i in resp.json()["items"]] == ["LTS"]


# ── Auditoria ─────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_leave_writes_are_audited(client, db, person):
    created = await client.post(LEAVES_URL, json=leave_payload(person, "2026-03-01", "2026-03-10"))
    leave_id = created.json()["id"]
    await client.put(f"{LEAVES_URL}/{leave_id}", json={"notes": "prorrogado"})
    await client.delete(f"{LEAVES_URL}/{leave_id}")

    result = await db.execute(
        select(AuditLog).where(AuditLog.table_name == "leaves").order_by(AuditLog.created_at)
    )
    entries = result.scalars().all()
    assert [e.action for e in entries] == ["CREATE", "UPDATE", "DELETE"]
    assert all(e.user == TEST_USER for e in entries)
    assert entries[0].old_values is None
    assert entries[1].new_values["notes"] == "prorrogado"
    assert entries[2].new_values["deleted"] is True
