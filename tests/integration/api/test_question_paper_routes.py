"""HTTP tests for the question paper API against an in-memory database."""

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from examcell.application.api.rest.app import create_app
from examcell.application.di import create_container
from examcell.config import AuthConfig, Config, DatabaseConfig, JwtConfig
from examcell.domain.auth.model.role import Role
from examcell.domain.auth.model.value import StaffId, StaffMember
from examcell.domain.auth.service.token import TokenService
from examcell.domain.subject.model.value import Subject, SubjectId
from examcell.infrastructure.persistence.repository.directory import (
    SQLAlchemyStaffDirectory,
    SQLAlchemySubjectReader,
)
from examcell.infrastructure.persistence.tables import metadata

SUBJECT = Subject(
    id=SubjectId.generate(),
    code="CS602",
    name="Compiler Design",
    department="CSE",
    semester=6,
)
STAFF = {
    "coe": StaffMember(id=StaffId.generate(), external_id="user_coe", name="COE", role=Role.COE),
    "u1": StaffMember(
        id=StaffId.generate(), external_id="user_u1", name="U1", role=Role.STAFF, department="CSE"
    ),
    "u2": StaffMember(
        id=StaffId.generate(), external_id="user_u2", name="U2", role=Role.HOD, department="CSE"
    ),
    "u3": StaffMember(
        id=StaffId.generate(), external_id="user_u3", name="U3", role=Role.STAFF, department="CSE"
    ),
    "fee": StaffMember(
        id=StaffId.generate(), external_id="user_fee", name="Fee Clerk", role=Role.OFFICE_FEE
    ),
}

SECTIONS = {
    "sections": [
        {
            "label": "Section A",
            "total_marks": 10,
            "questions": [{"q_no": "Q1", "text": "Define an LR(1) item.", "marks": 10}],
        }
    ]
}


@pytest.fixture
def config() -> Config:
    return Config(
        database=DatabaseConfig(url="sqlite+aiosqlite:///:memory:", auto_migrate=False),
        auth=AuthConfig(jwt=JwtConfig(secret="test-secret-with-enough-length-for-hs256")),
    )


@pytest.fixture
def tokens(config: Config) -> TokenService:
    return TokenService(_config=config.auth.jwt)


@pytest_asyncio.fixture
async def client(config: Config):
    container = create_container(config)

    engine = await container.get(AsyncEngine)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    factory = await container.get(async_sessionmaker[AsyncSession])
    async with factory() as session:
        await SQLAlchemySubjectReader(session).add(SUBJECT)
        directory = SQLAlchemyStaffDirectory(session)
        for member in STAFF.values():
            await directory.add(member)
        await session.commit()

    app = create_app(config, container=container)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http

    await container.close()


def bearer(tokens: TokenService, who: str) -> dict[str, str]:
    member = STAFF[who]
    return {"Authorization": f"Bearer {tokens.create_access_token(member.external_id)}"}


async def assign(client: httpx.AsyncClient, tokens: TokenService, setter: str = "user_u1") -> str:
    response = await client.post(
        "/api/v1/question-papers",
        json={"subject_id": str(SUBJECT.id), "exam_type": "SEE", "setter_id": setter},
        headers=bearer(tokens, "coe"),
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client: httpx.AsyncClient):
        response = await client.get("/api/v1/health")
        assert response.status_code == 200


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_missing_token(self, client: httpx.AsyncClient):
        response = await client.get("/api/v1/question-papers/mine")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json()["code"] == "missing_token"

    @pytest.mark.asyncio
    async def test_bad_signature_is_anonymous(self, client: httpx.AsyncClient):
        forged = TokenService(_config=JwtConfig(secret="another-secret-of-sufficient-length"))
        token = forged.create_access_token("user_coe")

        response = await client.get(
            "/api/v1/question-papers",
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_caller(self, client: httpx.AsyncClient, tokens: TokenService):
        token = tokens.create_access_token("user_stranger", role=Role.COE)

        response = await client.get(
            "/api/v1/question-papers",
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.status_code == 403
        assert response.json()["code"] == "unknown_identity"

    @pytest.mark.asyncio
    async def test_role_claim_applies(self, client: httpx.AsyncClient, tokens: TokenService):
        # U1 is Staff in the directory but the token says COE
        token = tokens.create_access_token("user_u1", role=Role.COE)

        response = await client.get(
            "/api/v1/question-papers",
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_exam_types_are_public(self, client: httpx.AsyncClient):
        response = await client.get("/api/v1/question-papers/exam-types")

        assert response.status_code == 200
        assert response.json()["items"] == ["IA1", "IA2", "IA3", "SEE"]


class TestWorkflow:
    @pytest.mark.asyncio
    async def test_full_cycle(self, client: httpx.AsyncClient, tokens: TokenService):
        paper_id = await assign(client, tokens)
        base = f"/api/v1/question-papers/{paper_id}"

        r = await client.get("/api/v1/question-papers", headers=bearer(tokens, "coe"))
        listed = r.json()["items"][0]
        assert listed["subject_code"] == "CS602"
        assert listed["subject_name"] == "Compiler Design"
        assert listed["setter_name"] == "U1"

        r = await client.put(f"{base}/sections", json=SECTIONS, headers=bearer(tokens, "u1"))
        assert r.status_code == 200, r.text
        assert r.json()["status"] == "Draft"

        r = await client.post(f"{base}/submit", headers=bearer(tokens, "u1"))
        assert r.json()["status"] == "SubmittedToCOE"

        r = await client.post(
            f"{base}/scrutiny",
            json={"scrutiny_staff_id": "user_u2"},
            headers=bearer(tokens, "coe"),
        )
        assert r.json()["status"] == "UnderScrutiny"

        r = await client.get("/api/v1/question-papers/scrutiny", headers=bearer(tokens, "u2"))
        assert r.json()["total"] == 1

        edited = {"sections": [{**SECTIONS["sections"][0], "instructions": "Answer all."}]}
        r = await client.put(f"{base}/scrutiny/sections", json=edited, headers=bearer(tokens, "u2"))
        assert r.status_code == 200, r.text

        r = await client.post(
            f"{base}/scrutiny/submit", json={"note": "OK"}, headers=bearer(tokens, "u2")
        )
        assert r.json()["status"] == "SubmittedToCOEAfterScrutiny"

        r = await client.post(f"{base}/approve", headers=bearer(tokens, "coe"))
        assert r.status_code == 200, r.text
        assert r.json()["status"] == "ApprovedLocked"

        r = await client.get(base, headers=bearer(tokens, "u1"))
        body = r.json()
        assert body["is_locked"] is True
        assert body["sections"][0]["instructions"] == "Answer all."
        assert [h["action"] for h in body["history"]] == [
            "Assigned",
            "EditedBySetter",
            "SubmittedToCOE",
            "SentToScrutiny",
            "EditedByScrutiny",
            "SubmittedByScrutiny",
            "ApprovedLocked",
        ]

        r = await client.get("/api/v1/question-papers/locked", headers=bearer(tokens, "coe"))
        assert [p["id"] for p in r.json()["items"]] == [paper_id]


class TestErrorMapping:
    @pytest.mark.asyncio
    async def test_non_setter_edit_forbidden(
        self, client: httpx.AsyncClient, tokens: TokenService
    ):
        paper_id = await assign(client, tokens)

        r = await client.put(
            f"/api/v1/question-papers/{paper_id}/sections",
            json=SECTIONS,
            headers=bearer(tokens, "u3"),
        )
        assert r.status_code == 403
        assert r.json()["code"] == "access_denied"

    @pytest.mark.asyncio
    async def test_approve_draft_conflict(self, client: httpx.AsyncClient, tokens: TokenService):
        paper_id = await assign(client, tokens)
        base = f"/api/v1/question-papers/{paper_id}"
        await client.put(f"{base}/sections", json=SECTIONS, headers=bearer(tokens, "u1"))

        r = await client.post(f"{base}/approve", headers=bearer(tokens, "coe"))

        assert r.status_code == 409
        assert r.json() == {
            "code": "state_conflict",
            "message": r.json()["message"],
            "retryable": True,
        }

    @pytest.mark.asyncio
    async def test_duplicate_assignment(self, client: httpx.AsyncClient, tokens: TokenService):
        await assign(client, tokens)

        r = await client.post(
            "/api/v1/question-papers",
            json={
                "subject_id": str(SUBJECT.id),
                "exam_type": "SEE",
                "setter_id": str(STAFF["u1"].id),
            },
            headers=bearer(tokens, "coe"),
        )
        assert r.status_code == 409
        assert r.json()["code"] == "duplicate_assignment"

    @pytest.mark.asyncio
    async def test_unknown_exam_type(self, client: httpx.AsyncClient, tokens: TokenService):
        r = await client.post(
            "/api/v1/question-papers",
            json={"subject_id": str(SUBJECT.id), "exam_type": "MIDTERM", "setter_id": "user_u1"},
            headers=bearer(tokens, "coe"),
        )
        assert r.status_code == 422
        assert r.json()["field"] == "exam_type"

    @pytest.mark.asyncio
    async def test_send_back_requires_note(
        self, client: httpx.AsyncClient, tokens: TokenService
    ):
        paper_id = await assign(client, tokens)
        base = f"/api/v1/question-papers/{paper_id}"
        await client.post(f"{base}/submit", headers=bearer(tokens, "u1"))

        r = await client.post(f"{base}/send-back", json={"note": "  "}, headers=bearer(tokens, "coe"))

        assert r.status_code == 422
        assert r.json()["field"] == "note"

    @pytest.mark.asyncio
    async def test_fee_office_cannot_be_setter(
        self, client: httpx.AsyncClient, tokens: TokenService
    ):
        r = await client.post(
            "/api/v1/question-papers",
            json={"subject_id": str(SUBJECT.id), "exam_type": "SEE", "setter_id": "user_fee"},
            headers=bearer(tokens, "coe"),
        )
        assert r.status_code == 422
        assert r.json()["field"] == "setter_id"

    @pytest.mark.asyncio
    async def test_staff_cannot_assign(self, client: httpx.AsyncClient, tokens: TokenService):
        r = await client.post(
            "/api/v1/question-papers",
            json={"subject_id": str(SUBJECT.id), "exam_type": "SEE", "setter_id": "user_u1"},
            headers=bearer(tokens, "u1"),
        )
        assert r.status_code == 403

    @pytest.mark.asyncio
    async def test_missing_paper(self, client: httpx.AsyncClient, tokens: TokenService):
        r = await client.get(
            "/api/v1/question-papers/00000000-0000-0000-0000-000000000000",
            headers=bearer(tokens, "coe"),
        )
        assert r.status_code == 404
        assert r.json()["code"] == "not_found"

    @pytest.mark.asyncio
    async def test_delete(self, client: httpx.AsyncClient, tokens: TokenService):
        paper_id = await assign(client, tokens)

        r = await client.delete(f"/api/v1/question-papers/{paper_id}", headers=bearer(tokens, "coe"))
        assert r.status_code == 200
        assert r.json()["id"] == paper_id

        r = await client.get(f"/api/v1/question-papers/{paper_id}", headers=bearer(tokens, "coe"))
        assert r.status_code == 404
