"""
Shared fixtures: an in-memory store standing in for the SQL repositories,
a blob storage over a fake S3 client and an HTTP client for the app.
"""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient

from admin import repository as admin_repository
from auth import repository as auth_repository
from auth import security
from contact import repository as contact_repository
from core.storage import BlobStorage, get_storage
from faq import repository as faq_repository
from likes import repository as likes_repository
from main import app
from members import repository as members_repository
from news import repository as news_repository
from questions import repository as questions_repository
from slides import repository as slides_repository

DAY_MS = 24 * 60 * 60 * 1000


class FakeS3Client:
    def generate_presigned_url(self, operation: str, Params: dict, ExpiresIn: int) -> str:
        verb = "put" if operation == "put_object" else "get"
        return f"https://storage.test/{Params['Bucket']}/{Params['Key']}?op={verb}"


class FakeStore:
    """In-memory tables with the same call signatures as the repositories."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self.users: dict[int, dict[str, Any]] = {}
        self.admins: dict[int, dict[str, Any]] = {}
        self.members: dict[int, dict[str, Any]] = {}
        self.questions: dict[int, dict[str, Any]] = {}
        self.responses: dict[int, dict[str, Any]] = {}
        self.likes: list[dict[str, Any]] = []
        self.news: dict[int, dict[str, Any]] = {}
        self.slides: dict[int, dict[str, Any]] = {}
        self.faq: dict[int, dict[str, Any]] = {}
        self.contact: dict[int, dict[str, Any]] = {}

    def next_id(self) -> int:
        return next(self._ids)

    # seeding

    def add_user(self, *, name: str = "Test User", email: str | None = None, role: str | None = None) -> dict:
        user_id = self.next_id()
        row = {
            "id": user_id,
            "name": name,
            "email": email or f"user{user_id}@example.com",
            "is_active": True,
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
        self.users[user_id] = row
        if role:
            self.admins[user_id] = {"id": user_id, "user_id": user_id, "role": role, "granted_by": None, "granted_at": 0}
        return row

    def add_member(self, name: str, **fields: Any) -> dict:
        member_id = self.next_id()
        row = {
            "id": member_id,
            "name": name,
            "party": None,
            "position": None,
            "photo_url": None,
            "photo_id": None,
            "term_start": 0,
            "term_end": None,
            "is_active": True,
            **fields,
        }
        self.members[member_id] = row
        return row

    def add_question(self, member: dict, title: str, *, session_date: int, **fields: Any) -> dict:
        question_id = self.next_id()
        row = {
            "id": question_id,
            "title": title,
            "content": fields.pop("content", f"{title} の詳細"),
            "category": fields.pop("category", "教育"),
            "council_member_id": member["id"],
            "session_date": session_date,
            "session_number": None,
            "youtube_url": None,
            "document_url": None,
            "status": "pending",
            "created_at": None,
            **fields,
        }
        self.questions[question_id] = row
        return row

    def add_like(self, user_id: int, question_id: int) -> None:
        self.likes.append({"id": self.next_id(), "user_id": user_id, "question_id": question_id})

    def add_response(self, question_id: int, content: str = "回答") -> dict:
        response_id = self.next_id()
        row = {
            "id": response_id,
            "question_id": question_id,
            "content": content,
            "respondent_title": None,
            "department": None,
            "response_date": 0,
            "document_url": None,
        }
        self.responses[response_id] = row
        return row

    # auth

    async def get_user_by_id(self, user_id: int) -> dict | None:
        return self.users.get(user_id)

    async def get_user_by_email(self, email: str) -> dict | None:
        wanted = auth_repository.normalize_email(email)
        return next((u for u in self.users.values() if u["email"].lower() == wanted), None)

    async def get_admin_by_user_id(self, user_id: int) -> dict | None:
        return self.admins.get(user_id)

    # admin

    async def update_user(self, user_id: int, fields: dict) -> dict | None:
        row = self.users.get(user_id)
        if row is None:
            return None
        row.update(fields)
        return dict(row)

    async def delete_user(self, user_id: int) -> bool:
        if self.users.pop(user_id, None) is None:
            return False
        self.admins.pop(user_id, None)
        self.likes = [like for like in self.likes if like["user_id"] != user_id]
        self.news = {k: n for k, n in self.news.items() if n.get("author_id") != user_id}
        self.slides = {k: s for k, s in self.slides.items() if s.get("created_by") != user_id}
        self.faq = {k: f for k, f in self.faq.items() if f.get("created_by") != user_id}
        return True

    # members

    async def get_member(self, member_id: int) -> dict | None:
        return self.members.get(member_id)

    async def list_members(self, *, active_only: bool = False) -> list[dict]:
        rows = sorted(self.members.values(), key=lambda m: m["id"], reverse=True)
        return [m for m in rows if m["is_active"] or not active_only]

    async def like_counts_for_member(self, member_id: int) -> dict[int, int]:
        own = [q["id"] for q in self.questions.values() if q["council_member_id"] == member_id]
        return {qid: sum(1 for like in self.likes if like["question_id"] == qid) for qid in own}

    # questions

    def _ordered_questions(self, member_id: int | None) -> list[dict]:
        if member_id is not None:
            rows = [q for q in self.questions.values() if q["council_member_id"] == member_id]
            return sorted(rows, key=lambda q: q["id"], reverse=True)
        return sorted(self.questions.values(), key=lambda q: (q["session_date"], q["id"]), reverse=True)

    async def list_questions(self, *, member_id: int | None = None) -> list[dict]:
        return [dict(q) for q in self._ordered_questions(member_id)]

    async def page_questions(self, *, member_id: int | None = None, cursor: str | None = None, num_items: int) -> dict:
        after = questions_repository.decode_cursor(cursor)
        rows = self._ordered_questions(member_id)
        if after is not None:
            if member_id is not None:
                rows = [q for q in rows if q["id"] < after[1]]
            else:
                rows = [q for q in rows if (q["session_date"], q["id"]) < after]
        fetched = rows[: num_items + 1]
        page = [dict(q) for q in fetched[:num_items]]
        return {
            "rows": page,
            "is_done": len(fetched) <= num_items,
            "continue_cursor": questions_repository.encode_cursor(page[-1]) if page else (cursor or ""),
        }

    async def recent_questions(self, limit: int) -> list[dict]:
        return (await self.list_questions())[:limit]

    async def get_question(self, question_id: int) -> dict | None:
        row = self.questions.get(question_id)
        return dict(row) if row else None

    async def create_question(self, fields: dict) -> dict:
        member = self.members[fields["council_member_id"]]
        extra = {k: v for k, v in fields.items() if k not in ("council_member_id", "title", "session_date")}
        return dict(self.add_question(member, fields["title"], session_date=fields["session_date"], **extra))

    async def update_question(self, question_id: int, fields: dict) -> dict | None:
        row = self.questions.get(question_id)
        if row is None:
            return None
        row.update(fields)
        return dict(row)

    async def delete_question(self, question_id: int) -> bool:
        if self.questions.pop(question_id, None) is None:
            return False
        self.responses = {k: r for k, r in self.responses.items() if r["question_id"] != question_id}
        self.likes = [like for like in self.likes if like["question_id"] != question_id]
        return True

    async def list_responses(self, question_id: int) -> list[dict]:
        rows = [r for r in self.responses.values() if r["question_id"] == question_id]
        return sorted(rows, key=lambda r: r["id"])

    async def list_likes(self, question_id: int) -> list[dict]:
        return [like for like in self.likes if like["question_id"] == question_id]

    async def count_responses(self) -> int:
        return len(self.responses)

    # likes

    async def toggle_like(self, *, user_id: int, question_id: int) -> bool:
        mine = [like for like in self.likes if like["user_id"] == user_id and like["question_id"] == question_id]
        if mine:
            self.likes = [like for like in self.likes if like not in mine]
            return False
        self.add_like(user_id, question_id)
        return True

    async def count_likes(self, question_id: int) -> int:
        return len(await self.list_likes(question_id))

    async def is_liked(self, *, user_id: int, question_id: int) -> bool:
        return any(like["user_id"] == user_id and like["question_id"] == question_id for like in self.likes)

    # news

    async def list_news(self, *, published_only: bool, limit: int | None = None) -> list[dict]:
        rows = sorted(self.news.values(), key=lambda n: n["id"], reverse=True)
        rows = [n for n in rows if n["is_published"] or not published_only]
        return rows if limit is None else rows[:limit]

    async def get_news(self, news_id: int) -> dict | None:
        return self.news.get(news_id)

    async def create_news(self, fields: dict, *, author_id: int) -> dict:
        news_id = self.next_id()
        row = {"thumbnail_url": None, "thumbnail_id": None, **fields, "id": news_id, "author_id": author_id}
        self.news[news_id] = row
        return row

    async def update_news(self, news_id: int, fields: dict) -> dict | None:
        row = self.news.get(news_id)
        if row is None:
            return None
        row.update(fields)
        return row

    async def delete_news(self, news_id: int) -> bool:
        return self.news.pop(news_id, None) is not None

    # slides

    async def list_slides(self, *, active_only: bool) -> list[dict]:
        rows = sorted(self.slides.values(), key=lambda s: (s["order"], s["id"]))
        return [s for s in rows if s["is_active"] or not active_only]

    async def get_slide(self, slide_id: int) -> dict | None:
        return self.slides.get(slide_id)

    async def create_slide(self, fields: dict, *, created_by: int) -> dict:
        slide_id = self.next_id()
        row = {**fields, "id": slide_id, "created_by": created_by, "updated_by": None}
        self.slides[slide_id] = row
        return row

    async def update_slide(self, slide_id: int, fields: dict) -> dict | None:
        row = self.slides.get(slide_id)
        if row is None:
            return None
        row.update(fields)
        return row

    async def delete_slide(self, slide_id: int) -> bool:
        return self.slides.pop(slide_id, None) is not None

    # faq

    async def list_published(self) -> list[dict]:
        return [f for f in sorted(self.faq.values(), key=lambda f: f["id"]) if f["is_published"]]

    async def list_all(self) -> list[dict]:
        return sorted(self.faq.values(), key=lambda f: (f["created_at"], f["id"]), reverse=True)

    async def list_categories(self) -> list[str]:
        return list({f["category"] for f in self.faq.values()})

    async def create_item(self, fields: dict, *, created_by: int, created_at: int) -> dict:
        item_id = self.next_id()
        row = {**fields, "id": item_id, "created_by": created_by, "created_at": created_at, "updated_at": None}
        self.faq[item_id] = row
        return row

    async def update_item(self, item_id: int, fields: dict, *, updated_by: int, updated_at: int) -> dict | None:
        row = self.faq.get(item_id)
        if row is None:
            return None
        row.update(fields, updated_by=updated_by, updated_at=updated_at)
        return row

    async def delete_item(self, item_id: int) -> bool:
        return self.faq.pop(item_id, None) is not None

    # contact

    async def create_message(self, fields: dict, *, submitted_at: int) -> dict:
        message_id = self.next_id()
        row = {
            **fields,
            "id": message_id,
            "subject": fields.get("subject") or "",
            "status": "new",
            "response": None,
            "submitted_at": submitted_at,
            "updated_at": None,
        }
        self.contact[message_id] = row
        return row

    async def list_messages(self, *, status: str | None = None) -> list[dict]:
        rows = sorted(self.contact.values(), key=lambda c: c["id"], reverse=True)
        return [c for c in rows if status is None or c["status"] == status]

    async def update_status(self, message_id: int, *, status: str, response: str | None, updated_at: int) -> dict | None:
        row = self.contact.get(message_id)
        if row is None:
            return None
        row.update(status=status, response=response, updated_at=updated_at)
        return row

    def install(self, monkeypatch: pytest.MonkeyPatch) -> None:
        bindings = {
            auth_repository: ("get_user_by_id", "get_user_by_email", "get_admin_by_user_id"),
            admin_repository: ("update_user", "delete_user"),
            members_repository: ("get_member", "list_members", "like_counts_for_member"),
            questions_repository: (
                "list_questions",
                "page_questions",
                "recent_questions",
                "get_question",
                "create_question",
                "update_question",
                "delete_question",
                "list_responses",
                "list_likes",
                "count_responses",
            ),
            likes_repository: ("toggle_like", "count_likes", "is_liked"),
            news_repository: ("list_news", "get_news", "create_news", "update_news", "delete_news"),
            slides_repository: ("list_slides", "get_slide", "create_slide", "update_slide", "delete_slide"),
            faq_repository: ("list_published", "list_all", "list_categories", "create_item", "update_item", "delete_item"),
            contact_repository: ("create_message", "list_messages", "update_status"),
        }
        for module, names in bindings.items():
            for name in names:
                monkeypatch.setattr(module, name, getattr(self, name))


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch) -> FakeStore:
    fake = FakeStore()
    fake.install(monkeypatch)
    return fake


@pytest.fixture
def storage() -> BlobStorage:
    return BlobStorage(FakeS3Client(), bucket="test-bucket")


@pytest.fixture
def client(store: FakeStore, storage: BlobStorage):
    # No `with` block: the lifespan (and its DB pool) never starts.
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user: dict) -> dict[str, str]:
        token = security.build_access_token(user_id=user["id"], email=user["email"])
        return {"Authorization": f"Bearer {token}"}

    return _headers
