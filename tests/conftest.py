# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Shared entities and fixtures: an in-memory SQLite database with users and posts."""

from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# ---------------------------------------------------------------------------
# Test entities
# ---------------------------------------------------------------------------


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    role: Mapped[str] = mapped_column(String(50), default="user")
    age: Mapped[int] = mapped_column(default=25)
    active: Mapped[bool] = mapped_column(default=True)
    email: Mapped[str | None] = mapped_column(String(200), nullable=True, default=None)
    created_at: Mapped[datetime] = mapped_column(DateTime)

    posts: Mapped[list[Post]] = relationship(back_populates="author")


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    published: Mapped[bool] = mapped_column(default=False)
    author_id: Mapped[int] = mapped_column(ForeignKey("users.id"))

    author: Mapped[User] = relationship(back_populates="posts")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
async def seeded_session(session: AsyncSession) -> AsyncSession:
    """Four users; Alice has two posts (one published), Bob one, Charlie and Diana none."""
    alice = User(
        id=1, name="Alice", role="admin", age=30, active=True,
        email="alice@example.com", created_at=datetime(2024, 5, 1, 9, 30),
    )
    bob = User(
        id=2, name="Bob", role="user", age=25, active=True,
        email=None, created_at=datetime(2024, 5, 1, 10, 5),
    )
    charlie = User(
        id=3, name="Charlie", role="admin", age=40, active=False,
        email="charlie@example.com", created_at=datetime(2024, 5, 1, 11, 45),
    )
    diana = User(
        id=4, name="Diana", role="user", age=35, active=False,
        email=None, created_at=datetime(2024, 5, 2, 8, 0),
    )
    session.add_all([alice, bob, charlie, diana])
    session.add_all(
        [
            Post(id=1, title="Intro to SQL", published=True, author=alice),
            Post(id=2, title="Advanced SQL", published=False, author=alice),
            Post(id=3, title="Cooking at home", published=True, author=bob),
        ]
    )
    await session.flush()
    return session
