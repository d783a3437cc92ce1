import os

# Settings are read when promptshare is first imported.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./promptshare-test.db"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["COOKIE_SECURE"] = "false"
os.environ["AUTO_CREATE_TABLES"] = "false"

from datetime import timedelta  # noqa: E402

import pytest  # noqa: E402
from faker import Faker  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from promptshare.data.database import Base, get_db, utcnow  # noqa: E402
from promptshare.main import app  # noqa: E402
from promptshare.models.database_models import Prompt, PromptVisibility, User, Vote  # noqa: E402
from promptshare.services.auth_services import create_access_token, hash_password  # noqa: E402
from promptshare.services.database.category_database_services import ensure_categories  # noqa: E402

fake = Faker()

TEST_PASSWORD = "Password123!"
# bcrypt is slow by design; hash once for every fixture user.
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """Async HTTP client for the API, backed by the per-test database."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def categories(db):
    return await ensure_categories(db, ["Marketing", "Education", "Software Development"])


@pytest.fixture
def make_user(db):
    async def _make_user(username=None, email=None):
        username = (username or fake.unique.user_name()[:32]).lower()
        user = User(
            username=username,
            email=email or f"{username}@example.com",
            hashed_password=TEST_PASSWORD_HASH,
        )
        db.add(user)
        await db.commit()
        return user

    return _make_user


@pytest.fixture
def make_prompt(db, categories):
    async def _make_prompt(author, category=None, **values):
        category = category or categories[0]
        prompt = Prompt(
            title=values.pop("title", fake.sentence(nb_words=5)[:128]),
            content=values.pop("content", fake.paragraph(nb_sentences=3)),
            visibility=values.pop("visibility", PromptVisibility.PUBLIC),
            author_id=author.id,
            category_id=category.id,
            **values,
        )
        db.add(prompt)
        await db.commit()
        return prompt

    return _make_prompt


@pytest.fixture
def add_votes(db):
    """Insert votes directly, `days_ago` days in the past, and keep counters in step."""
    async def _add_votes(prompt, voters, days_ago=0):
        created_at = utcnow() - timedelta(days=days_ago)
        for voter in voters:
            db.add(Vote(user_id=voter.id, prompt_id=prompt.id, created_at=created_at))
        prompt.vote_count += len(voters)
        await db.commit()

    return _add_votes


def auth_headers(user, **token_kwargs):
    token = create_access_token(data={"sub": user.username}, **token_kwargs)
    return {"Cookie": f"access_token={token}"}
