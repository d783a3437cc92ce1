# promptshare/scripts/seed_data.py
"""
Populate a development database with categories, demo users, prompts and votes.

Run with `python -m promptshare.scripts.seed_data`. Existing demo users are
reused, so the script can be run more than once; vote counters are always
recomputed from the vote table at the end.
"""
import asyncio
import random
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from promptshare.data.database import AsyncSessionLocal, init_db, utcnow
from promptshare.models.database_models.prompt import Prompt, PromptVisibility
from promptshare.models.database_models.vote import Vote
from promptshare.services.auth_services import hash_password
from promptshare.services.database.category_database_services import ensure_categories
from promptshare.services.database.user_database_services import create_user, get_user_by_username
from promptshare.services.database.vote_database_services import recompute_vote_counts

DEMO_PASSWORD = "Password123!"
DEMO_USERS = ["alice", "bob", "charlie", "dave", "eve"]
DEMO_VOTES = 25

DEMO_PROMPTS = [
    ("Generate a catchy slogan for a new coffee shop",
     "Generate 5 catchy slogans for a new coffee shop that specializes in artisanal, single-origin coffee. "
     "The target audience is young professionals who appreciate quality.",
     "Marketing", "alice"),
    ("Write a short blog post about the benefits of remote work",
     "Write a 300-word blog post about the top 3 benefits of remote work for employees. "
     "Use a friendly and engaging tone.",
     "Copywriting", "alice"),
    ("Explain recursion in simple terms",
     "Explain the concept of recursion in programming as if you were talking to a 10-year-old. "
     "Provide a simple example in Python.",
     "Software Development", "bob"),
    ("Create a 5-day lesson plan for learning basic Spanish",
     "Create a 5-day lesson plan for an absolute beginner learning Spanish. Each day should focus on a "
     "different topic (e.g., greetings, numbers, common phrases).",
     "Education", "alice"),
    ("Write a short story opening",
     "Write the opening paragraph of a mystery novel set in a foggy, coastal town. The story should start "
     "with the discovery of a strange object on the beach.",
     "Creative Writing", "bob"),
    ("Brainstorm ideas for a productivity app",
     "List 5 unique features for a new productivity app that helps users manage their time more "
     "effectively. For each feature, provide a brief description of how it works.",
     "Creative Writing", "charlie"),
    ("Generate a SQL query to find top customers",
     "Write a SQL query to find the top 5 customers who have spent the most money. Assume you have two "
     "tables: 'customers' (with 'id' and 'name') and 'orders' (with 'customer_id' and 'amount').",
     "Software Development", "dave"),
    ("Draft an email to a potential client",
     "Draft a professional email to a potential client introducing your freelance web development "
     "services. Highlight your key skills and include a call to action.",
     "Marketing", "eve"),
    ("Write a haiku about nature",
     "Write a haiku (5-7-5 syllables) about the beauty of a forest.",
     "Creative Writing", "eve"),
    ("Explain the difference between supervised and unsupervised learning",
     "Explain the key differences between supervised and unsupervised machine learning in simple terms. "
     "Provide an example of a real-world application for each.",
     "Education", "bob"),
]


async def seed():
    await init_db()

    async with AsyncSessionLocal() as db:
        categories = {category.name: category for category in await ensure_categories(db)}
        print(f"{len(categories)} categories ready.")

        users = {}
        for username in DEMO_USERS:
            user = await get_user_by_username(db, username)
            if user is None:
                user = await create_user(db, username, f"{username}@example.com", hash_password(DEMO_PASSWORD))
            users[username] = user
        print(f"{len(users)} users ready.")

        result = await db.execute(select(Prompt.title).where(Prompt.author_id.in_([u.id for u in users.values()])))
        existing_titles = set(result.scalars().all())

        now = utcnow()
        new_prompts = []
        for i, (title, content, category_name, author) in enumerate(DEMO_PROMPTS):
            if title in existing_titles:
                continue
            created_at = now - timedelta(days=i + 1)
            new_prompts.append(Prompt(
                title=title,
                content=content,
                category_id=categories[category_name].id,
                author_id=users[author].id,
                visibility=PromptVisibility.PUBLIC,
                created_at=created_at,
                updated_at=created_at,
            ))
        db.add_all(new_prompts)
        await db.commit()
        print(f"{len(new_prompts)} prompts created.")

        prompt_ids = (await db.execute(select(Prompt.id).where(Prompt.is_deleted == False))).scalars().all()  # noqa: E712
        pairs = [(user.id, prompt_id) for user in users.values() for prompt_id in prompt_ids]
        votes = 0
        for user_id, prompt_id in random.sample(pairs, min(DEMO_VOTES, len(pairs))):
            db.add(Vote(user_id=user_id, prompt_id=prompt_id, created_at=now - timedelta(days=random.randint(0, 14))))
            try:
                await db.commit()
                votes += 1
            except IntegrityError:
                await db.rollback()
        print(f"{votes} votes created.")

        updated = await recompute_vote_counts(db)
        print(f"Vote counts updated for {updated} prompts.")

    print("Seeding finished.")


if __name__ == "__main__":
    asyncio.run(seed())
