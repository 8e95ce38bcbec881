"""Seed demo users and comment threads through the service layer."""
import asyncio
import argparse
import random
import time
import uuid

from forum.database import engine, async_session, Base, commit
from forum.repositories import CommentRepository, UserRepository
from forum.schemas import CommentCreate, UserCreate
from forum.services import comment_service, user_service

PHRASES = ["Great point.", "I disagree.", "Source?", "This.", "Thanks for sharing!",
           "Could you expand on that?", "Same experience here.", "Interesting take."]

async def seed(small: bool = False):
    num_users = 5 if small else 50
    num_posts = 3 if small else 200
    comments_per_post = 5 if small else 30

    print(f"Seeding: {num_users} users, {num_posts} posts, ~{num_posts * comments_per_post} comments")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        users = UserRepository(session)
        comments = CommentRepository(session)

        user_ids = []
        for i in range(num_users):
            user_ids.append(await user_service.create_user(
                users,
                UserCreate(username=f"user_{i:04d}", password=f"password-{i}", is_moderator=i == 0),
            ))
        print(f"  Created {len(user_ids)} users (user_0000 is a moderator)")

        total_comments = 0
        for _ in range(num_posts):
            post_id = uuid.uuid4()
            thread: list[uuid.UUID] = []
            for _ in range(comments_per_post):
                # Roughly a third of comments start a new branch.
                parent_id = random.choice(thread) if thread and random.random() > 0.33 else None
                thread.append(await comment_service.create_comment(
                    comments,
                    post_id,
                    CommentCreate(
                        user_id=random.choice(user_ids),
                        content=random.choice(PHRASES),
                        parent_id=parent_id,
                    ),
                ))
            total_comments += len(thread)

        await commit(session)

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Users: {num_users}")
    print(f"  Posts: {num_posts}")
    print(f"  Comments: {total_comments}")


def main():
    parser = argparse.ArgumentParser(description="Seed the forum database")
    parser.add_argument("--small", action="store_true", help="Use a small dataset")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
