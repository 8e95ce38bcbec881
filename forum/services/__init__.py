# Services package.
#
# Each module exposes async functions holding the business rules for one
# aggregate:
#
#   user_service     — identity, password hashing, moderator flag, sub membership
#   comment_service  — threaded comments on posts
#
# Service functions take a store (see ``forum.repositories.base``) as their
# first argument rather than a session, so they run unchanged against any
# store implementation.
