# Persistence gateway.
#
# ``base`` declares the store operations the services depend on as
# Protocols; the other modules implement them on an AsyncSession:
#
#   user_repository     — UserStore over the ``users`` and ``sub_memberships`` tables
#   comment_repository  — CommentStore over the ``comments`` table
#
# Repositories flush but never commit; the transaction boundary belongs to
# the ``get_db`` dependency in the router layer.
from forum.repositories.base import CommentStore, UserStore
from forum.repositories.comment_repository import CommentRepository
from forum.repositories.user_repository import UserRepository

__all__ = ["CommentRepository", "CommentStore", "UserRepository", "UserStore"]
