"""SQLAlchemy declarative base and model imports for Alembic."""
from tepi.db.session import Base  # noqa: F401
from tepi.models.profile import Profile  # noqa: F401
from tepi.models.community import Community  # noqa: F401
from tepi.models.post import Post  # noqa: F401
from tepi.models.comment import Comment  # noqa: F401
from tepi.models.engagement import Like  # noqa: F401
from tepi.models.marketplace import MarketplaceItem  # noqa: F401

__all__ = ["Base", "Profile", "Community", "Post", "Comment", "Like", "MarketplaceItem"]
