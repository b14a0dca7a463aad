from tepi.models.profile import Profile
from tepi.models.community import Community
from tepi.models.post import Post
from tepi.models.comment import Comment
from tepi.models.engagement import Like
from tepi.models.marketplace import MarketplaceItem

__all__ = ["Profile", "Community", "Post", "Comment", "Like", "MarketplaceItem"]
