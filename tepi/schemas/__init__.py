from tepi.schemas.profile import ProfileSummary
from tepi.schemas.comment import CommentCreate, CommentEntry
from tepi.schemas.post import FeedCounts, FeedItem, LikeEntry, PostCreate, PostFile
from tepi.schemas.feed import EmptyState, FeedResponse
from tepi.schemas.marketplace import MarketplaceItemResponse, MarketplaceListResponse
