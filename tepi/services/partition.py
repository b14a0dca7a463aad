"""Map the current section to the slice of posts a feed shows."""
from dataclasses import dataclass

from sqlalchemy import and_
from sqlalchemy.sql.elements import ColumnElement

from tepi.models.post import Post

PUBLIC = "public"
ANONYMOUS = "anonymous"
COMMUNITY = "community"


@dataclass(frozen=True)
class Partition:
    section: str
    kind: str
    community_id: str | None = None
    suppress_authors: bool = False

    def where_clause(self) -> ColumnElement[bool]:
        if self.kind == COMMUNITY:
            return Post.community_id == self.community_id
        return and_(Post.visibility == self.kind, Post.community_id.is_(None))

    def hides_author(self, visibility: str | None) -> bool:
        """Anonymous posts never show their author, whichever section lists them."""
        return self.suppress_authors or visibility == ANONYMOUS

    def matches(self, visibility: str | None, community_id: str | None) -> bool:
        """In-memory twin of where_clause() for the static provider."""
        if self.kind == COMMUNITY:
            return community_id == self.community_id
        return visibility == self.kind and community_id is None


def resolve_partition(section: str | None) -> Partition:
    """Empty or missing section means the public feed; never raises."""
    section = (section or "").strip()
    if not section or section == PUBLIC:
        return Partition(section=PUBLIC, kind=PUBLIC)
    if section == ANONYMOUS:
        return Partition(section=ANONYMOUS, kind=ANONYMOUS, suppress_authors=True)
    return Partition(section=section, kind=COMMUNITY, community_id=section)
