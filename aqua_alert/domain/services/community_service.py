"""Forum search and education catalog filtering."""
from typing import Iterable, List

from ..models import EducationalResource, ForumPost


def search_posts(posts: Iterable[ForumPost], search: str = "", category: str = "all") -> List[ForumPost]:
    """Case-insensitive substring match on title or content, plus an optional category."""
    term = search.lower()
    return [
        post for post in posts
        if (term in post.title.lower() or term in post.content.lower())
        and (category == "all" or post.category == category)
    ]


def filter_resources(resources: Iterable[EducationalResource], category: str = "all") -> List[EducationalResource]:
    if category == "all":
        return list(resources)
    return [resource for resource in resources if resource.category == category]
