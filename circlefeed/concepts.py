"""Construction of the concept services for one application instance."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .friend.services import FriendGraph
from .group.services import Membership
from .link.services import Links
from .note.services import Notes
from .post.cascade import Cascade
from .post.services import Visibility
from .responses import Responses
from .user.services import UserDirectory

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


@dataclass
class Concepts:
    """Every service, built once and wired by constructor arguments."""

    users: UserDirectory
    groups: Membership
    posts: Visibility
    notes: Notes
    links: Links
    cascade: Cascade
    friends: FriendGraph
    responses: Responses


def build_concepts(db: Client) -> Concepts:
    """Build the services leaf first, passing each its collaborators."""
    users = UserDirectory(db)
    groups = Membership(db, users)
    posts = Visibility(db, groups)
    notes = Notes(db)
    links = Links(db)
    return Concepts(
        users=users,
        groups=groups,
        posts=posts,
        notes=notes,
        links=links,
        cascade=Cascade(posts, notes, links),
        friends=FriendGraph(db),
        responses=Responses(users, groups, links),
    )
