"""Post removal and the records that depend on a post."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import current_app

from circlefeed.core.constants import FIRESTORE_BATCH_LIMIT
from circlefeed.core.documents import chunked

if TYPE_CHECKING:
    from circlefeed.link.services import Links
    from circlefeed.note.services import Notes

    from .services import Visibility


class Cascade:
    """Deletes or detaches posts while keeping notes and links consistent."""

    def __init__(self, visibility: Visibility, notes: Notes, links: Links) -> None:
        self.visibility = visibility
        self.notes = notes
        self.links = links

    def delete_post(self, user: str, post_id: str) -> dict[str, int]:
        """Delete a post together with its links and notes.

        Dependents are committed in batches of at most ``FIRESTORE_BATCH_LIMIT``
        writes. The post delete rides in the last batch, so it never lands
        before its dependents.
        """
        self.visibility.is_author(user, post_id)

        link_refs = self.links.refs_by_target(post_id)
        note_refs = self.notes.refs_by_target(post_id)
        dependents = link_refs + note_refs

        # One slot in the last batch is kept for the post itself.
        chunks = list(chunked(dependents, FIRESTORE_BATCH_LIMIT - 1)) or [[]]
        for i, chunk in enumerate(chunks):
            batch = self.visibility.db.batch()
            for ref in chunk:
                batch.delete(ref)
            if i == len(chunks) - 1:
                self.visibility.delete(post_id, batch=batch)
            batch.commit()

        current_app.logger.info(
            f"Post {post_id} deleted with {len(link_refs)} link(s) "
            f"and {len(note_refs)} note(s) in {len(chunks)} batch(es)"
        )
        return {"links": len(link_refs), "notes": len(note_refs)}

    def detach_post(self, user: str, post_id: str, group_id: str) -> None:
        """Take a post out of one group. Notes and links stay."""
        self.visibility.is_author(user, post_id)
        self.visibility.remove_group(post_id, group_id)
