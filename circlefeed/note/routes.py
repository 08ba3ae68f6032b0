"""Routes for the note blueprint."""

from flask import jsonify

from circlefeed.auth.decorators import current_user_id, login_required
from circlefeed.routing import Route, register
from circlefeed.utils import bind_form, get_concepts, request_fields

from . import bp
from .forms import NoteFilterForm, NoteForm


@login_required
def get_notes():
    """All notes, or the notes on one post with ``?post=``."""
    c = get_concepts()
    form = bind_form(NoteFilterForm, from_query=True)
    if form.post.data:
        return jsonify(c.notes.get_by_target(form.post.data))
    return jsonify(c.notes.get_all())


@login_required
def create_note():
    """Attach a note to one of the user's own posts."""
    c = get_concepts()
    form = bind_form(NoteForm)
    author = current_user_id()
    c.posts.is_author(author, form.targetPost.data)
    note = c.notes.create(author, form.note.data, form.targetPost.data)
    return jsonify(msg="Note successfully created!", note=note)


@login_required
def update_note(note_id):
    c = get_concepts()
    c.notes.is_author(current_user_id(), note_id)
    c.notes.update(note_id, request_fields())
    return jsonify(msg="Note successfully updated!")


@login_required
def delete_note(note_id):
    c = get_concepts()
    c.notes.is_author(current_user_id(), note_id)
    c.notes.delete(note_id)
    return jsonify(msg="Note deleted successfully!")


ROUTES = [
    Route("GET", "", get_notes),
    Route("POST", "", create_note),
    Route("PATCH", "/<string:note_id>", update_note),
    Route("DELETE", "/<string:note_id>", delete_note),
]

register(bp, ROUTES)
