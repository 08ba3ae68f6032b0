"""Routes for the link blueprint."""

from flask import jsonify

from circlefeed.auth.decorators import current_user_id, login_required
from circlefeed.routing import Route, register
from circlefeed.utils import bind_form, get_concepts

from . import bp
from .forms import LinkFilterForm, LinkForm


@login_required
def get_links():
    """All links, or the links on one post with ``?post=``."""
    c = get_concepts()
    form = bind_form(LinkFilterForm, from_query=True)
    if form.post.data:
        return jsonify(c.links.get_by_target(form.post.data))
    return jsonify(c.links.get_all())


@login_required
def create_link():
    """Attach a link to an existing post."""
    c = get_concepts()
    form = bind_form(LinkForm)
    c.posts.check_post_exists(form.postId.data)
    link = c.links.create(
        current_user_id(),
        form.url.data,
        form.displayText.data,
        form.postId.data,
        paywall=form.paywall.data == "Y",
    )
    return jsonify(msg="Link successfully created!", link=link)


@login_required
def delete_link(link_id):
    c = get_concepts()
    c.links.is_author(current_user_id(), link_id)
    c.links.delete(link_id)
    return jsonify(msg="Link deleted successfully!")


ROUTES = [
    Route("GET", "", get_links),
    Route("POST", "", create_link),
    Route("DELETE", "/<string:link_id>", delete_link),
]

register(bp, ROUTES)
