"""Routes for the post blueprint."""

from flask import jsonify

from circlefeed.auth.decorators import current_user_id, login_required
from circlefeed.routing import Route, register
from circlefeed.utils import bind_form, get_concepts, request_fields

from . import bp
from .feed import visible_posts
from .forms import DeletePostForm, FeedForm, PostForm


@login_required
def get_posts():
    """Posts the user wrote or can see through a group, newest first."""
    c = get_concepts()
    form = bind_form(FeedForm, from_query=True)
    author = None
    if form.author.data:
        author = c.users.get_user_by_username(form.author.data)["id"]
    posts = visible_posts(c.groups, c.posts, current_user_id(), author=author)
    return jsonify(c.responses.posts(posts))


@login_required
def create_post():
    """Create a post in one named group, or in every group the user runs."""
    c = get_concepts()
    form = bind_form(PostForm)
    options = {}
    if form.backgroundColor.data:
        options["backgroundColor"] = form.backgroundColor.data
    post = c.posts.create(
        current_user_id(), form.content.data, form.group.data or None, options
    )
    return jsonify(msg="Post successfully created!", post=c.responses.post(post))


@login_required
def update_post(post_id):
    """Update the content or options of the user's own post."""
    c = get_concepts()
    c.posts.is_author(current_user_id(), post_id)
    c.posts.update(post_id, request_fields())
    return jsonify(msg="Post successfully updated!")


@login_required
def publish_post(post_id, group_name):
    """Publish a post to a group the user administers."""
    c = get_concepts()
    group = c.groups.get_group_by_name(group_name)
    c.groups.is_admin(current_user_id(), group["id"])
    c.posts.publish_to(post_id, group["id"])
    return jsonify(msg=f"Post published to {group['name']}!")


@login_required
def delete_post(post_id):
    """Delete a post, or with ``?group=`` only take it out of that group."""
    c = get_concepts()
    user = current_user_id()
    form = bind_form(DeletePostForm)
    if form.group.data:
        c.posts.is_author(user, post_id)
        group = c.groups.get_group_by_name(form.group.data)
        c.groups.is_admin(user, group["id"])
        c.cascade.detach_post(user, post_id, group["id"])
        return jsonify(msg=f"Post removed from {group['name']}!")

    c.cascade.delete_post(user, post_id)
    return jsonify(msg="Post deleted successfully!")


ROUTES = [
    Route("GET", "", get_posts),
    Route("POST", "", create_post),
    Route("PATCH", "/<string:post_id>", update_post),
    Route("PATCH", "/<string:post_id>/publish/<string:group_name>", publish_post),
    Route("DELETE", "/<string:post_id>", delete_post),
]

register(bp, ROUTES)
