"""Routes for the friend blueprint.

Users are named by username in paths; ids are resolved before calling
FriendGraph.
"""

from flask import jsonify

from circlefeed.auth.decorators import current_user_id, login_required
from circlefeed.routing import Route, register
from circlefeed.utils import get_concepts

from . import bp


def _user_id(username):
    return get_concepts().users.get_user_by_username(username)["id"]


@login_required
def get_friends():
    """Usernames of the user's friends."""
    c = get_concepts()
    return jsonify(c.users.ids_to_usernames(c.friends.get_friends(current_user_id())))


@login_required
def remove_friend(username):
    get_concepts().friends.remove_friend(current_user_id(), _user_id(username))
    return jsonify(msg="Unfriended!")


@login_required
def get_requests():
    """Pending requests, split into incoming and outgoing."""
    c = get_concepts()
    user = current_user_id()
    return jsonify(c.responses.friend_requests(user, c.friends.get_requests(user)))


@login_required
def send_friend_request(username):
    get_concepts().friends.send_request(current_user_id(), _user_id(username))
    return jsonify(msg="Sent request!")


@login_required
def remove_friend_request(username):
    get_concepts().friends.remove_request(current_user_id(), _user_id(username))
    return jsonify(msg="Removed request!")


@login_required
def accept_friend_request(username):
    get_concepts().friends.accept_request(_user_id(username), current_user_id())
    return jsonify(msg="Accepted request!")


@login_required
def reject_friend_request(username):
    get_concepts().friends.reject_request(_user_id(username), current_user_id())
    return jsonify(msg="Rejected request!")


ROUTES = [
    Route("GET", "/friends", get_friends),
    Route("DELETE", "/friends/<string:username>", remove_friend),
    Route("GET", "/friend/requests", get_requests),
    Route("POST", "/friend/requests/<string:username>", send_friend_request),
    Route("DELETE", "/friend/requests/<string:username>", remove_friend_request),
    Route("PUT", "/friend/accept/<string:username>", accept_friend_request),
    Route("PUT", "/friend/reject/<string:username>", reject_friend_request),
]

register(bp, ROUTES)
