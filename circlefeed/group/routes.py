"""Routes for the group blueprint."""

from flask import jsonify

from circlefeed.auth.decorators import current_user_id, login_required
from circlefeed.routing import Route, register
from circlefeed.utils import bind_form, get_concepts

from . import bp
from .forms import GroupForm, MemberForm, RenameGroupForm
from .models import GroupQuery


@login_required
def get_groups():
    """List the groups the user administers, or one of them by name."""
    c = get_concepts()
    user = current_user_id()
    form = bind_form(GroupForm, from_query=True)
    if form.name.data:
        groups = c.groups.get_groups(GroupQuery(by_name=form.name.data, by_admin=user))
        return jsonify(c.responses.group(groups[0] if groups else None))
    groups = c.groups.get_groups(GroupQuery(by_admin=user))
    return jsonify(c.responses.groups(groups))


@login_required
def create_group():
    """Create a new group administered by the user."""
    c = get_concepts()
    form = bind_form(GroupForm)
    group = c.groups.create(current_user_id(), form.name.data or "")
    return jsonify(msg="Group successfully created!", group=c.responses.group(group))


@login_required
def edit_group_name():
    """Rename a group the user administers."""
    c = get_concepts()
    form = bind_form(RenameGroupForm)
    name, new_name = form.name.data or "", form.changeTo.data or ""
    if name:
        c.groups.get_group_by_name(name, admin=current_user_id())
    c.groups.edit_group_name(name, new_name)
    return jsonify(msg=f"Group name changed from '{name}' to '{new_name}'!")


@login_required
def delete_group():
    """Delete a group the user administers and detach it from its posts."""
    c = get_concepts()
    form = bind_form(GroupForm)
    group = c.groups.get_group_by_name(form.name.data or "", admin=current_user_id())
    c.posts.detach_group_everywhere(group["id"])
    c.groups.delete(group["id"])
    return jsonify(msg="Group deleted successfully!")


@login_required
def add_member(group_name):
    """Add a user to a group the current user administers."""
    c = get_concepts()
    form = bind_form(MemberForm)
    c.groups.get_group_by_name(group_name, admin=current_user_id())
    c.groups.add_member(group_name, form.member.data)
    return jsonify(msg="Member added successfully!")


@login_required
def delete_member(group_name):
    """Remove a user from a group.

    The admin may remove anyone; any other member may only remove themself.
    """
    c = get_concepts()
    form = bind_form(MemberForm)
    member = c.users.get_user_by_username(form.member.data)
    if member["id"] != current_user_id():
        c.groups.get_group_by_name(group_name, admin=current_user_id())
    c.groups.delete_member(group_name, form.member.data)
    return jsonify(msg="Member deleted successfully!")


ROUTES = [
    Route("GET", "", get_groups),
    Route("POST", "", create_group),
    Route("PATCH", "", edit_group_name),
    Route("DELETE", "", delete_group),
    Route("POST", "/members/<string:group_name>", add_member),
    Route("DELETE", "/members/<string:group_name>", delete_member),
]

register(bp, ROUTES)
