"""Forms for the group blueprint."""

from wtforms import StringField
from wtforms.validators import DataRequired, Optional

from circlefeed.utils import ApiForm


class GroupForm(ApiForm):
    """Form for creating or deleting a group.

    An empty name is left to the service so it reports GroupNameEmpty.
    """

    name = StringField("Group Name", validators=[Optional()])


class RenameGroupForm(ApiForm):
    """Form for renaming a group."""

    name = StringField("Group Name", validators=[Optional()])
    changeTo = StringField("New Name", validators=[Optional()])


class MemberForm(ApiForm):
    """Form naming a member to add or remove."""

    member = StringField("Username", validators=[DataRequired()])
