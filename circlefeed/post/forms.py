"""Forms for the post blueprint."""

from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, Optional

from circlefeed.utils import ApiForm


class PostForm(ApiForm):
    """Form for creating a post."""

    content = TextAreaField("Content", validators=[DataRequired()])
    group = StringField("Group", validators=[Optional()])
    backgroundColor = StringField("Background Color", validators=[Optional()])


class FeedForm(ApiForm):
    """Query string of the feed."""

    author = StringField("Author", validators=[Optional()])


class DeletePostForm(ApiForm):
    """Query string of a post delete. A group makes it a detach."""

    group = StringField("Group", validators=[Optional()])
