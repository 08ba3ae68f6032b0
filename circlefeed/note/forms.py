"""Forms for the note blueprint."""

from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, Optional

from circlefeed.utils import ApiForm


class NoteForm(ApiForm):
    """Form for attaching a note to a post."""

    note = TextAreaField("Note", validators=[DataRequired()])
    targetPost = StringField("Post", validators=[DataRequired()])


class NoteFilterForm(ApiForm):
    post = StringField("Post", validators=[Optional()])
