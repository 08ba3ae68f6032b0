"""Forms for the link blueprint."""

from wtforms import StringField
from wtforms.validators import URL, DataRequired, Optional

from circlefeed.utils import ApiForm


class LinkForm(ApiForm):
    """Form for attaching a link to a post."""

    url = StringField("URL", validators=[DataRequired(), URL()])
    displayText = StringField("Display Text", validators=[DataRequired()])
    postId = StringField("Post", validators=[DataRequired()])
    paywall = StringField("Paywall", validators=[Optional()])


class LinkFilterForm(ApiForm):
    post = StringField("Post", validators=[Optional()])
