from flask import current_app, flash, redirect, render_template, request, url_for

from cms import database
from cms.errors import RequestError
from cms.models import User
from cms.pages.forms import SetupForm

from . import setup_blueprint


@setup_blueprint.before_request
def redirect_if_setup_complete():
    if User.admin_account_exists():
        return redirect(url_for('pages.dashboard'))


# ------
# Routes
# ------

@setup_blueprint.route('/', methods=['GET', 'POST'])
def setup():
    """Create the administrator account."""
    form = SetupForm()

    if request.method == 'POST':
        if not form.validate_on_submit():
            raise RequestError(400, 'There were issues validating your input.',
                               template='setup/setup.html', form=form)

        admin_user = User(form.username.data, form.password.data, is_admin=True)
        database.session.add(admin_user)
        database.session.commit()
        current_app.logger.info(f'Created the administrator account: {admin_user.username}')
        flash('The administrator account has been created. Please log in!', 'success')
        return redirect(url_for('pages.dashboard'))

    return render_template('setup/setup.html', form=form)
