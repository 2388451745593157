"""Administrative commands (``flask <command>``)."""
import click
from flask import current_app

from auth.identity import SignedTokenVerifier
from auth.quota import get_quota_ledger
from domain.models import db
from domain.policies import TIERS


def register_commands(app):

    @app.cli.command("init-db")
    def init_db():
        """Create missing tables (development; production uses `flask db upgrade`)."""
        db.create_all()
        click.echo("tables created")

    @app.cli.command("set-tier")
    @click.argument("user_id")
    @click.argument("tier", type=click.Choice(TIERS))
    def set_tier(user_id, tier):
        """Manually upgrade/downgrade a user. Payments are handled out of band."""
        state = get_quota_ledger().set_tier(user_id, tier)
        click.echo(f"{state.user_id}: tier={state.tier}")

    @app.cli.command("issue-token")
    @click.argument("user_id")
    def issue_token(user_id):
        """Mint a signed bearer token (signed-token identity mode only)."""
        verifier = current_app.extensions["identity_verifier"]
        if not isinstance(verifier, SignedTokenVerifier):
            raise click.ClickException("AUTH_VERIFY_URL is set; tokens come from the identity service")
        click.echo(verifier.issue(user_id))
