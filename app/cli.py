import os
import click
from flask import current_app
from flask.cli import with_appcontext
from flask_migrate import upgrade as alembic_upgrade, stamp as alembic_stamp, migrate as alembic_migrate

from models import db
from models.category import Category
from models.user import Role, User

DEFAULT_CATEGORIES = (
    ("أبقار", "Cows", "🐄"),
    ("إبل", "Camels", "🐪"),
    ("طيور", "Birds", "🐦"),
    ("أغنام", "Sheep", "🐑"),
    ("أسماك", "Fish", "🐟"),
    ("مسالخ", "Slaughterhouse", "🔪"),
    ("تجارة المواشي", "Livestock Trading", "📈"),
)


def _assert_safe_for_upgrade():
    # Prevent accidental prod upgrades unless explicitly allowed
    env = (current_app.config.get("ENV") or "").lower()
    app_env = (os.getenv("APP_ENV") or "").lower()
    if app_env == "production" or env == "production":
        if (os.getenv("ALLOW_DB_MIGRATIONS") or "").lower() not in ("1", "true", "yes"):
            raise click.ClickException("Refusing to run DB migration in production without ALLOW_DB_MIGRATIONS=true")


@click.command("db-migrate-safe")
@click.option("-m", "--message", default="auto migration", help="Migration message")
@with_appcontext
def db_migrate_safe(message):
    """Generate a new migration script from current models."""
    alembic_migrate(message=message)
    click.echo("Migration script generated.")


@click.command("db-upgrade-safe")
@with_appcontext
def db_upgrade_safe():
    """Apply migrations to the configured database."""
    _assert_safe_for_upgrade()
    alembic_upgrade()
    click.echo("Database upgraded.")


@click.command("db-stamp-safe")
@click.option("--revision", default="head", help="Revision to stamp, default 'head'")
@with_appcontext
def db_stamp_safe(revision):
    """Mark the database at a given revision without running migrations."""
    _assert_safe_for_upgrade()
    alembic_stamp(revision)
    click.echo(f"Database stamped at {revision}.")


def seed_demo_data(admin_email, admin_phone, admin_password):
    """Create the admin account and default categories if they are missing."""
    created = {"admin": False, "categories": 0}
    if User.query.filter_by(email=admin_email).first() is None:
        from app.services.identity import hash_password
        db.session.add(User(
            full_name="System Administrator",
            email=admin_email,
            phone=admin_phone,
            password_hash=hash_password(admin_password),
            role=Role.ADMIN,
        ))
        created["admin"] = True
    existing = {name for (name,) in db.session.query(Category.name_en).all()}
    for name_ar, name_en, icon in DEFAULT_CATEGORIES:
        if name_en not in existing:
            db.session.add(Category(name_ar=name_ar, name_en=name_en, icon=icon))
            created["categories"] += 1
    db.session.commit()
    return created


@click.command("seed-demo")
@click.option("--admin-email", default="admin@arzaquna.com", show_default=True)
@click.option("--admin-phone", default="+201000000000", show_default=True)
@click.option("--admin-password", envvar="SEED_ADMIN_PASSWORD", default="admin123")
@with_appcontext
def seed_demo(admin_email, admin_phone, admin_password):
    """Seed an admin account and the default livestock categories."""
    created = seed_demo_data(admin_email, admin_phone, admin_password)
    click.echo(
        f"Admin {'created' if created['admin'] else 'already present'}; "
        f"{created['categories']} categories added."
    )


def register_cli(app):
    app.cli.add_command(db_migrate_safe)
    app.cli.add_command(db_upgrade_safe)
    app.cli.add_command(db_stamp_safe)
    app.cli.add_command(seed_demo)
