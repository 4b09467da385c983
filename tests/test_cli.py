from models.category import Category
from models.user import Role, User
from app.services.identity import verify_password


def test_seed_demo_is_idempotent(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['seed-demo'])
    assert result.exit_code == 0, result.output
    assert 'Admin created; 7 categories added.' in result.output

    admin = User.query.filter_by(email='admin@arzaquna.com').one()
    assert admin.role is Role.ADMIN
    assert verify_password(admin, 'admin123')
    assert {c.name_en for c in Category.query} >= {'Cows', 'Camels', 'Sheep', 'Livestock Trading'}

    again = runner.invoke(args=['seed-demo'])
    assert again.exit_code == 0
    assert 'Admin already present; 0 categories added.' in again.output
    assert Category.query.count() == 7
    assert User.query.count() == 1


def test_upgrade_refused_in_production(app, monkeypatch):
    monkeypatch.setenv('APP_ENV', 'production')
    monkeypatch.delenv('ALLOW_DB_MIGRATIONS', raising=False)
    result = app.test_cli_runner().invoke(args=['db-upgrade-safe'])
    assert result.exit_code != 0
    assert 'Refusing to run DB migration in production' in result.output
