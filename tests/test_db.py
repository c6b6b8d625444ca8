from coworking import config
from coworking.db import engine


def test_engine_uses_configured_url():
    assert engine.url.render_as_string(hide_password=False) == config.SQLALCHEMY_DATABASE_URL
