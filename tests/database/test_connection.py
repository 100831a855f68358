from src.conference_system.conference_system.database.bootstrap import _as_target
from src.conference_system.conference_system.database.connection import DatabaseConnection, DBConfig


def test_config_from_settings_dict():
    config = DBConfig.from_dict({"host": "db", "port": "3307", "user": "app", "database": "conference_db"})

    assert config == DBConfig(host="db", port=3307, user="app", password="", database="conference_db")


def test_bootstrap_target_fills_defaults():
    assert _as_target({"password": "x"}) == DBConfig("localhost", 3306, "root", "x", "conference_db")


def test_shared_factory_follows_config_changes():
    first = DatabaseConnection.get_instance(DBConfig("h", 3306, "u", "p", "a"))

    assert DatabaseConnection.get_instance(DBConfig("h", 3306, "u", "p", "a")) is first
    assert DatabaseConnection.get_instance(DBConfig("h", 3306, "u", "p", "b")).config.database == "b"
