"""
Unit tests for Config environment loading, presets and the active config
"""

import pytest

from routebind.config import Config, DevConfig, ProdConfig, get_config, set_config


def test_env_class_structure():
    """Test that Env class is properly nested"""
    assert Config.Env.file == ".env"
    assert Config.Env.auto_load is True
    assert Config.Env.override is True


def test_preset_env_files():
    """Test DevConfig and ProdConfig have their own Env configuration"""
    assert DevConfig.Env.file == ".env.dev"
    assert ProdConfig.Env.file == ".env.prod"
    assert ProdConfig.Env.override is False  # Important for production


def test_binding_defaults():
    """Test default binding settings"""
    assert Config.SCOPED_BINDINGS is False
    assert Config.ALLOW_TRASHED_BINDINGS is False
    assert Config.DEFAULT_ROUTE_KEY == "id"
    assert Config.NOT_FOUND_STATUS == 404
    assert ProdConfig.SCOPED_BINDINGS is True
    assert DevConfig.LOG_LEVEL == "DEBUG"


def test_internal_class_cannot_be_overridden():
    """Test that Config.Internal class cannot be overridden in child classes"""
    with pytest.raises(TypeError, match="Cannot override Config.Internal"):
        class BadConfig(Config):
            class Internal:
                BINDING_METHOD = "find"


def test_internal_class_structure():
    """Test that Internal class names the lookup methods"""
    assert Config.Internal.BINDING_METHOD == "resolve_route_binding"
    assert Config.Internal.CHILD_BINDING_METHOD == "resolve_child_route_binding"
    assert Config.Internal.SOFT_DELETABLE_BINDING_METHOD == "resolve_soft_deletable_route_binding"
    assert Config.Internal.SOFT_DELETABLE_CHILD_BINDING_METHOD == "resolve_soft_deletable_child_route_binding"


def test_load_env_with_prefix(monkeypatch):
    """Test that only ROUTEBIND_* variables are loaded, with type conversion"""
    monkeypatch.setenv("ROUTEBIND_SCOPED_BINDINGS", "true")
    monkeypatch.setenv("ROUTEBIND_NOT_FOUND_STATUS", "410")
    monkeypatch.setenv("ROUTEBIND_DEFAULT_ROUTE_KEY", "uuid")
    monkeypatch.setenv("ROUTEBIND_TRUSTED_HOSTS", "a.com,b.com")
    monkeypatch.setenv("ROUTEBIND_DATABASE_URL", "null")
    monkeypatch.setenv("OTHER_VAR", "should_be_ignored")

    class TestConfig(Config):
        class Env:
            file = "does-not-exist.env"
            auto_load = True
            override = True

    TestConfig.load_from_env()

    assert TestConfig.SCOPED_BINDINGS is True
    assert TestConfig.NOT_FOUND_STATUS == 410
    assert TestConfig.DEFAULT_ROUTE_KEY == "uuid"
    assert TestConfig.TRUSTED_HOSTS == ["a.com", "b.com"]
    assert TestConfig.DATABASE_URL is None
    assert not hasattr(TestConfig, "OTHER_VAR")
    assert Config.SCOPED_BINDINGS is False


def test_invalid_log_level_ignored(monkeypatch):
    """Test an invalid LOG_LEVEL keeps the default"""
    monkeypatch.setenv("ROUTEBIND_LOG_LEVEL", "LOUD")

    class TestConfig(Config):
        pass

    TestConfig.load_from_env("does-not-exist.env")
    assert TestConfig.LOG_LEVEL == "INFO"

    monkeypatch.setenv("ROUTEBIND_LOG_LEVEL", "debug")
    TestConfig.load_from_env("does-not-exist.env")
    assert TestConfig.LOG_LEVEL == "DEBUG"


def test_internal_names_not_loaded(monkeypatch):
    """Test ROUTEBIND_Internal can't replace the Internal block"""
    monkeypatch.setenv("ROUTEBIND_Internal", "oops")

    class TestConfig(Config):
        pass

    TestConfig.load_from_env("does-not-exist.env")
    assert TestConfig.Internal is Config.Internal


def test_load_env_from_file(tmp_path, monkeypatch):
    """Test loading from .env file via python-dotenv"""
    env_file = tmp_path / ".env.test"
    env_file.write_text(
        "ROUTEBIND_ALLOW_TRASHED_BINDINGS=yes\n"
        "ROUTEBIND_DEFAULT_ROUTE_KEY=slug\n"
    )
    # Registered so teardown removes what load_dotenv() sets
    monkeypatch.setenv("ROUTEBIND_ALLOW_TRASHED_BINDINGS", "")
    monkeypatch.setenv("ROUTEBIND_DEFAULT_ROUTE_KEY", "")

    class TestConfig(Config):
        pass

    TestConfig.load_from_env(str(env_file))

    assert TestConfig.ALLOW_TRASHED_BINDINGS is True
    assert TestConfig.DEFAULT_ROUTE_KEY == "slug"


def test_validate():
    """Test validate() accepts defaults and rejects bad values"""
    assert Config.validate() is True

    class BadStatus(Config):
        NOT_FOUND_STATUS = 42

    with pytest.raises(ValueError, match="NOT_FOUND_STATUS"):
        BadStatus.validate()

    class BadKey(Config):
        DEFAULT_ROUTE_KEY = ""

    with pytest.raises(ValueError, match="DEFAULT_ROUTE_KEY"):
        BadKey.validate()


def test_set_config_returns_previous():
    """Test set_config() swaps the active config"""
    previous = set_config(ProdConfig)

    assert previous is Config
    assert get_config() is ProdConfig


def test_set_config_rejects_non_config():
    """Test set_config() only accepts Config subclasses"""
    with pytest.raises(TypeError):
        set_config(object)

    with pytest.raises(TypeError):
        set_config(Config())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
