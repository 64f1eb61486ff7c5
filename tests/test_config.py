import pytest

from minievm.config import ENV_TRACE, ENV_TRUNCATED_PUSH, VMConfig


def test_defaults():
    config = VMConfig()
    assert config.truncated_push == "skip"
    assert config.trace is False


def test_from_env():
    config = VMConfig.from_env({ENV_TRUNCATED_PUSH: "PAD", ENV_TRACE: "yes"})
    assert config.truncated_push == "pad"
    assert config.trace is True


def test_from_env_empty_mapping_uses_defaults():
    assert VMConfig.from_env({}) == VMConfig()


def test_from_env_reads_process_environment(monkeypatch):
    monkeypatch.setenv(ENV_TRACE, "1")
    monkeypatch.delenv(ENV_TRUNCATED_PUSH, raising=False)
    assert VMConfig.from_env().trace is True


@pytest.mark.parametrize(
    "environ",
    [
        {ENV_TRUNCATED_PUSH: "truncate"},
        {ENV_TRACE: "maybe"},
    ],
)
def test_from_env_rejects_bad_values(environ):
    with pytest.raises(ValueError):
        VMConfig.from_env(environ)


def test_unknown_policy_rejected():
    with pytest.raises(ValueError):
        VMConfig(truncated_push="wrap")
