"""Pytest configuration and shared fixtures."""

import stat
import sys
import textwrap
from pathlib import Path

import pytest

from index_keyring.credentials import KeyringProvider

FAKE_AGENT_SOURCE = textwrap.dedent(
    """
    import json
    import os
    import sys

    store_path = os.environ["FAKE_KEYRING_STORE"]
    try:
        with open(store_path) as f:
            store = json.load(f)
    except FileNotFoundError:
        store = {}

    action, service, username = sys.argv[1:4]
    key = service + "|" + username

    if action == "get":
        if key not in store:
            sys.exit(1)
        print(store[key])
    elif action == "set":
        store[key] = sys.stdin.read()
    elif action == "del":
        if key not in store:
            sys.exit(1)
        del store[key]
    else:
        sys.exit(2)

    with open(store_path, "w") as f:
        json.dump(store, f)
    """
)


@pytest.fixture
def fake_agent_store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """JSON file backing the fake keyring agent (``service|username -> password``)."""
    store_path = tmp_path / "keyring-store.json"
    monkeypatch.setenv("FAKE_KEYRING_STORE", str(store_path))
    return store_path


@pytest.fixture
def fake_agent(tmp_path: Path, fake_agent_store: Path) -> str:
    """Executable stand-in for the ``keyring`` command line agent."""
    script = tmp_path / "fake-keyring"
    script.write_text(f"#!{sys.executable}\n{FAKE_AGENT_SOURCE}")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(script)


@pytest.fixture
def empty_provider() -> KeyringProvider:
    """Provider with no credentials available."""
    return KeyringProvider.empty()


@pytest.fixture
def index_config_file(tmp_path: Path) -> Path:
    """Settings file with two named indexes and an auth config in tmp_path."""
    config_path = tmp_path / "index-keyring.yaml"
    config_path.write_text(
        textwrap.dedent(
            f"""
            keyring_provider: subprocess
            auth_config_path: {tmp_path / "auth.yaml"}
            indexes:
              - name: internal
                url: https://pypi.example.com/simple
              - name: mirror
                url: https://mirror.example.com:8443/simple
            """
        )
    )
    return config_path
