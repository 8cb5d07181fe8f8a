"""Shared pytest fixtures for persist-models tests."""

from pathlib import Path

import pytest

from persist_models.core.parser_impl import Parser

MODELS_TEXT = """\
-- Users and their posts
User json sql=users
    ident Text
    password Text Maybe
    UniqueUser ident
    deriving Typeable

Email
    email Text maxlen=254
    user UserId Maybe default=NULL
    verkey Text Maybe
    UniqueEmail email

Post
    title Text
    tags [Text]
    author UserId
    Foreign User fkauthor author
"""


@pytest.fixture
def models_text() -> str:
    """Return a small models file covering every child kind."""
    return MODELS_TEXT


@pytest.fixture
def haskell_source(models_text: str) -> str:
    """Return a Haskell module embedding the models in a quasi-quoter."""
    return (
        "{-# LANGUAGE QuasiQuotes #-}\n"
        "module Model where\n"
        "\n"
        'share [mkPersist sqlSettings, mkMigrate "migrateAll"] [persistLowerCase|\n'
        f"{models_text}"
        "|]\n"
        "\n"
        "instance Show User\n"
    )


@pytest.fixture
def make_parser():
    """Return a factory building a Parser over a snippet."""

    def _make(text: str) -> Parser:
        return Parser(text)

    return _make


@pytest.fixture
def models_dir(tmp_path: Path, models_text: str, haskell_source: str) -> Path:
    """Create a project with a models file and a Haskell source file."""
    config = tmp_path / "config"
    config.mkdir()
    (config / "models").write_text(models_text, encoding="utf-8")

    src = tmp_path / "src"
    src.mkdir()
    (src / "Model.hs").write_text(haskell_source, encoding="utf-8")
    return tmp_path
