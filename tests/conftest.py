"""Pytest configuration and fixtures."""

import io
from pathlib import Path
from typing import Callable

import pytest

from cli.config import Settings
from cli.menus import Shell
from cli.prompts import Prompter
from festplan.models.cocktails import Cocktail
from festplan.storage import sqlite_repo as repo

FEST_DATE = "2026-11-14"


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    """An empty database with the full schema."""
    path = str(tmp_path / "fest.sqlite")
    repo.init_database(path)
    return path


@pytest.fixture
def seeded_db(db_path: str) -> str:
    """Two cocktails, priced stock and a fest with Mojito selected."""
    repo.insert_cocktail(
        Cocktail(name="Mojito", ingredients={"rum": 0.04, "mint": 0.01}),
        db_path=db_path,
    )
    repo.insert_cocktail(
        Cocktail(name="Gin Tonic", ingredients={"gin": 0.04, "tonic": 0.16}),
        db_path=db_path,
    )
    repo.set_availability("rum", 1.0, db_path=db_path)
    repo.set_price("rum", 1500, db_path=db_path)
    repo.set_price("mint", 2000, db_path=db_path)
    repo.set_price("gin", 2500, db_path=db_path)

    repo.create_fest(FEST_DATE, db_path=db_path)
    repo.set_fest_cocktail(FEST_DATE, "Mojito", price=650, amount=30, db_path=db_path)
    return db_path


@pytest.fixture
def settings(seeded_db: str) -> Settings:
    return Settings(awaited=10, current=FEST_DATE, database=seeded_db)


@pytest.fixture
def run_shell(settings: Settings) -> Callable[[str], str]:
    """Feed a scripted session to the shell and return everything it printed."""

    def _run(script: str) -> str:
        stdout = io.StringIO()
        Shell(settings, Prompter(io.StringIO(script), stdout)).run()
        return stdout.getvalue()

    return _run
