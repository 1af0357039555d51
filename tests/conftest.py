import pytest
from click.testing import CliRunner

from gendoc.models import Position
from gendoc.session import Session


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def messages() -> list[str]:
    """Collects every error and warning reported by the `session` fixture."""
    return []


@pytest.fixture()
def session(messages) -> Session:
    return Session(sink=messages.append)


@pytest.fixture()
def parse(session):
    """Parses markup into `session` as if it were line 1 of `filename`."""

    def _parse(text: str, filename: str = "doc.xml") -> Session:
        session.diagnostics.position = Position(filename, 1)
        session.parse(text)
        return session

    return _parse
