"""Fixture-backed mock transport."""

from .transport import FixtureRecordStream, MockResponsesTransport, load_fixture_catalog

__all__ = ["MockResponsesTransport", "FixtureRecordStream", "load_fixture_catalog"]
