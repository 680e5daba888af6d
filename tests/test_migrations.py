"""The initial migration builds the same indexes the models declare."""

import re
from pathlib import Path

from kpitracker.database import Base
from kpitracker.models import member, kpi, target, performance  # noqa: F401

MIGRATION = Path(__file__).parent.parent / "alembic" / "versions" / "3f9c2a71d0b4_kpi_tracker_schema.py"


def _model_indexes():
    return {ix.name: ix.unique for table in Base.metadata.tables.values() for ix in table.indexes}


def test_every_model_index_is_migrated():
    source = MIGRATION.read_text()
    created = set(re.findall(r"op\.create_index\('(\w+)'", source))
    assert created == set(_model_indexes())


def test_kpi_key_index_is_unique():
    assert _model_indexes()["ix_kpi_definitions_key"] is True
    source = MIGRATION.read_text()
    assert "op.create_index('ix_kpi_definitions_key', 'kpi_definitions', ['key'], unique=True)" in source
