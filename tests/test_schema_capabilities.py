import asyncio

import pytest
from sqlalchemy import text

from roster.core.container import ApplicationContainer
from roster.infrastructure.database import SchemaCapabilityDetector
from roster.modules.accounts import AccountColumnSet, SchemaCapabilities


@pytest.mark.asyncio
async def test_latest_schema_supports_everything(container):
    capabilities = await container.schema_detector.detect()
    assert capabilities == SchemaCapabilities(supports_federated_id=True, supports_avatar=True)
    assert capabilities.column_set is AccountColumnSet.FULL


@pytest.mark.asyncio
async def test_first_revision_has_no_optional_columns(legacy_container):
    capabilities = await legacy_container.schema_detector.detect()
    assert capabilities == SchemaCapabilities.none()
    assert capabilities.column_set is AccountColumnSet.BASIC


@pytest.mark.asyncio
async def test_each_optional_column_is_detected_on_its_own(legacy_container):
    async with legacy_container.engine.begin() as conn:
        await conn.execute(text("ALTER TABLE accounts ADD COLUMN federated_subject_id VARCHAR(255)"))

    capabilities = await SchemaCapabilityDetector(legacy_container.engine).detect()
    assert capabilities.supports_federated_id
    assert not capabilities.supports_avatar
    assert capabilities.column_set is AccountColumnSet.WITH_SUBJECT


@pytest.mark.asyncio
async def test_probe_failure_disables_optional_columns(settings):
    # No tables were created in this database.
    container = ApplicationContainer(settings=settings)
    try:
        capabilities = await container.schema_detector.detect()
    finally:
        await container.dispose()
    assert capabilities == SchemaCapabilities.none()


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_probe(container):
    detector = SchemaCapabilityDetector(container.engine)
    calls = 0

    async def probe():
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        return SchemaCapabilities(supports_federated_id=True, supports_avatar=False)

    detector._probe = probe
    results = await asyncio.gather(*(detector.detect() for _ in range(5)))

    assert calls == 1
    assert all(result is results[0] for result in results)
    assert detector.detected


@pytest.mark.asyncio
async def test_result_is_cached(legacy_container):
    detector = legacy_container.schema_detector
    first = await detector.detect()
    async with legacy_container.engine.begin() as conn:
        await conn.execute(text("ALTER TABLE accounts ADD COLUMN avatar_url VARCHAR(1024)"))
    assert await detector.detect() is first
    assert not first.supports_avatar
