from typing import Callable

from loguru import logger

from frontdesk.config import AppConfig, StoreAdapter
from frontdesk.records.adapters.memory import InMemoryPatientStore
from frontdesk.records.adapters.sample_data import seed_sample_patients
from frontdesk.records.service import PatientService


def _build_memory(config: AppConfig) -> PatientService:
    return PatientService(InMemoryPatientStore(), clinic_timezone=config.clinic_timezone)


_BUILDERS: dict[StoreAdapter, Callable[[AppConfig], PatientService]] = {
    StoreAdapter.MEMORY: _build_memory,
}


async def build_patient_service(config: AppConfig) -> PatientService:
    """Build the patient service for the configured store, seeding demo data if asked."""
    adapter = config.store.adapter
    logger.info("Building patient service with store: {}", adapter.value)
    service = _BUILDERS[adapter](config)
    if config.store.seed_sample_data:
        await seed_sample_patients(service.store, service.now())
    return service
