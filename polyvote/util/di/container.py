"""Dependency injection container."""

import logging

from dishka import AsyncContainer, make_async_container

from polyvote.config import Settings
from polyvote.util.di import PROVIDERS, get_provider
from polyvote.util.logging import setup_logging
from polyvote.util.observability import configure_logfire

logger = logging.getLogger(__name__)


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Configures logging and Logfire, then wires every production provider.
    Settings are loaded from environment variables automatically.

    Returns:
        Configured DI container with production providers

    Usage:
        container = create_container()
        async with container() as request:
            service = await request.get(VoteService)
            await service.up_vote(user, idea)
        await container.close()
    """
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    logger.info(f"Container created with {len(provider_instances)} providers")
    return make_async_container(*provider_instances)
