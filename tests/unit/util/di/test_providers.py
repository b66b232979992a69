"""Tests for provider selection and test container assembly."""

import pytest

from polyvote.domain.repository import VoteRepository
from polyvote.domain.service import RecordingVoteNotifier, VoteNotifier, VoteService
from polyvote.persistence.repository.inmemory import InMemoryVoteRepository
from polyvote.util.di import (
    NotificationProvider,
    PersistenceProvider,
    ProdConfigProvider,
    ProdNotificationProvider,
    ProdPersistenceProvider,
    get_provider,
)
from polyvote.util.di.base import ProviderBase
from polyvote.util.error import DependencyInjectionError
from tests.di import (
    MockNotificationProvider,
    MockPersistenceProvider,
    build_test_container,
)
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestGetProvider:
    def test_concrete_provider_is_returned_as_is(self):
        assert get_provider(ProdConfigProvider) is ProdConfigProvider

    def test_selects_production_implementation(self):
        assert get_provider(PersistenceProvider) is ProdPersistenceProvider
        assert get_provider(NotificationProvider) is ProdNotificationProvider

    def test_selects_mock_implementation(self):
        assert (
            get_provider(PersistenceProvider, use_mock=True)
            is MockPersistenceProvider
        )
        assert (
            get_provider(NotificationProvider, use_mock=True)
            is MockNotificationProvider
        )

    def test_missing_implementation_raises(self):
        class LonelyProvider(ProviderBase):
            __mock_component__ = "lonely"

        class ProdLonelyProvider(LonelyProvider):
            __is_mock__ = False

        with pytest.raises(DependencyInjectionError, match="No mock implementation"):
            get_provider(LonelyProvider, use_mock=True)


class TestBuildTestContainer:
    def test_unknown_component_is_rejected(self):
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"search"})  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_unit_env_wires_in_memory_doubles(self, unit_env):
        repo = await unit_env.get(VoteRepository)
        notifier = await unit_env.get(VoteNotifier)
        service = await unit_env.get(VoteService)

        assert isinstance(repo, InMemoryVoteRepository)
        assert isinstance(notifier, RecordingVoteNotifier)
        assert service.vote_repository is repo
        assert service.notifier is notifier
