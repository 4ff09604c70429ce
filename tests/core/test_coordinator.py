"""
Tests for core/coordinator.py - Session coordinator
"""
import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock

from rpp_copilot.core.coordinator import BUSY_MESSAGE, PlanCoordinator
from rpp_copilot.core.errors import CredentialMissing, ServiceError
from rpp_copilot.core.form import FormInput
from rpp_copilot.core.generation_client import GenerationClient
from rpp_copilot.storage.settings_store import InMemorySettingsStore, Settings


def make_coordinator(settings=None, client=None, default_api_key="default-key"):
    store = InMemorySettingsStore(settings or Settings())
    coordinator = PlanCoordinator(store, client=client, default_api_key=default_api_key)
    coordinator.load_settings()
    return coordinator


class TestCredentialResolution:
    """Test credential selection per settings mode"""

    def test_default_mode_uses_default_key(self):
        coordinator = make_coordinator()
        assert coordinator.resolve_credential() == "default-key"

    def test_default_mode_without_key(self):
        coordinator = make_coordinator(default_api_key="")
        with pytest.raises(CredentialMissing):
            coordinator.resolve_credential()

    def test_custom_mode_uses_custom_key(self):
        coordinator = make_coordinator(Settings(mode="custom", key=" my-key "))
        assert coordinator.resolve_credential() == "my-key"

    def test_custom_mode_empty_key(self):
        coordinator = make_coordinator(Settings(mode="custom", key=""))
        with pytest.raises(CredentialMissing):
            coordinator.resolve_credential()


class TestSubmit:
    """Test PlanCoordinator.submit"""

    @pytest.mark.asyncio
    async def test_successful_submit(self, sample_form, llm_factory):
        coordinator = make_coordinator(client=GenerationClient(llm_factory=llm_factory))

        outcome = await coordinator.submit(sample_form)

        assert outcome.ok
        assert coordinator.plan is outcome.plan
        assert coordinator.form == sample_form
        assert coordinator.error is None
        assert coordinator.busy is False

    @pytest.mark.asyncio
    async def test_custom_mode_empty_key_makes_no_call(self, sample_form, llm_factory, mock_llm):
        coordinator = make_coordinator(
            Settings(mode="custom", key=""),
            client=GenerationClient(llm_factory=llm_factory),
        )

        outcome = await coordinator.submit(sample_form)

        assert outcome.plan is None
        assert "API Key" in outcome.error
        assert llm_factory.call_count == 0
        assert mock_llm.ainvoke.call_count == 0
        assert coordinator.busy is False

    @pytest.mark.asyncio
    async def test_incomplete_form_makes_no_call(self, llm_factory):
        coordinator = make_coordinator(client=GenerationClient(llm_factory=llm_factory))

        outcome = await coordinator.submit(FormInput(subject="IPA"))

        assert outcome.error.startswith("Lengkapi isian berikut")
        assert llm_factory.call_count == 0

    @pytest.mark.asyncio
    async def test_error_clears_previous_plan(self, sample_form, llm_factory, mock_llm):
        coordinator = make_coordinator(client=GenerationClient(llm_factory=llm_factory))
        await coordinator.submit(sample_form)
        assert coordinator.plan is not None

        mock_llm.ainvoke = AsyncMock(side_effect=RuntimeError("boom"))
        outcome = await coordinator.submit(sample_form)

        assert outcome.plan is None
        assert coordinator.plan is None
        assert coordinator.error.startswith("Gagal menghasilkan RPP")

    @pytest.mark.asyncio
    async def test_stale_response_discarded(self, sample_form, sample_plan):
        first_started = asyncio.Event()
        release_first = asyncio.Event()
        calls = []

        async def generate(form, api_key):
            calls.append(form.topic_theme)
            if len(calls) == 1:
                first_started.set()
                await release_first.wait()
                raise ServiceError("Gagal menghasilkan RPP: late failure")
            return sample_plan

        client = MagicMock()
        client.generate = generate
        coordinator = make_coordinator(client=client)

        first = asyncio.create_task(coordinator.submit(sample_form))
        await first_started.wait()
        coordinator.reset()
        newer_form = sample_form.model_copy(update={"topic_theme": "Fotosintesis"})
        second = await coordinator.submit(newer_form)
        release_first.set()
        first_outcome = await first

        assert second.ok
        assert first_outcome.stale is True
        assert first_outcome.sequence < second.sequence
        assert coordinator.plan is sample_plan
        assert coordinator.form.topic_theme == "Fotosintesis"
        assert coordinator.error is None

    @pytest.mark.asyncio
    async def test_submit_rejected_while_busy(self, sample_form, sample_plan):
        started = asyncio.Event()
        release = asyncio.Event()
        calls = []

        async def generate(form, api_key):
            calls.append(form)
            started.set()
            await release.wait()
            return sample_plan

        client = MagicMock()
        client.generate = generate
        coordinator = make_coordinator(client=client)

        first = asyncio.create_task(coordinator.submit(sample_form))
        await started.wait()
        second = await coordinator.submit(sample_form)

        assert second.rejected is True
        assert second.error == BUSY_MESSAGE
        assert coordinator.busy is True
        assert coordinator.error is None

        release.set()
        assert (await first).ok
        assert len(calls) == 1
        assert coordinator.busy is False

    @pytest.mark.asyncio
    async def test_incomplete_form_does_not_advance_sequence(self, llm_factory):
        coordinator = make_coordinator(client=GenerationClient(llm_factory=llm_factory))

        outcome = await coordinator.submit(FormInput())

        assert coordinator.latest_sequence == 0
        assert outcome.sequence == 0
        assert coordinator.error == outcome.error
        assert coordinator.busy is False

    @pytest.mark.asyncio
    async def test_reset_discards_in_flight(self, sample_form, sample_plan):
        started = asyncio.Event()
        release = asyncio.Event()

        async def generate(form, api_key):
            started.set()
            await release.wait()
            return sample_plan

        client = MagicMock()
        client.generate = generate
        coordinator = make_coordinator(client=client)

        task = asyncio.create_task(coordinator.submit(sample_form))
        await started.wait()
        assert coordinator.busy is True

        coordinator.reset()
        release.set()
        outcome = await task

        assert outcome.stale is True
        assert coordinator.plan is None
        assert coordinator.busy is False


class TestSettings:
    """Test settings flow through the coordinator"""

    def test_save_settings_updates_state(self):
        coordinator = make_coordinator()
        result = coordinator.save_settings(Settings(mode="custom", key="abc"))

        assert result.success
        assert coordinator.settings.mode == "custom"
        assert coordinator.settings_store.load().key == "abc"

    def test_rejected_save_keeps_previous_settings(self):
        coordinator = make_coordinator()
        result = coordinator.save_settings(Settings(mode="custom", key=""))

        assert not result.success
        assert coordinator.settings.mode == "default"

    @pytest.mark.asyncio
    async def test_generation_never_mutates_settings(self, sample_form, llm_factory):
        coordinator = make_coordinator(client=GenerationClient(llm_factory=llm_factory))
        await coordinator.submit(sample_form)
        assert coordinator.settings_store.save_count == 0
