"""Tests for the deployment orchestrator state machine."""

import signal
from unittest.mock import MagicMock

import pytest

from pronto.api_client import ComposeClient
from pronto.cancellation import CancellationToken, cancel_on_interrupt
from pronto.constants import TOKEN_KEY
from pronto.databases import DATABASES
from pronto.exceptions import (
    CertificateWriteError,
    CredentialStoreError,
    DeploymentError,
    IdentityLookupError,
    OperationCancelled,
    ValidationError,
)
from pronto.models import OnboardingState
from pronto.names import deployment_name
from pronto.orchestrator import DeploymentOrchestrator
from tests.helpers import FakePrompter, make_response


def pikachu(database_type):
    return deployment_name(database_type, word="Pikachu")


@pytest.fixture
def orchestrator(store, client, prompter, tmp_path):
    return DeploymentOrchestrator(
        store=store,
        client=client,
        prompter=prompter,
        output_dir=tmp_path,
        name_factory=pikachu,
    )


class TestScenario:
    def test_first_run_end_to_end(self, orchestrator, store, events, tmp_path):
        result = orchestrator.run()

        assert result.deployment_name == "pikachu-mongodb"
        assert result.certificate_path == tmp_path / "pikachu-mongodb.crt"
        assert result.certificate_path.read_bytes() == b"ABC"
        assert result.cli_connection == "cli://x"
        assert result.direct_connection == "mongodb://y"
        assert result.database.name == "MongoDB"
        assert store.get(TOKEN_KEY) == "tok_abc"
        assert orchestrator.state is OnboardingState.DONE

    def test_token_is_persisted_before_any_network_call(self, store, client, events, tmp_path):
        class RecordingStore(type(store)):
            def set(self, key, value):
                events.append(f"store:{key}")
                super().set(key, value)

        orchestrator = DeploymentOrchestrator(
            store=RecordingStore(store.path),
            client=client,
            prompter=FakePrompter(events=events),
            output_dir=tmp_path,
            name_factory=pikachu,
        )
        orchestrator.run()

        assert events == [
            "request_token",
            "store:composeToken",
            "choose_database",
            "deploying:mongodb",
            "GET /user",
            "POST /deployments",
        ]

    def test_stored_token_skips_prompt(self, orchestrator, store, events, session):
        store.set(TOKEN_KEY, "tok_saved")

        orchestrator.run()

        assert "request_token" not in events
        headers = session.get.call_args[1]["headers"]
        assert headers["authorization"] == "Bearer tok_saved"

    def test_result_to_dict(self, orchestrator, tmp_path):
        data = orchestrator.run().to_dict()

        assert data == {
            "deployment_name": "pikachu-mongodb",
            "database": {"name": "MongoDB", "type": "mongodb"},
            "certificate_path": str(tmp_path / "pikachu-mongodb.crt"),
            "connection_strings": {"cli": "cli://x", "direct": "mongodb://y"},
        }


class TestOrdering:
    def test_account_id_feeds_deployment(self):
        client = MagicMock(spec=ComposeClient)
        client.fetch_account_id.return_value = "acct_1"
        orchestrator = DeploymentOrchestrator(
            store=MagicMock(), client=client, prompter=FakePrompter()
        )

        orchestrator.state = OnboardingState.SELECTING_DATABASE
        orchestrator.deploy("tok", DATABASES[0], "mew-mongodb")

        assert [c[0] for c in client.mock_calls] == ["fetch_account_id", "create_deployment"]
        client.create_deployment.assert_called_once_with(
            "tok", "acct_1", "mongodb", "mew-mongodb"
        )

    def test_identity_failure_stops_before_deployment(self, orchestrator, session, tmp_path):
        session.get.side_effect = None
        session.get.return_value = make_response(500, text="down")

        with pytest.raises(IdentityLookupError):
            orchestrator.run()

        session.post.assert_not_called()
        assert list(tmp_path.glob("*.crt")) == []
        assert orchestrator.state is OnboardingState.DEPLOYING

    def test_deployment_failure_writes_nothing(self, orchestrator, session, tmp_path):
        session.post.side_effect = None
        session.post.return_value = make_response(400, {"errors": {"name": ["taken"]}})

        with pytest.raises(DeploymentError):
            orchestrator.run()

        assert list(tmp_path.glob("*.crt")) == []

    def test_transitions_only_move_forward(self, orchestrator):
        orchestrator.state = OnboardingState.DEPLOYING

        with pytest.raises(RuntimeError):
            orchestrator.select_database()


class TestValidation:
    def test_empty_token_is_rejected_and_not_stored(self, store, client, tmp_path):
        orchestrator = DeploymentOrchestrator(
            store=store, client=client, prompter=FakePrompter(token="   "), output_dir=tmp_path
        )

        with pytest.raises(ValidationError):
            orchestrator.run()

        assert store.get(TOKEN_KEY) is None

    def test_unknown_database_is_rejected(self, store, client, session, tmp_path):
        orchestrator = DeploymentOrchestrator(
            store=store, client=client, prompter=FakePrompter(database="oracle"), output_dir=tmp_path
        )

        with pytest.raises(ValidationError) as exc_info:
            orchestrator.run()

        assert "oracle" in exc_info.value.message
        session.get.assert_not_called()

    def test_all_databases_offered(self, orchestrator, prompter):
        orchestrator.run()

        values = [choice.value for choice in prompter.offered]
        assert "mongodb" in values
        assert "postgresql" in values
        assert len(values) == len(set(values))

    def test_default_name_matches_pattern(self, store, client, tmp_path):
        orchestrator = DeploymentOrchestrator(
            store=store, client=client, prompter=FakePrompter(database="redis"), output_dir=tmp_path
        )

        result = orchestrator.run()

        word, _, database_type = result.deployment_name.partition("-")
        assert database_type == "redis"
        assert word.isalpha() and word == word.lower()


class TestFailures:
    def test_certificate_write_failure_after_deployment(self, orchestrator, session, tmp_path):
        (tmp_path / "pikachu-mongodb.crt").mkdir()

        with pytest.raises(CertificateWriteError) as exc_info:
            orchestrator.run()

        session.post.assert_called_once()
        assert exc_info.value.deployment_name == "pikachu-mongodb"
        assert "pikachu-mongodb" in exc_info.value.context

    def test_existing_certificate_is_overwritten(self, orchestrator, tmp_path):
        path = tmp_path / "pikachu-mongodb.crt"
        path.write_bytes(b"old certificate")

        orchestrator.run()

        assert path.read_bytes() == b"ABC"

    def test_unreadable_store_is_fatal(self, store, client, session, tmp_path):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("not json")
        orchestrator = DeploymentOrchestrator(
            store=store, client=client, prompter=FakePrompter(), output_dir=tmp_path
        )

        with pytest.raises(CredentialStoreError):
            orchestrator.run()

        session.get.assert_not_called()


class TestCancellation:
    def test_cancelled_token_stops_at_next_boundary(self, store, client, session, tmp_path):
        token = CancellationToken()

        class CancellingPrompter(FakePrompter):
            def choose_database(self, choices):
                token.cancel()
                return super().choose_database(choices)

        orchestrator = DeploymentOrchestrator(
            store=store,
            client=client,
            prompter=CancellingPrompter(),
            output_dir=tmp_path,
            cancel_token=token,
        )

        with pytest.raises(OperationCancelled) as exc_info:
            orchestrator.run()

        assert exc_info.value.state == OnboardingState.DEPLOYING.value
        session.get.assert_not_called()

    def test_cancel_between_api_calls(self, store, client, session, tmp_path):
        token = CancellationToken()
        original = session.get.side_effect

        def _get(url, **kwargs):
            token.cancel()
            return original(url, **kwargs)

        session.get.side_effect = _get
        orchestrator = DeploymentOrchestrator(
            store=store,
            client=client,
            prompter=FakePrompter(),
            output_dir=tmp_path,
            cancel_token=token,
        )

        with pytest.raises(OperationCancelled):
            orchestrator.run()

        session.post.assert_not_called()

    def test_ctrl_c_during_prompt_stops_at_boundary(self, store, client, session, tmp_path):
        token = CancellationToken()

        class InterruptedPrompter(FakePrompter):
            def choose_database(self, choices):
                signal.raise_signal(signal.SIGINT)
                return super().choose_database(choices)

        orchestrator = DeploymentOrchestrator(
            store=store,
            client=client,
            prompter=InterruptedPrompter(),
            output_dir=tmp_path,
            cancel_token=token,
        )

        with pytest.raises(OperationCancelled) as exc_info:
            with cancel_on_interrupt(token):
                orchestrator.run()

        assert token.cancelled
        assert exc_info.value.state == OnboardingState.SELECTING_DATABASE.value
        assert exc_info.value.context == "Stopped at selecting_database"
        session.get.assert_not_called()

    def test_interrupted_request_is_reported_as_cancelled(
        self, store, client, session, tmp_path
    ):
        token = CancellationToken()
        session.get.side_effect = KeyboardInterrupt
        orchestrator = DeploymentOrchestrator(
            store=store,
            client=client,
            prompter=FakePrompter(),
            output_dir=tmp_path,
            cancel_token=token,
        )

        with pytest.raises(OperationCancelled) as exc_info:
            orchestrator.run()

        assert token.cancelled
        assert exc_info.value.state == OnboardingState.DEPLOYING.value
        session.post.assert_not_called()
        assert list(tmp_path.glob("*.crt")) == []
