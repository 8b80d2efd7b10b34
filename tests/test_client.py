"""Tests for the client directory service and commands."""

import pytest

from khata.cli.main import cli
from khata.domain.errors import DependencyError, NotFoundError, ValidationError


class TestClientService:
    def test_create_and_get(self, client_service):
        client_id = client_service.create_client(
            "user-1", "  Acme  ", institution="Acme Ltd", email="ops@acme.test"
        )
        client = client_service.get_client(client_id)

        assert client.client_name == "Acme"
        assert client.institution == "Acme Ltd"
        assert client.email == "ops@acme.test"
        assert client.active is True
        assert client.user_id == "user-1"
        assert client.created_at is not None

    def test_name_required(self, client_service):
        with pytest.raises(ValidationError, match="name is required"):
            client_service.create_client(None, "   ")

    def test_unknown_field_rejected(self, client_service):
        with pytest.raises(ValidationError, match="Unknown client fields"):
            client_service.create_client(None, "Acme", fax="123")

    def test_list_sorted_and_active_filter(self, client_service):
        b = client_service.create_client(None, "Beta")
        client_service.create_client(None, "Alpha")
        client_service.set_active(b, False)

        assert [c.client_name for c in client_service.list_clients()] == ["Alpha", "Beta"]
        assert [c.client_name for c in client_service.list_clients(active_only=True)] == ["Alpha"]

    def test_update_only_given_fields(self, client_service, sample_client):
        client_service.update_client(sample_client.id, website=" https://rahim.test ")
        client = client_service.get_client(sample_client.id)

        assert client.website == "https://rahim.test"
        assert client.email == "rahim@example.com"
        assert client.client_name == "Rahim Traders"

    def test_update_missing_client(self, client_service):
        with pytest.raises(NotFoundError):
            client_service.update_client("missing", notes="x")

    def test_rename_does_not_touch_job_snapshot(self, client_service, job_service, sample_job):
        client_service.update_client(sample_job.client_id, client_name="Rahim & Sons")

        assert job_service.get_job(sample_job.id).client_name == "Rahim Traders"

    def test_delete_blocked_while_client_has_jobs(self, client_service, sample_job):
        with pytest.raises(DependencyError, match="1 job\\. Delete or reassign"):
            client_service.delete_client(sample_job.client_id)

    def test_delete_client_without_jobs(self, client_service, sample_client):
        client_service.delete_client(sample_client.id)
        assert client_service.get_client(sample_client.id) is None


class TestClientCommands:
    def test_add_and_list(self, cli_runner, temp_db):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "client", "add", "Acme", "--email", "a@b.test"]
        )
        assert result.exit_code == 0
        assert "Created client 'Acme'" in result.output

        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "client", "list"])
        assert result.exit_code == 0
        assert "Acme" in result.output

    def test_list_empty(self, cli_runner, temp_db):
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "client", "list"])
        assert result.exit_code == 0
        assert "No clients found" in result.output

    def test_show_by_name(self, cli_runner, temp_db, sample_job):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "client", "show", "Rahim Traders"]
        )
        assert result.exit_code == 0
        assert "Jobs: 1" in result.output
        assert "billed ৳1,000" in result.output

    def test_deactivate(self, cli_runner, temp_db, sample_client):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "client", "deactivate", sample_client.id]
        )
        assert result.exit_code == 0
        assert "inactive" in result.output

    def test_delete_with_jobs_fails(self, cli_runner, temp_db, sample_job):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "client", "delete", "Rahim Traders"]
        )
        assert result.exit_code == 1
        assert "Cannot delete" in result.output

    def test_unknown_client(self, cli_runner, temp_db):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "client", "show", "Nobody"]
        )
        assert result.exit_code == 1
        assert "Client 'Nobody' not found" in result.output
