"""End-to-end tests for the click CLI."""

import pytest
from click.testing import CliRunner

from jobcard.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    env = {"JOBCARD_DATA_DIR": str(tmp_path / "data"), "JOBCARD_DATABASE_URL": None}

    def invoke(*args):
        return runner.invoke(cli, list(args), env=env)

    return invoke


def _setup_shop(run):
    assert run("user", "add", "--id", "mia", "--name", "Mia", "--role", "mechanic").exit_code == 0
    assert run("user", "add", "--id", "sam", "--name", "Sam", "--role", "manager").exit_code == 0
    result = run(
        "inventory", "add", "--name", "Brake Pad",
        "--cost-price", "12.00", "--sale-price", "20.00", "--quantity", "6",
    )
    assert result.exit_code == 0, result.output
    assert "Item #1 'Brake Pad' added" in result.output


def test_full_job_flow(run, tmp_path):
    _setup_shop(run)

    result = run("job", "create", "--customer", "cust-1", "--vehicle", "ABC-123", "--discount-eligible")
    assert result.exit_code == 0, result.output
    assert "Job #1 created  (status=Scheduled)" in result.output

    assert run("job", "assign", "--id", "1", "--mechanic", "mia").exit_code == 0
    assert run("job", "start", "--id", "1", "--as", "mia").exit_code == 0

    result = run("job", "add-part", "--id", "1", "--as", "mia", "--item", "1", "--quantity", "2")
    assert result.exit_code == 0, result.output
    assert "Added 2 x Brake Pad at $20.00 to job #1." in result.output

    result = run(
        "job", "add-labor", "--id", "1", "--as", "mia",
        "--description", "Brake job", "--cost", "50.00",
    )
    assert result.exit_code == 0, result.output

    result = run("job", "complete", "--id", "1", "--as", "mia")
    assert result.exit_code == 0, result.output
    assert "$85.50" in result.output

    invoice = (tmp_path / "data" / "outbox" / "invoice-1.txt").read_text()
    assert "Total Amount: $85.50" in invoice

    result = run("inventory", "show")
    assert "Brake Pad" in result.output
    result = run("job", "show", "--id", "1")
    assert "status=Completed" in result.output


def test_wrong_mechanic_is_rejected(run):
    _setup_shop(run)
    run("job", "create", "--customer", "c", "--vehicle", "v")
    run("job", "assign", "--id", "1", "--mechanic", "mia")
    result = run("job", "start", "--id", "1", "--as", "sam")
    assert result.exit_code != 0
    assert "Not authorized" in result.output


def test_manager_cannot_be_assigned(run):
    _setup_shop(run)
    run("job", "create", "--customer", "c", "--vehicle", "v")
    result = run("job", "assign", "--id", "1", "--mechanic", "sam")
    assert result.exit_code != 0


def test_insufficient_stock_reported(run):
    _setup_shop(run)
    run("job", "create", "--customer", "c", "--vehicle", "v")
    run("job", "assign", "--id", "1", "--mechanic", "mia")
    run("job", "start", "--id", "1", "--as", "mia")
    result = run("job", "add-part", "--id", "1", "--as", "mia", "--item", "1", "--quantity", "7")
    assert result.exit_code != 0
    assert "Insufficient stock for Brake Pad (need 7, have 6 available)" in result.output
    assert "No items are low on stock." in run("inventory", "low-stock").output


def test_low_stock_listing(run):
    _setup_shop(run)
    assert "No items are low on stock." in run("inventory", "low-stock").output
    result = run("inventory", "deduct", "--item", "1", "--quantity", "2")
    assert "Brake Pad: 4 units left." in result.output
    assert "Brake Pad" in run("inventory", "low-stock").output


def test_empty_listings(run):
    assert "No jobs found." in run("job", "list").output
    assert "No users found." in run("user", "list").output
    assert "No inventory records found." in run("inventory", "show").output


def test_missing_config_file(run, tmp_path):
    result = run("--config", str(tmp_path / "missing.toml"), "job", "list")
    assert result.exit_code != 0
    assert "Config file not found" in result.output


def test_delete_item(run):
    _setup_shop(run)
    run("job", "create", "--customer", "c", "--vehicle", "v")
    run("job", "assign", "--id", "1", "--mechanic", "mia")
    run("job", "start", "--id", "1", "--as", "mia")
    run("job", "add-part", "--id", "1", "--as", "mia", "--item", "1", "--quantity", "1")

    result = run("inventory", "delete", "--id", "1")
    assert result.exit_code != 0
    assert "open job(s) #1" in result.output

    run("job", "complete", "--id", "1", "--as", "mia")
    result = run("inventory", "delete", "--id", "1")
    assert result.exit_code == 0, result.output
    assert "Item #1 'Brake Pad' deleted." in result.output
    assert "No inventory records found." in run("inventory", "show").output
